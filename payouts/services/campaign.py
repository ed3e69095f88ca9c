"""
Campaign Bonus Service

Monthly sales-target bonus by tier. Reaching the tier's threshold pays the
full rate on the month's sales; reaching half the threshold pays half.
"""

from decimal import Decimal

from payouts.services.commission import truncate_amount

# tier_level -> (monthly sales threshold, bonus rate)
CAMPAIGN_TARGETS = {
    1: (5000000, Decimal("0.05")),
    2: (3000000, Decimal("0.04")),
    3: (2000000, Decimal("0.03")),
    4: (1000000, Decimal("0.02")),
}
FALLBACK_CAMPAIGN_TARGET = (1000000, Decimal("0.02"))

PARTIAL_ACHIEVEMENT_RATIO = Decimal("0.5")


def calculate_campaign_bonus(total_sales: int, tier_level: int) -> int:
    """
    Calculate the campaign bonus for an agency's monthly sales.

    Args:
        total_sales: The agency's aggregated sales for the month
        tier_level: The agency's tier

    Returns:
        Bonus amount in whole currency units (0 below half the threshold)
    """
    threshold, bonus_rate = CAMPAIGN_TARGETS.get(tier_level, FALLBACK_CAMPAIGN_TARGET)
    sales = Decimal(total_sales or 0)

    if sales >= threshold:
        return truncate_amount(sales * bonus_rate)

    if sales >= threshold * PARTIAL_ACHIEVEMENT_RATIO:
        return truncate_amount(sales * bonus_rate * PARTIAL_ACHIEVEMENT_RATIO)

    return 0
