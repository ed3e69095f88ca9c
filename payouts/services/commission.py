"""
Per-Sale Commission Calculation Service

Handles, in this order:
- Base commission (product tier rate, else the default tier table)
- Hierarchy bonuses for ancestor agencies (off the raw sale amount)
- Deduction for agencies not registered as invoice issuers
- Withholding tax for individual payees

Every money amount is truncated toward negative infinity, never rounded.
"""

from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, List, Optional

from payouts.models.agency import Agency
from payouts.models.product import Product
from payouts.models.sale import Sale
from payouts.services.commission_settings import (
    CommissionSettings,
    DEFAULT_NON_INVOICE_DEDUCTION_RATE,
    DEFAULT_WITHHOLDING_TAX_RATE,
)

# Percent of the sale paid to the selling agency, by its tier
DEFAULT_TIER_RATES = {
    1: Decimal("10.00"),
    2: Decimal("8.00"),
    3: Decimal("6.00"),
    4: Decimal("4.00"),
}
FALLBACK_TIER_RATE = Decimal("4.00")

# Percent of a descendant's sale paid to an ancestor, by the ancestor's tier
DEFAULT_HIERARCHY_BONUS_RATES = {
    1: Decimal("2.0"),
    2: Decimal("1.5"),
    3: Decimal("1.0"),
    4: Decimal("0"),
}

HUNDRED = Decimal("100")


def truncate_amount(value: Decimal) -> int:
    """Floor a Decimal money value to whole currency units."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def percent_of(amount: int, rate: Decimal) -> int:
    """floor(amount × rate / 100)"""
    return truncate_amount(Decimal(amount) * rate / HUNDRED)


def get_commission_rate(tier_level: int, product: Optional[Product] = None) -> Decimal:
    """Product override for the tier when configured, else the default table."""
    if product is not None:
        override = product.commission_rate_for_tier(tier_level)
        if override is not None:
            return override
    return DEFAULT_TIER_RATES.get(tier_level, FALLBACK_TIER_RATE)


def get_hierarchy_bonus_rate(
    ancestor_tier: int, settings: Optional[CommissionSettings] = None
) -> Decimal:
    if settings is not None:
        override = settings.hierarchy_bonus_override(ancestor_tier)
        if override is not None:
            return override
    return DEFAULT_HIERARCHY_BONUS_RATES.get(ancestor_tier, Decimal("0"))


def _setting_or_default(value: Optional[Decimal], default: Decimal) -> Decimal:
    # A stored rate of 0 counts as unset for deductions and withholding
    return value or default


def calculate_commission_for_sale(
    sale: Sale,
    agency: Agency,
    product: Optional[Product] = None,
    parent_chain: Optional[List[Agency]] = None,
    settings: Optional[CommissionSettings] = None,
) -> Dict[str, Any]:
    """
    Calculate one sale's commission breakdown.

    Args:
        sale: The sale being paid out
        agency: The agency that made the sale
        product: The sold product, for per-tier rate overrides
        parent_chain: Ancestor agencies, nearest first
        settings: Settings in effect for this sale

    Returns:
        Dictionary with:
        - base_amount
        - tier_bonus (sum of the parent_commissions amounts)
        - invoice_deduction
        - withholding_tax (only present when withholding applies)
        - final_amount
        - parent_commissions (one entry per rewarded ancestor)
        - calculation_details
    """
    total_amount = sale.total_amount
    commission_rate = get_commission_rate(agency.tier_level, product)
    base_amount = percent_of(total_amount, commission_rate)

    details: Dict[str, Any] = {
        "commission_rate": str(commission_rate),
        "sale_amount": total_amount,
    }

    parent_commissions = []
    for parent in parent_chain or []:
        if parent.tier_level >= agency.tier_level:
            continue
        bonus_rate = get_hierarchy_bonus_rate(parent.tier_level, settings)
        if bonus_rate <= 0:
            continue
        parent_commissions.append(
            {
                "agency_id": parent.id,
                "agency_name": parent.company_name,
                "tier_level": parent.tier_level,
                "amount": percent_of(total_amount, bonus_rate),
                "tier_difference": agency.tier_level - parent.tier_level,
                "bonus_rate": bonus_rate,
            }
        )

    invoice_deduction = 0
    if agency.invoice_registered:
        details["invoice_registered"] = True
    else:
        deduction_rate = _setting_or_default(
            settings.non_invoice_deduction_rate if settings else None,
            DEFAULT_NON_INVOICE_DEDUCTION_RATE,
        )
        invoice_deduction = percent_of(base_amount, deduction_rate)
        details["invoice_registered"] = False
        details["invoice_deduction_rate"] = str(deduction_rate)
        details["invoice_deduction"] = invoice_deduction

    result: Dict[str, Any] = {
        "agency_id": agency.id,
        "sale_id": sale.id,
        "tier_level": agency.tier_level,
        "base_amount": base_amount,
        "tier_bonus": sum(p["amount"] for p in parent_commissions),
        "invoice_deduction": invoice_deduction,
        "parent_commissions": parent_commissions,
    }

    withholding_tax = 0
    if agency.is_withholding_subject:
        withholding_rate = _setting_or_default(
            settings.withholding_tax_rate if settings else None,
            DEFAULT_WITHHOLDING_TAX_RATE,
        )
        # Withheld on the amount left after the invoice deduction
        withholding_tax = percent_of(base_amount - invoice_deduction, withholding_rate)
        result["withholding_tax"] = withholding_tax
        details["withholding_rate"] = str(withholding_rate)
        details["withholding_tax"] = withholding_tax

    final_amount = base_amount - invoice_deduction - withholding_tax
    details["before_tax"] = base_amount
    details["after_tax"] = final_amount

    result["final_amount"] = final_amount
    result["calculation_details"] = details
    return result
