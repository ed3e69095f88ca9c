"""
Monthly Commission Service

Builds a month's payout ledger from confirmed sales:
- One direct record per sale for the selling agency
- One hierarchy bonus record per rewarded ancestor of that sale
- Campaign bonus added to each agency's first record of the month
- Agencies below the minimum payout are carried forward as a whole

Output order follows the order of the sales passed in.
"""

import logging
from collections.abc import Sequence
from typing import Any, Dict, List, Optional

from payouts.models.agency import Agency
from payouts.models.commission_record import CommissionRecord
from payouts.models.product import Product
from payouts.models.sale import Sale
from payouts.services.campaign import calculate_campaign_bonus
from payouts.services.commission import calculate_commission_for_sale
from payouts.services.commission_settings import (
    DEFAULT_COMMISSION_SETTINGS,
    coerce_settings,
    effective_settings,
    minimum_payment_amount,
)
from payouts.services.hierarchy import get_parent_chain

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown"


def carry_forward_reason(minimum_amount: int) -> str:
    return f"Below minimum payment amount (¥{minimum_amount:,})"


def _require_sequence(name: str, value: Any) -> None:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"{name} must be a list, got {type(value).__name__}")


def _direct_row(sale: Sale, agency: Agency, product: Optional[Product],
                month: str, commission: Dict[str, Any], applied: Dict[str, Any]) -> Dict[str, Any]:
    details = dict(commission["calculation_details"])
    details["applied_settings"] = applied
    return {
        "agency_id": agency.id,
        "sale_id": sale.id,
        "month": month,
        "tier_level": agency.tier_level,
        "base_amount": commission["base_amount"],
        "tier_bonus": 0,
        "campaign_bonus": 0,
        "invoice_deduction": commission["invoice_deduction"],
        "withholding_tax": commission.get("withholding_tax"),
        "final_amount": commission["final_amount"],
        "status": CommissionRecord.STATUS_CONFIRMED,
        "carry_forward_reason": None,
        "agency_name": agency.company_name,
        "company_type": agency.company_type,
        "sale_number": sale.sale_number,
        "product_name": product.name if product else UNKNOWN_PRODUCT_NAME,
        "sale_amount": sale.total_amount,
        "hierarchy_bonus_from": None,
        "calculation_details": details,
    }


def _bonus_row(sale: Sale, agency: Agency, parent: Agency, product: Optional[Product],
               month: str, parent_commission: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "agency_id": parent.id,
        "sale_id": sale.id,
        "month": month,
        "tier_level": parent.tier_level,
        "base_amount": 0,
        "tier_bonus": parent_commission["amount"],
        "campaign_bonus": 0,
        "invoice_deduction": 0,
        "withholding_tax": 0,
        "final_amount": parent_commission["amount"],
        "status": CommissionRecord.STATUS_CONFIRMED,
        "carry_forward_reason": None,
        "agency_name": parent.company_name,
        "company_type": parent.company_type,
        "sale_number": sale.sale_number,
        "product_name": product.name if product else UNKNOWN_PRODUCT_NAME,
        "sale_amount": sale.total_amount,
        "hierarchy_bonus_from": agency.company_name,
        "calculation_details": {
            "bonus_rate": str(parent_commission["bonus_rate"]),
            "tier_difference": parent_commission["tier_difference"],
            "sale_amount": sale.total_amount,
        },
    }


def calculate_monthly_commissions(
    sales: List[Sale],
    agencies: List[Agency],
    products: Optional[List[Product]],
    month: str,
    settings: Any = None,
) -> List[CommissionRecord]:
    """
    Calculate every commission record for a month.

    Args:
        sales: Confirmed sales of the month, in processing order
        agencies: Active agencies (sellers and their ancestors)
        products: Products referenced by the sales, may be None
        month: Target month as "YYYY-MM"
        settings: Batch CommissionSettings (or dict) for sales without a
            snapshot; also supplies the minimum payment amount

    Returns:
        New CommissionRecord instances, a sale's direct record followed by
        its hierarchy bonus records
    """
    _require_sequence("sales", sales)
    _require_sequence("agencies", agencies)
    if products is not None:
        _require_sequence("products", products)

    batch_settings = coerce_settings(settings)
    agency_map = {agency.id: agency for agency in agencies}
    product_map = {product.id: product for product in products or []}

    rows: List[Dict[str, Any]] = []
    skipped = 0

    for sale in sales:
        agency = agency_map.get(sale.agency_id)
        if agency is None:
            skipped += 1
            logger.debug(f"Skipping sale {sale.id}: agency {sale.agency_id} not found")
            continue

        product = product_map.get(sale.product_id)
        parent_chain = get_parent_chain(agency.id, agency_map)
        sale_settings = effective_settings(sale, batch_settings)

        commission = calculate_commission_for_sale(
            sale, agency, product, parent_chain, sale_settings
        )
        applied = (sale_settings or DEFAULT_COMMISSION_SETTINGS).with_defaults().to_snapshot()
        rows.append(_direct_row(sale, agency, product, month, commission, applied))

        for parent_commission in commission["parent_commissions"]:
            parent = agency_map[parent_commission["agency_id"]]
            rows.append(_bonus_row(sale, agency, parent, product, month, parent_commission))

    _apply_campaign_and_minimum(rows, minimum_payment_amount(batch_settings))

    records = [CommissionRecord(**row) for row in rows]
    logger.info(
        f"Calculated {len(records)} commission records for {month} "
        f"({len(sales)} sales, {skipped} skipped)"
    )
    return records


def _apply_campaign_and_minimum(rows: List[Dict[str, Any]], minimum_amount: int) -> None:
    """Fold campaign bonuses in and carry forward agencies under the minimum."""
    first_row: Dict[int, Dict[str, Any]] = {}
    rows_by_agency: Dict[int, List[Dict[str, Any]]] = {}
    totals: Dict[int, Dict[str, int]] = {}

    for row in rows:
        agency_id = row["agency_id"]
        if agency_id not in first_row:
            first_row[agency_id] = row
            rows_by_agency[agency_id] = []
            totals[agency_id] = {"total_sales": 0, "total_amount": 0}
        rows_by_agency[agency_id].append(row)
        # Bonus rows count the full downstream sale toward the ancestor
        totals[agency_id]["total_sales"] += row["sale_amount"] or 0
        totals[agency_id]["total_amount"] += row["final_amount"]

    reason = carry_forward_reason(minimum_amount)

    for agency_id, first in first_row.items():
        summary = totals[agency_id]
        campaign_bonus = calculate_campaign_bonus(summary["total_sales"], first["tier_level"])
        if campaign_bonus > 0:
            first["campaign_bonus"] += campaign_bonus
            first["final_amount"] += campaign_bonus
            summary["total_amount"] += campaign_bonus

        if summary["total_amount"] < minimum_amount:
            for row in rows_by_agency[agency_id]:
                row["status"] = CommissionRecord.STATUS_CARRIED_FORWARD
                row["carry_forward_reason"] = reason
