"""
Commission Summary Service

Roll-up totals over a month's ledger for reporting and payout notices.
"""

from typing import Any, Dict, Iterable, List

from payouts.models.commission_record import CommissionRecord
from payouts.services.commission_settings import DEFAULT_MINIMUM_PAYMENT_AMOUNT


def generate_commission_summary(records: Iterable[CommissionRecord]) -> Dict[str, Any]:
    """
    Summarize a list of commission records.

    Args:
        records: CommissionRecord instances of one run

    Returns:
        Dictionary with running totals, payable vs carried-forward amounts
        and a by_tier breakdown of {count, total_sales, total_commission}
    """
    summary: Dict[str, Any] = {
        "total_records": 0,
        "total_agencies": 0,
        "total_sales": 0,
        "total_base_commission": 0,
        "total_tier_bonus": 0,
        "total_campaign_bonus": 0,
        "total_invoice_deduction": 0,
        "total_withholding_tax": 0,
        "total_final_amount": 0,
        "total_payable": 0,
        "total_carried_forward": 0,
        "by_tier": {},
    }
    agency_ids = set()

    for record in records:
        final_amount = record.final_amount or 0
        sale_amount = record.sale_amount or 0

        summary["total_records"] += 1
        agency_ids.add(record.agency_id)
        summary["total_sales"] += sale_amount
        summary["total_base_commission"] += record.base_amount or 0
        summary["total_tier_bonus"] += record.tier_bonus or 0
        summary["total_campaign_bonus"] += record.campaign_bonus or 0
        summary["total_invoice_deduction"] += record.invoice_deduction or 0
        summary["total_withholding_tax"] += record.withholding_tax or 0
        summary["total_final_amount"] += final_amount

        if record.status == CommissionRecord.STATUS_CARRIED_FORWARD:
            summary["total_carried_forward"] += final_amount
        else:
            summary["total_payable"] += final_amount

        tier = summary["by_tier"].setdefault(
            record.tier_level, {"count": 0, "total_sales": 0, "total_commission": 0}
        )
        tier["count"] += 1
        tier["total_sales"] += sale_amount
        tier["total_commission"] += final_amount

    summary["total_agencies"] = len(agency_ids)
    return summary


def build_agency_totals(records: Iterable[CommissionRecord]) -> List[Dict[str, Any]]:
    """Per-agency monthly totals, in order of each agency's first record."""
    totals: Dict[int, Dict[str, Any]] = {}
    for record in records:
        entry = totals.get(record.agency_id)
        if entry is None:
            entry = totals[record.agency_id] = {
                "agency_id": record.agency_id,
                "agency_name": record.agency_name,
                "tier_level": record.tier_level,
                "record_count": 0,
                "total_sales": 0,
                "total_amount": 0,
                "status": record.status,
            }
        entry["record_count"] += 1
        entry["total_sales"] += record.sale_amount or 0
        entry["total_amount"] += record.final_amount or 0
    return list(totals.values())


def payable_agency_ids(
    records: Iterable[CommissionRecord],
    minimum_amount: int = DEFAULT_MINIMUM_PAYMENT_AMOUNT,
) -> List[int]:
    """Agencies whose monthly total meets the minimum and get a payout notice."""
    return [
        entry["agency_id"]
        for entry in build_agency_totals(records)
        if entry["total_amount"] >= minimum_amount
    ]
