#!/usr/bin/env python3
"""
Monthly Commission Dry Run

Usage:
    python scripts/calculate_month.py path/to/snapshot.json [YYYY-MM]

The snapshot file holds one month of input:
    {
        "month": "2024-05",
        "agencies": [{"id": 1, "company_name": "...", "tier_level": 1, ...}],
        "products": [{"id": 1, "name": "...", "tier1_commission_rate": 12}],
        "sales": [{"id": 1, "agency_id": 1, "total_amount": 100000, ...}],
        "settings": {"minimum_payment_amount": 10000}
    }

Behavior:
    - Runs the commission engine in memory, nothing is written to a database
    - COMMISSION_* environment variables supply batch settings when the
      snapshot has none
    - Prints the ledger and the summary totals
"""

import json
import sys
import os
from datetime import date

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from payouts.config import configure_logging, settings_from_env
from payouts.models import Agency, Product, Sale
from payouts.services import calculate_monthly_commissions, generate_commission_summary
from payouts.services.validators import (
    validate_agency_hierarchy,
    validate_commission_settings,
    validate_month,
)


def _sale_from_row(row: dict) -> Sale:
    row = dict(row)
    if isinstance(row.get("sale_date"), str):
        row["sale_date"] = date.fromisoformat(row["sale_date"])
    return Sale(**row)


def load_snapshot(path: str) -> dict:
    """Read a snapshot file into transient model instances."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    return {
        "month": data.get("month"),
        "agencies": [Agency(**row) for row in data.get("agencies", [])],
        "products": [Product(**row) for row in data.get("products", [])],
        "sales": [_sale_from_row(row) for row in data.get("sales", [])],
        "settings": data.get("settings"),
    }


def run(path: str, month: str = None):
    snapshot = load_snapshot(path)
    month = validate_month(month or snapshot["month"])

    hierarchy = validate_agency_hierarchy(snapshot["agencies"])
    for warning in hierarchy.warnings:
        print(f"[WARN] {warning}")

    if snapshot["settings"]:
        checked = validate_commission_settings(snapshot["settings"])
        for warning in checked.warnings:
            print(f"[WARN] {warning}")
        checked.raise_if_invalid()

    settings = snapshot["settings"] or settings_from_env()
    records = calculate_monthly_commissions(
        snapshot["sales"], snapshot["agencies"], snapshot["products"], month, settings
    )

    print()
    print(f"{'Agency':<30} {'Sale':<12} {'Base':>10} {'Bonus':>10} {'Campaign':>10} {'Final':>10}  Status")
    for record in records:
        print(
            f"{(record.agency_name or '')[:30]:<30} {(record.sale_number or ''):<12} "
            f"{record.base_amount:>10,} {record.tier_bonus:>10,} "
            f"{record.campaign_bonus:>10,} {record.final_amount:>10,}  {record.status}"
        )

    summary = generate_commission_summary(records)
    print()
    print("=" * 50)
    print(f"SUMMARY {month}")
    print("=" * 50)
    print(f"Records:              {summary['total_records']}")
    print(f"Agencies:             {summary['total_agencies']}")
    print(f"Total payable:        {summary['total_payable']:,}")
    print(f"Total carried fwd:    {summary['total_carried_forward']:,}")
    for tier, values in sorted(summary["by_tier"].items()):
        print(f"  Tier {tier}: {values['count']} records, {values['total_commission']:,}")
    print()


# =============================================================================
# ENTRY POINT
# =============================================================================


if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("Usage: python scripts/calculate_month.py <snapshot.json> [YYYY-MM]")
        print("Example: python scripts/calculate_month.py data/2024-05.json")
        sys.exit(1)

    configure_logging()
    run(sys.argv[1], sys.argv[2] if len(sys.argv) == 3 else None)
