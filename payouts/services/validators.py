"""
Input Validators

Checks that callers run before handing a month to the commission engine.
The engine itself trusts its input; these raise ValueError (or collect
errors in a ValidationResult) with human-readable messages.
"""

import calendar
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Tuple

from payouts.models.agency import Agency
from payouts.services.commission_settings import ZERO_MEANS_DEFAULT_FIELDS
from payouts.services.hierarchy import MAX_CHAIN_DEPTH

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

RATE_FIELDS = [
    "tier1_from_tier2_bonus",
    "tier2_from_tier3_bonus",
    "tier3_from_tier4_bonus",
    "non_invoice_deduction_rate",
    "withholding_tax_rate",
]


class ValidationResult:
    """Container for validation results including warnings."""
    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, msg: str):
        self.errors.append(msg)

    def add_warning(self, msg: str):
        self.warnings.append(msg)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        """Raise ValueError if there are blocking errors."""
        if self.errors:
            raise ValueError("; ".join(self.errors))


def _is_empty(value: Any) -> bool:
    """Check if value is None or empty string."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


# ============================================================
# MONTH
# ============================================================

def validate_month(month: str) -> str:
    """
    Validate a "YYYY-MM" month string.

    Returns:
        The stripped month string

    Raises:
        ValueError: if the format or month number is invalid
    """
    if _is_empty(month):
        raise ValueError("Month is required")
    month = month.strip()
    match = MONTH_PATTERN.match(month)
    if not match:
        raise ValueError(f"Month must be in YYYY-MM format, got '{month}'")
    if not 1 <= int(match.group(2)) <= 12:
        raise ValueError(f"Month number out of range in '{month}'")
    return month


def month_date_range(month: str) -> Tuple[date, date]:
    """First and last calendar day of a "YYYY-MM" month."""
    month = validate_month(month)
    year, month_num = (int(part) for part in month.split("-"))
    last_day = calendar.monthrange(year, month_num)[1]
    return date(year, month_num, 1), date(year, month_num, last_day)


# ============================================================
# COMMISSION SETTINGS
# ============================================================

def validate_commission_settings(data: Dict[str, Any]) -> ValidationResult:
    """
    Validate a commission settings payload before it is saved.

    Block: non-numeric or out-of-range (0-100) rates, a negative or
    non-integer minimum payment amount.
    Warn: a zero minimum payment amount or deduction/withholding rate, which
    the engine treats as unset and replaces with the default.
    """
    result = ValidationResult()

    for field in RATE_FIELDS:
        value = data.get(field)
        if _is_empty(value):
            continue
        try:
            rate = Decimal(str(value))
        except (InvalidOperation, ValueError):
            result.add_error(f"{field} must be a number")
            continue
        if rate < 0 or rate > 100:
            result.add_error(f"{field} must be between 0 and 100")
        elif rate == 0 and field in ZERO_MEANS_DEFAULT_FIELDS:
            result.add_warning(f"A {field} of 0 falls back to the default rate")

    minimum = data.get("minimum_payment_amount")
    if not _is_empty(minimum):
        if isinstance(minimum, bool) or not isinstance(minimum, int):
            result.add_error("minimum_payment_amount must be a whole amount")
        elif minimum < 0:
            result.add_error("minimum_payment_amount cannot be negative")
        elif minimum == 0:
            result.add_warning(
                "A minimum payment amount of 0 falls back to the default of 10,000"
            )

    return result


# ============================================================
# AGENCY HIERARCHY
# ============================================================

def validate_agency_hierarchy(agencies: List[Agency]) -> ValidationResult:
    """
    Check the parent links of a set of agencies.

    Warn (not block): a parent that is not in the set, a parent whose tier
    is not above its child's, and chains that loop or run deeper than the
    engine follows.
    """
    result = ValidationResult()
    agency_map = {agency.id: agency for agency in agencies}

    for agency in agencies:
        if agency.parent_agency_id is None:
            continue
        parent = agency_map.get(agency.parent_agency_id)
        if parent is None:
            result.add_warning(
                f"Agency {agency.id} has parent {agency.parent_agency_id} which is not loaded"
            )
            continue
        if parent.tier_level >= agency.tier_level:
            result.add_warning(
                f"Agency {agency.id} (tier {agency.tier_level}) has parent "
                f"{parent.id} at tier {parent.tier_level}"
            )

        seen = {agency.id}
        current = parent
        depth = 1
        while current is not None:
            if current.id in seen:
                result.add_warning(f"Agency {agency.id} is part of a parent cycle")
                break
            if depth > MAX_CHAIN_DEPTH:
                result.add_warning(
                    f"Agency {agency.id} has more than {MAX_CHAIN_DEPTH} ancestors"
                )
                break
            seen.add(current.id)
            current = agency_map.get(current.parent_agency_id)
            depth += 1

    return result
