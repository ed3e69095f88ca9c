"""
Commission Settings

Rates that may change over time (ancestor bonuses, deductions, the minimum
payout). Each sale carries a frozen copy of the settings in force when it was
registered; resolution for a sale is:

1. the sale's own snapshot
2. the batch-level settings passed to the monthly run
3. the hard-coded defaults below (per field)
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, field_validator


DEFAULT_TIER1_FROM_TIER2_BONUS = Decimal("2.00")
DEFAULT_TIER2_FROM_TIER3_BONUS = Decimal("1.50")
DEFAULT_TIER3_FROM_TIER4_BONUS = Decimal("1.00")
DEFAULT_NON_INVOICE_DEDUCTION_RATE = Decimal("2.00")
DEFAULT_WITHHOLDING_TAX_RATE = Decimal("10.21")
DEFAULT_MINIMUM_PAYMENT_AMOUNT = 10000

# Fields where a stored 0 means "use the default" rather than a real zero.
# Hierarchy bonus overrides are not among them: 0 there disables the bonus.
ZERO_MEANS_DEFAULT_FIELDS = (
    "non_invoice_deduction_rate",
    "withholding_tax_rate",
    "minimum_payment_amount",
)


class CommissionSettings(BaseModel):
    """Immutable settings snapshot. Unset fields mean "use the default"."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tier1_from_tier2_bonus: Optional[Decimal] = None
    tier2_from_tier3_bonus: Optional[Decimal] = None
    tier3_from_tier4_bonus: Optional[Decimal] = None
    non_invoice_deduction_rate: Optional[Decimal] = None
    withholding_tax_rate: Optional[Decimal] = None
    minimum_payment_amount: Optional[int] = None

    @field_validator(
        "tier1_from_tier2_bonus",
        "tier2_from_tier3_bonus",
        "tier3_from_tier4_bonus",
        "non_invoice_deduction_rate",
        "withholding_tax_rate",
        mode="before",
    )
    @classmethod
    def _float_to_decimal(cls, value: Any) -> Any:
        # Stored JSON snapshots hold floats; 10.21 must stay 10.21
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    def hierarchy_bonus_override(self, ancestor_tier: int) -> Optional[Decimal]:
        """Explicit bonus rate for an ancestor of the given tier, if any."""
        return {
            1: self.tier1_from_tier2_bonus,
            2: self.tier2_from_tier3_bonus,
            3: self.tier3_from_tier4_bonus,
        }.get(ancestor_tier)

    def with_defaults(self) -> "CommissionSettings":
        """Return a copy with every unset field filled from the defaults."""
        values = DEFAULT_COMMISSION_SETTINGS.model_dump()
        values.update(
            (field, value)
            for field, value in self.model_dump(exclude_none=True).items()
            if value or field not in ZERO_MEANS_DEFAULT_FIELDS
        )
        return CommissionSettings(**values)

    def to_snapshot(self) -> Dict[str, Any]:
        """JSON-safe dict suitable for Sale.settings_snapshot."""
        return self.model_dump(mode="json", exclude_none=True)


DEFAULT_COMMISSION_SETTINGS = CommissionSettings(
    tier1_from_tier2_bonus=DEFAULT_TIER1_FROM_TIER2_BONUS,
    tier2_from_tier3_bonus=DEFAULT_TIER2_FROM_TIER3_BONUS,
    tier3_from_tier4_bonus=DEFAULT_TIER3_FROM_TIER4_BONUS,
    non_invoice_deduction_rate=DEFAULT_NON_INVOICE_DEDUCTION_RATE,
    withholding_tax_rate=DEFAULT_WITHHOLDING_TAX_RATE,
    minimum_payment_amount=DEFAULT_MINIMUM_PAYMENT_AMOUNT,
)


def coerce_settings(settings: Any) -> Optional[CommissionSettings]:
    """Accept a CommissionSettings, a plain dict, or None."""
    if settings is None or isinstance(settings, CommissionSettings):
        return settings
    return CommissionSettings.model_validate(settings)


def effective_settings(sale, batch_settings: Any = None) -> Optional[CommissionSettings]:
    """Settings that apply to one sale: its snapshot, else the batch settings."""
    snapshot = sale.applied_settings
    if snapshot is not None:
        return snapshot
    return coerce_settings(batch_settings)


def minimum_payment_amount(settings: Optional[CommissionSettings]) -> int:
    if settings is None:
        return DEFAULT_MINIMUM_PAYMENT_AMOUNT
    return settings.minimum_payment_amount or DEFAULT_MINIMUM_PAYMENT_AMOUNT


def settings_snapshots_from_records(records: Iterable) -> Dict[int, CommissionSettings]:
    """
    Rebuild per-sale settings from a previously calculated ledger.

    Direct records store the fully resolved settings under
    calculation_details["applied_settings"]. Recalculating a month feeds
    these back so the rates of the earlier run are replayed.

    Args:
        records: CommissionRecord instances or row dicts

    Returns:
        Mapping of sale_id to CommissionSettings
    """
    snapshots: Dict[int, CommissionSettings] = {}
    for record in records:
        if isinstance(record, dict):
            sale_id = record.get("sale_id")
            details = record.get("calculation_details")
        else:
            sale_id = record.sale_id
            details = record.calculation_details
        if sale_id is None or not details:
            continue
        applied = details.get("applied_settings")
        if applied and sale_id not in snapshots:
            snapshots[sale_id] = CommissionSettings.model_validate(applied)
    return snapshots


def attach_settings_snapshots(
    sales: Iterable,
    snapshots: Dict[int, CommissionSettings],
    fallback: Any = None,
) -> None:
    """
    Store a settings snapshot on every sale that does not have one yet.

    Sales found in `snapshots` get their recorded settings; the rest get
    `fallback` (typically the defaults for legacy rows) when it is given.
    """
    fallback = coerce_settings(fallback)
    for sale in sales:
        if sale.settings_snapshot is not None:
            continue
        settings = snapshots.get(sale.id, fallback)
        if settings is not None:
            sale.settings_snapshot = settings.to_snapshot()
