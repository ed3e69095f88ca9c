"""
Runtime configuration read from the environment (and a local .env file).
"""

import logging
import os
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv

from payouts.services.commission_settings import CommissionSettings

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Environment variable -> CommissionSettings field
SETTINGS_ENV_VARS = {
    "COMMISSION_TIER1_FROM_TIER2_BONUS": "tier1_from_tier2_bonus",
    "COMMISSION_TIER2_FROM_TIER3_BONUS": "tier2_from_tier3_bonus",
    "COMMISSION_TIER3_FROM_TIER4_BONUS": "tier3_from_tier4_bonus",
    "COMMISSION_NON_INVOICE_DEDUCTION_RATE": "non_invoice_deduction_rate",
    "COMMISSION_WITHHOLDING_TAX_RATE": "withholding_tax_rate",
    "COMMISSION_MINIMUM_PAYMENT_AMOUNT": "minimum_payment_amount",
}


def configure_logging(level: Optional[str] = None):
    """Set up root logging for scripts and scheduled jobs."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def settings_from_env() -> Optional[CommissionSettings]:
    """
    Batch-level commission settings from COMMISSION_* variables.

    Returns None when none are set, so the hard-coded defaults apply.
    """
    values = {}
    for env_var, field in SETTINGS_ENV_VARS.items():
        raw = os.getenv(env_var)
        if raw is None or raw.strip() == "":
            continue
        raw = raw.strip().replace(",", "")
        values[field] = int(raw) if field == "minimum_payment_amount" else Decimal(raw)
    if not values:
        return None
    return CommissionSettings(**values)
