from payouts.services.commission_settings import (
    CommissionSettings,
    DEFAULT_COMMISSION_SETTINGS,
    effective_settings,
    settings_snapshots_from_records,
    attach_settings_snapshots,
)
from payouts.services.hierarchy import get_parent_chain
from payouts.services.commission import (
    calculate_commission_for_sale,
    get_commission_rate,
    get_hierarchy_bonus_rate,
    DEFAULT_TIER_RATES,
    DEFAULT_HIERARCHY_BONUS_RATES,
)
from payouts.services.campaign import calculate_campaign_bonus
from payouts.services.monthly import calculate_monthly_commissions
from payouts.services.summary import (
    generate_commission_summary,
    build_agency_totals,
    payable_agency_ids,
)

__all__ = [
    'CommissionSettings',
    'DEFAULT_COMMISSION_SETTINGS',
    'effective_settings',
    'settings_snapshots_from_records',
    'attach_settings_snapshots',
    'get_parent_chain',
    'calculate_commission_for_sale',
    'get_commission_rate',
    'get_hierarchy_bonus_rate',
    'DEFAULT_TIER_RATES',
    'DEFAULT_HIERARCHY_BONUS_RATES',
    'calculate_campaign_bonus',
    'calculate_monthly_commissions',
    'generate_commission_summary',
    'build_agency_totals',
    'payable_agency_ids',
]
