"""
Unit tests for the campaign bonus evaluator.

Rules:
1. Sales >= tier threshold => floor(sales × rate)
2. Sales >= half the threshold => floor(sales × rate × 0.5)
3. Otherwise => 0
"""

import pytest
from payouts.services.campaign import calculate_campaign_bonus


class TestCalculateCampaignBonus:
    """Tests for calculate_campaign_bonus function."""

    @pytest.mark.parametrize(
        "tier_level,threshold,expected",
        [
            (1, 5000000, 250000),
            (2, 3000000, 120000),
            (3, 2000000, 60000),
            (4, 1000000, 20000),
        ],
    )
    def test_exactly_at_threshold_pays_full_rate(self, tier_level, threshold, expected):
        assert calculate_campaign_bonus(threshold, tier_level) == expected

    def test_exactly_at_half_threshold_pays_half_rate(self):
        # 2,500,000 × 5% × 0.5
        assert calculate_campaign_bonus(2500000, 1) == 62500

    def test_one_below_half_threshold_pays_nothing(self):
        assert calculate_campaign_bonus(2499999, 1) == 0

    def test_between_half_and_full(self):
        # 1,500,001 × 4% × 0.5 = 30000.02 -> 30000
        assert calculate_campaign_bonus(1500001, 2) == 30000

    def test_above_threshold_truncates(self):
        # 1,000,049 × 2% = 20000.98 -> 20000
        assert calculate_campaign_bonus(1000049, 4) == 20000

    def test_unknown_tier_uses_fallback(self):
        assert calculate_campaign_bonus(1000000, 7) == 20000
        assert calculate_campaign_bonus(500000, None) == 5000
        assert calculate_campaign_bonus(499999, 0) == 0

    def test_zero_sales(self):
        assert calculate_campaign_bonus(0, 1) == 0
