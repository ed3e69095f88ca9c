"""
Unit tests for caller-side validators.
"""

import pytest
from datetime import date

from payouts.services.validators import (
    ValidationResult,
    month_date_range,
    validate_agency_hierarchy,
    validate_commission_settings,
    validate_month,
)


class TestValidateMonth:
    """Tests for validate_month and month_date_range."""

    def test_valid_month(self):
        assert validate_month(" 2024-05 ") == "2024-05"

    @pytest.mark.parametrize("month", ["2024-5", "202405", "May 2024", "2024-05-01"])
    def test_bad_format(self, month):
        with pytest.raises(ValueError, match="YYYY-MM"):
            validate_month(month)

    @pytest.mark.parametrize("month", ["2024-00", "2024-13"])
    def test_month_out_of_range(self, month):
        with pytest.raises(ValueError, match="out of range"):
            validate_month(month)

    def test_empty_month(self):
        with pytest.raises(ValueError, match="required"):
            validate_month("")

    def test_date_range_leap_february(self):
        assert month_date_range("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))

    def test_date_range_december(self):
        assert month_date_range("2023-12") == (date(2023, 12, 1), date(2023, 12, 31))


class TestValidateCommissionSettings:
    """Tests for validate_commission_settings function."""

    def test_valid_settings(self):
        result = validate_commission_settings({
            "tier1_from_tier2_bonus": 2.0,
            "withholding_tax_rate": "10.21",
            "minimum_payment_amount": 10000,
        })
        assert result.is_valid
        assert result.warnings == []

    def test_rate_out_of_range(self):
        result = validate_commission_settings({"non_invoice_deduction_rate": 120})
        assert not result.is_valid
        assert "non_invoice_deduction_rate must be between 0 and 100" in result.errors

    def test_rate_not_a_number(self):
        result = validate_commission_settings({"withholding_tax_rate": "ten"})
        assert result.errors == ["withholding_tax_rate must be a number"]

    def test_negative_minimum(self):
        result = validate_commission_settings({"minimum_payment_amount": -1})
        with pytest.raises(ValueError, match="cannot be negative"):
            result.raise_if_invalid()

    def test_fractional_minimum(self):
        result = validate_commission_settings({"minimum_payment_amount": 99.5})
        assert not result.is_valid

    def test_zero_minimum_warns(self):
        result = validate_commission_settings({"minimum_payment_amount": 0})
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "falls back to the default of 10,000" in result.warnings[0]

    def test_zero_deduction_and_withholding_rates_warn(self):
        result = validate_commission_settings({
            "non_invoice_deduction_rate": 0,
            "withholding_tax_rate": "0",
        })
        assert result.is_valid
        assert result.warnings == [
            "A non_invoice_deduction_rate of 0 falls back to the default rate",
            "A withholding_tax_rate of 0 falls back to the default rate",
        ]

    def test_zero_bonus_rate_does_not_warn(self):
        result = validate_commission_settings({"tier3_from_tier4_bonus": 0})
        assert result.is_valid
        assert result.warnings == []

    def test_empty_values_skipped(self):
        assert validate_commission_settings({"withholding_tax_rate": ""}).is_valid


class TestValidateAgencyHierarchy:
    """Tests for validate_agency_hierarchy function."""

    def test_clean_tree(self, make_agency):
        agencies = [
            make_agency(1, 1),
            make_agency(2, 2, parent_agency_id=1),
            make_agency(3, 3, parent_agency_id=2),
        ]
        result = validate_agency_hierarchy(agencies)
        assert result.warnings == []

    def test_missing_parent(self, make_agency):
        result = validate_agency_hierarchy([make_agency(2, 2, parent_agency_id=7)])
        assert result.warnings == ["Agency 2 has parent 7 which is not loaded"]

    def test_parent_not_senior(self, make_agency):
        agencies = [make_agency(1, 3), make_agency(2, 2, parent_agency_id=1)]
        result = validate_agency_hierarchy(agencies)
        assert any("tier 2" in w for w in result.warnings)
        assert result.is_valid

    def test_cycle(self, make_agency):
        agencies = [
            make_agency(1, 1, parent_agency_id=2),
            make_agency(2, 2, parent_agency_id=1),
        ]
        result = validate_agency_hierarchy(agencies)
        assert "Agency 1 is part of a parent cycle" in result.warnings
        assert "Agency 2 is part of a parent cycle" in result.warnings

    def test_too_deep(self, make_agency):
        agencies = [make_agency(1, 1)] + [
            make_agency(i, 4, parent_agency_id=i - 1) for i in range(2, 13)
        ]
        result = validate_agency_hierarchy(agencies)
        assert "Agency 12 has more than 10 ancestors" in result.warnings


class TestValidationResult:
    """Tests for ValidationResult container."""

    def test_raise_joins_errors(self):
        result = ValidationResult()
        result.add_error("a")
        result.add_error("b")
        with pytest.raises(ValueError, match="a; b"):
            result.raise_if_invalid()
