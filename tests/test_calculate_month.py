"""
Tests for the monthly dry-run script.
"""

import json

import pytest

from scripts.calculate_month import run


def _write_snapshot(tmp_path, settings):
    path = tmp_path / "2024-05.json"
    path.write_text(json.dumps({
        "month": "2024-05",
        "agencies": [{
            "id": 1,
            "company_name": "Head Office",
            "tier_level": 1,
            "company_type": "corporate",
            "invoice_registered": True,
        }],
        "products": [],
        "sales": [{
            "id": 1,
            "sale_number": "S-0001",
            "agency_id": 1,
            "total_amount": 200000,
            "sale_date": "2024-05-10",
        }],
        "settings": settings,
    }), encoding="utf-8")
    return str(path)


class TestRun:
    """Tests for the dry run entry point."""

    def test_invalid_settings_stop_the_run(self, tmp_path, capsys):
        path = _write_snapshot(tmp_path, {"withholding_tax_rate": 150})

        with pytest.raises(ValueError, match="between 0 and 100"):
            run(path)

        assert "SUMMARY" not in capsys.readouterr().out

    def test_zero_minimum_warns_and_runs(self, tmp_path, capsys):
        path = _write_snapshot(tmp_path, {"minimum_payment_amount": 0})

        run(path)

        out = capsys.readouterr().out
        assert "[WARN] A minimum payment amount of 0 falls back" in out
        assert "SUMMARY 2024-05" in out
        assert "20,000" in out
