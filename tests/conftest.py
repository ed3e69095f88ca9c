"""
Shared factories for commission engine tests.

Models are built as transient SQLAlchemy instances; no database is needed.
"""

from datetime import date

import pytest

from payouts.models import Agency, Product, Sale


@pytest.fixture
def make_agency():
    def _make(
        id,
        tier_level,
        parent_agency_id=None,
        company_type="corporate",
        invoice_registered=True,
        withholding_tax_flag=None,
        company_name=None,
    ):
        return Agency(
            id=id,
            company_name=company_name or f"Agency {id}",
            tier_level=tier_level,
            parent_agency_id=parent_agency_id,
            company_type=company_type,
            invoice_registered=invoice_registered,
            withholding_tax_flag=withholding_tax_flag,
            status="active",
        )
    return _make


@pytest.fixture
def make_sale():
    def _make(id, agency_id, total_amount, product_id=None, settings_snapshot=None):
        return Sale(
            id=id,
            sale_number=f"S-{id:04d}",
            agency_id=agency_id,
            product_id=product_id,
            total_amount=total_amount,
            sale_date=date(2024, 5, 15),
            status="confirmed",
            settings_snapshot=settings_snapshot,
        )
    return _make


@pytest.fixture
def make_product():
    def _make(id, name=None, **tier_rates):
        return Product(id=id, name=name or f"Product {id}", is_active=True, **tier_rates)
    return _make
