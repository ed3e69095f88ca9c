from datetime import datetime
from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)
from payouts.database import Base


class CommissionRecord(Base):
    """One ledger line of a monthly payout run.

    A run emits a direct record per sale for the selling agency plus one
    hierarchy bonus record per rewarded ancestor. The set for a month is
    always replaced as a whole.
    """

    __tablename__ = "commission_records"

    id = Column(Integer, primary_key=True)
    agency_id = Column(Integer, ForeignKey("agencies.id"), nullable=False, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=True, index=True)
    month = Column(String(7), nullable=False, index=True)  # "YYYY-MM"
    tier_level = Column(Integer, nullable=True)
    base_amount = Column(BigInteger, nullable=False, default=0)
    tier_bonus = Column(BigInteger, nullable=False, default=0)
    campaign_bonus = Column(BigInteger, nullable=False, default=0)
    invoice_deduction = Column(BigInteger, nullable=False, default=0)
    # NULL means withholding does not apply to the payee
    withholding_tax = Column(BigInteger, nullable=True)
    final_amount = Column(BigInteger, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="confirmed")
    carry_forward_reason = Column(Text, nullable=True)

    # Display metadata
    agency_name = Column(String(255), nullable=True)
    company_type = Column(String(20), nullable=True)
    sale_number = Column(String(50), nullable=True)
    product_name = Column(String(255), nullable=True)
    sale_amount = Column(BigInteger, nullable=True)
    hierarchy_bonus_from = Column(String(255), nullable=True)

    calculation_details = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=True, default=datetime.utcnow)

    STATUS_CONFIRMED = "confirmed"
    STATUS_CARRIED_FORWARD = "carried_forward"
    STATUSES = [STATUS_CONFIRMED, STATUS_CARRIED_FORWARD]

    EXPORT_FIELDS = [
        "agency_id",
        "sale_id",
        "month",
        "tier_level",
        "base_amount",
        "tier_bonus",
        "campaign_bonus",
        "invoice_deduction",
        "withholding_tax",
        "final_amount",
        "status",
        "carry_forward_reason",
        "agency_name",
        "company_type",
        "sale_number",
        "product_name",
        "sale_amount",
        "hierarchy_bonus_from",
        "calculation_details",
    ]

    @property
    def is_bonus(self) -> bool:
        return self.hierarchy_bonus_from is not None

    @property
    def is_carried_forward(self) -> bool:
        return self.status == self.STATUS_CARRIED_FORWARD

    def to_dict(self) -> dict:
        """Row values in a fixed field order, ready for bulk insert."""
        return {field: getattr(self, field) for field in self.EXPORT_FIELDS}

    def __repr__(self):
        return (
            f"<CommissionRecord agency={self.agency_id} sale={self.sale_id} "
            f"{self.month} {self.final_amount} ({self.status})>"
        )
