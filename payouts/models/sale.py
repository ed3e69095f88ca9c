from datetime import datetime
from sqlalchemy import BigInteger, Column, Date, DateTime, ForeignKey, Integer, JSON, String
from payouts.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    sale_number = Column(String(50), nullable=True, unique=True)
    agency_id = Column(Integer, ForeignKey("agencies.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=True)
    total_amount = Column(BigInteger, nullable=False)  # integer currency units
    sale_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    # Commission settings in force when the sale was registered. Recalculating
    # a past month replays these instead of today's configuration.
    settings_snapshot = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    STATUSES = ["pending", "confirmed", "cancelled"]

    @property
    def applied_settings(self):
        """Frozen CommissionSettings parsed from the snapshot, or None."""
        from payouts.services.commission_settings import CommissionSettings

        if self.settings_snapshot is None:
            return None
        if isinstance(self.settings_snapshot, CommissionSettings):
            return self.settings_snapshot
        return CommissionSettings.model_validate(self.settings_snapshot)

    def __repr__(self):
        return f"<Sale {self.sale_number or self.id} ({self.total_amount})>"
