from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from payouts.database import Base


class Agency(Base):
    __tablename__ = "agencies"

    id = Column(Integer, primary_key=True)
    company_name = Column(String(255), nullable=False)
    tier_level = Column(Integer, nullable=False, index=True)  # 1 = senior ... 4 = junior
    parent_agency_id = Column(
        Integer, ForeignKey("agencies.id"), nullable=True, index=True
    )
    company_type = Column(String(20), nullable=False, default="corporate")
    invoice_registered = Column(Boolean, nullable=False, default=False)
    withholding_tax_flag = Column(Boolean, nullable=True)
    status = Column(String(20), nullable=False, default="active", index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    COMPANY_TYPES = ["individual", "corporate"]
    STATUSES = ["pending", "active", "suspended"]

    @property
    def is_individual(self) -> bool:
        return self.company_type == "individual"

    @property
    def is_withholding_subject(self) -> bool:
        """Individuals, and any agency flagged explicitly, have tax withheld."""
        return self.is_individual or bool(self.withholding_tax_flag)

    def __repr__(self):
        return f"<Agency {self.id} {self.company_name} (tier {self.tier_level})>"
