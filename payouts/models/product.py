from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from payouts.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 0), nullable=True)
    # Per-tier commission percentages; NULL falls back to the default table
    tier1_commission_rate = Column(Numeric(5, 2), nullable=True)
    tier2_commission_rate = Column(Numeric(5, 2), nullable=True)
    tier3_commission_rate = Column(Numeric(5, 2), nullable=True)
    tier4_commission_rate = Column(Numeric(5, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def commission_rate_for_tier(self, tier_level: int) -> Optional[Decimal]:
        """Return the override rate for a tier, or None when not configured."""
        if tier_level not in (1, 2, 3, 4):
            return None
        rate = getattr(self, f"tier{tier_level}_commission_rate")
        if rate is None:
            return None
        return rate if isinstance(rate, Decimal) else Decimal(str(rate))

    def __repr__(self):
        return f"<Product {self.id} {self.name}>"
