from payouts.models.agency import Agency
from payouts.models.product import Product
from payouts.models.sale import Sale
from payouts.models.commission_record import CommissionRecord

__all__ = [
    "Agency",
    "Product",
    "Sale",
    "CommissionRecord",
]
