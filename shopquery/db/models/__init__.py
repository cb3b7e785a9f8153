"""ORM model exports."""

from shopquery.db.models.customers import CustomerRecord
from shopquery.db.models.orders import OrderRecord, order_product
from shopquery.db.models.products import ProductRecord

__all__ = [
    "CustomerRecord",
    "OrderRecord",
    "ProductRecord",
    "order_product",
]
