"""SQLAlchemy implementations of the product catalog and order store"""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cafex_admin.application.errors import StoreError
from cafex_admin.domain.models import Order, Product, row_key
from cafex_admin.domain.repositories import IOrderStore, IProductCatalog
from shared.core import get_logger

logger = get_logger(__name__)


class SqlProductCatalog(IProductCatalog):
    """Read-only view of the products table."""

    def __init__(self, session: Session):
        self.session = session

    def lookup(self, product_id) -> Optional[Product]:
        key = row_key(product_id)
        if key is None:
            return None
        return self.session.get(Product, key)


class SqlOrderStore(IOrderStore):
    """Order aggregate persistence; each write is a single commit."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, order: Order) -> Order:
        try:
            self.session.add(order)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Failed to persist order", exc_info=True)
            raise StoreError("create order", e) from e
        self.session.refresh(order)
        return order

    def get(self, order_id: int) -> Optional[Order]:
        key = row_key(order_id)
        if key is None:
            return None
        return self.session.get(Order, key)

    def update_status(self, order_id: int, status: str) -> Optional[Order]:
        order = self.get(order_id)
        if not order:
            return None
        try:
            order.status = status
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to update status of order {order_id}", exc_info=True)
            raise StoreError("update order status", e) from e
        self.session.refresh(order)
        return order
