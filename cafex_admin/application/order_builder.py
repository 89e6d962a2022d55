"""Order creation and status transitions.

The builder turns an untrusted order request into a priced Order aggregate.
Prices always come from the product catalog at lookup time; any price sent by
the client is ignored. Name and unit price are copied onto each line item so
later catalog edits never alter a stored order.
"""

from decimal import Decimal
from typing import Optional

from cafex_admin.domain.enums import OrderStatus, PaymentMethod, PaymentStatus, can_transition
from cafex_admin.domain.models import MAX_AMOUNT, MAX_INTEGER, Order, OrderItem
from cafex_admin.domain.repositories import IOrderStore, IProductCatalog
from shared.core import get_logger
from .errors import NotFoundError, ProductReferenceError, StateError, ValidationError
from .schemas import OrderCreate

logger = get_logger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_order_status(value: Optional[str]) -> OrderStatus:
    if value is None:
        raise ValidationError("Status is required", field="status")
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status '{value}'. Allowed values: {allowed}", field="status") from None


def parse_payment_method(value: Optional[str]) -> PaymentMethod:
    if value is None:
        return PaymentMethod.CASH
    try:
        return PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(
            f"Invalid payment method '{value}'. Allowed values: {allowed}", field="payment_method"
        ) from None


class OrderBuilder:
    def __init__(self, catalog: IProductCatalog, store: IOrderStore):
        self.catalog = catalog
        self.store = store

    def build_order(self, request: OrderCreate) -> Order:
        """Validate, price and persist a new order.

        Nothing is written unless every item resolves to a catalog product.
        Each line item triggers its own catalog lookup, so a product listed
        twice is priced once per occurrence.
        """
        customer = request.customer
        if customer is None or _blank(customer.name) or _blank(customer.email) or not request.items:
            raise ValidationError("Customer details and at least one item are required")

        total = Decimal("0")
        order_items = []

        for position, item in enumerate(request.items):
            if item.product_id is None or item.quantity is None:
                raise ValidationError("Each item must have a product ID and quantity")
            if item.quantity < 1:
                raise ValidationError(
                    f"Quantity for product {item.product_id} must be a positive integer",
                    field="quantity",
                )
            if item.quantity > MAX_INTEGER:
                raise ValidationError(
                    f"Quantity for product {item.product_id} must not exceed {MAX_INTEGER}",
                    field="quantity",
                )

            product = self.catalog.lookup(item.product_id)
            if product is None:
                raise ProductReferenceError(item.product_id)

            unit_price = Decimal(str(product.price))
            total += unit_price * item.quantity
            if total > MAX_AMOUNT:
                raise ValidationError(f"Order total must not exceed {MAX_AMOUNT}", field="total")

            order_items.append(
                OrderItem(
                    position=position,
                    product_id=product.id,
                    name=product.name,
                    quantity=item.quantity,
                    price=unit_price,
                )
            )

        payment_method = parse_payment_method(request.payment_method)

        order = Order(
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone or "",
            items=order_items,
            total=total,
            status=OrderStatus.PENDING.value,
            payment_method=payment_method.value,
            payment_status=PaymentStatus.PENDING.value,
            notes=request.notes or "",
        )

        saved = self.store.create(order)
        logger.info(
            f"Order {saved.id} created",
            extra={
                'extra_fields': {
                    'order_id': saved.id,
                    'customer_email': saved.customer_email,
                    'items': len(order_items),
                    'total': str(total),
                    'payment_method': payment_method.value,
                }
            }
        )
        return saved

    def set_status(self, order_id: int, new_status: Optional[str]) -> Order:
        target = parse_order_status(new_status)

        order = self.store.get(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)

        current = OrderStatus(order.status)
        if not can_transition(current, target):
            raise StateError(current.value, target.value)

        updated = self.store.update_status(order_id, target.value)
        if updated is None:
            # Deleted between the read and the write
            raise NotFoundError("Order", order_id)

        logger.info(
            f"Order {order_id} status changed",
            extra={
                'extra_fields': {
                    'order_id': order_id,
                    'from': current.value,
                    'to': target.value,
                }
            }
        )
        return updated
