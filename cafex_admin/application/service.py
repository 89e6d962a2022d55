from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from decimal import Decimal
from typing import Callable, TypeVar

from cafex_admin.domain.enums import OrderStatus, PaymentStatus, ProductCategory, can_transition
from cafex_admin.domain.models import Contact, GalleryImage, Order, Product, row_key
from shared.core import get_logger
from .errors import NotFoundError, StateError, StoreError, ValidationError
from .order_builder import parse_order_status, parse_payment_method
from .schemas import ContactUpdate, GalleryImageCreate, OrderUpdate, ProductCreate

T = TypeVar("T")

logger = get_logger(__name__)

# Seed values for the contact record the first time it is read
DEFAULT_CONTACT = {
    "phone": "+1 (555) 123-4567",
    "email": "info@cafex.com",
    "address": "123 Coffee Street, Cafe District, NY 10001",
    "hours": "Monday - Friday: 7AM - 8PM, Weekends: 8AM - 10PM",
    "website": "www.cafex.com",
    "facebook": "facebook.com/cafex",
    "instagram": "instagram.com/cafex",
    "twitter": "twitter.com/cafex",
}


class BaseService:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, operation: str, action: Callable[[], T]) -> T:
        """Run ``action`` and commit; roll back and raise StoreError on failure."""
        try:
            result = action()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database operation failed: {operation}", exc_info=True)
            raise StoreError(operation, e) from e
        return result


class ProductService(BaseService):

    def list(self):
        return self.db.query(Product).order_by(Product.created_at.desc(), Product.id.desc()).all()

    def list_by_category(self, category: str):
        try:
            category = ProductCategory(category)
        except ValueError:
            allowed = ", ".join(c.value for c in ProductCategory)
            raise ValidationError(f"Invalid category '{category}'. Allowed values: {allowed}") from None
        return (
            self.db.query(Product)
            .filter(Product.category == category.value)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

    def get(self, product_id: int) -> Product:
        key = row_key(product_id)
        product = self.db.get(Product, key) if key else None
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    def _apply(self, product: Product, data: ProductCreate):
        product.name = data.name.strip()
        product.category = data.category.value
        product.price = data.price.quantize(Decimal("0.01"))
        product.description = data.description
        product.stock = data.stock
        product.image = data.image
        product.featured = data.featured
        product.is_available = data.is_available

    def create(self, data: ProductCreate) -> Product:
        obj = Product()
        self._apply(obj, data)
        self._commit("create product", lambda: self.db.add(obj))
        self.db.refresh(obj)
        return obj

    def update(self, product_id: int, data: ProductCreate) -> Product:
        product = self.get(product_id)
        self._apply(product, data)
        self._commit("update product", lambda: product)
        self.db.refresh(product)
        return product

    def delete(self, product_id: int) -> None:
        product = self.get(product_id)
        self._commit("delete product", lambda: self.db.delete(product))


class OrderService(BaseService):
    """Read and administrative update paths for orders.

    Creation and PATCH-style status changes go through OrderBuilder; the
    general update here only touches the mutable fields and routes any status
    change through the same transition table.
    """

    def list(self):
        return self.db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()

    def list_by_status(self, status: str):
        status = parse_order_status(status)
        return (
            self.db.query(Order)
            .filter(Order.status == status.value)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def get(self, order_id: int) -> Order:
        key = row_key(order_id)
        order = self.db.get(Order, key) if key else None
        if not order:
            raise NotFoundError("Order", order_id)
        return order

    def update(self, order_id: int, data: OrderUpdate) -> Order:
        order = self.get(order_id)

        if data.status is not None:
            target = parse_order_status(data.status)
            current = OrderStatus(order.status)
            if target != current and not can_transition(current, target):
                raise StateError(current.value, target.value)
            order.status = target.value
        if data.payment_method is not None:
            order.payment_method = parse_payment_method(data.payment_method).value
        if data.payment_status is not None:
            try:
                order.payment_status = PaymentStatus(data.payment_status).value
            except ValueError:
                allowed = ", ".join(s.value for s in PaymentStatus)
                raise ValidationError(
                    f"Invalid payment status '{data.payment_status}'. Allowed values: {allowed}"
                ) from None
        if data.notes is not None:
            order.notes = data.notes

        self._commit("update order", lambda: order)
        self.db.refresh(order)
        return order

    def delete(self, order_id: int) -> None:
        order = self.get(order_id)
        self._commit("delete order", lambda: self.db.delete(order))
        logger.info(f"Order {order_id} deleted", extra={'extra_fields': {'order_id': order_id}})


class GalleryService(BaseService):

    def list(self):
        return (
            self.db.query(GalleryImage)
            .order_by(GalleryImage.display_order.asc(), GalleryImage.created_at.desc(), GalleryImage.id.desc())
            .all()
        )

    def list_featured(self):
        return (
            self.db.query(GalleryImage)
            .filter(GalleryImage.featured.is_(True))
            .order_by(GalleryImage.display_order.asc(), GalleryImage.id.asc())
            .all()
        )

    def get(self, image_id: int) -> GalleryImage:
        key = row_key(image_id)
        image = self.db.get(GalleryImage, key) if key else None
        if not image:
            raise NotFoundError("Gallery image", image_id)
        return image

    def _apply(self, image: GalleryImage, data: GalleryImageCreate):
        image.title = data.title.strip()
        image.description = data.description
        image.image = data.image
        image.featured = data.featured
        image.display_order = data.display_order

    def create(self, data: GalleryImageCreate) -> GalleryImage:
        obj = GalleryImage()
        self._apply(obj, data)
        self._commit("create gallery image", lambda: self.db.add(obj))
        self.db.refresh(obj)
        return obj

    def update(self, image_id: int, data: GalleryImageCreate) -> GalleryImage:
        image = self.get(image_id)
        self._apply(image, data)
        self._commit("update gallery image", lambda: image)
        self.db.refresh(image)
        return image

    def delete(self, image_id: int) -> None:
        image = self.get(image_id)
        self._commit("delete gallery image", lambda: self.db.delete(image))


class ContactService(BaseService):
    """The contact record is a singleton: read it or create it with defaults."""

    def get_or_create(self) -> Contact:
        contact = self.db.query(Contact).order_by(Contact.id.asc()).first()
        if contact:
            return contact
        contact = Contact(**DEFAULT_CONTACT)
        self._commit("create contact", lambda: self.db.add(contact))
        self.db.refresh(contact)
        logger.info("Contact information initialized with defaults")
        return contact

    def update(self, data: ContactUpdate) -> Contact:
        contact = self.get_or_create()
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        # Social links merge key by key; omitted networks keep their value
        social = updates.pop("social_media", None) or {}
        for key, value in updates.items():
            setattr(contact, key, value)
        for key, value in social.items():
            setattr(contact, key, value)
        self._commit("update contact", lambda: contact)
        self.db.refresh(contact)
        return contact
