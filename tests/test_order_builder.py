import json
import logging
from decimal import Decimal

import pytest

from cafex_admin.application.errors import (
    NotFoundError,
    ProductReferenceError,
    StateError,
    StoreError,
    ValidationError,
)
from cafex_admin.application.order_builder import OrderBuilder
from cafex_admin.application.schemas import OrderCreate
from cafex_admin.domain.enums import OrderStatus
from cafex_admin.domain.repositories import IOrderStore
from shared.core.logging_config import CustomerDataFilter, StructuredFormatter


def make_request(items, customer=None, **extra):
    body = {
        "customer": customer if customer is not None else {"name": "A", "email": "a@x.com"},
        "items": items,
        **extra,
    }
    return OrderCreate.model_validate(body)


@pytest.fixture
def builder(catalog, store):
    return OrderBuilder(catalog, store)


def test_single_item_order_is_priced_from_catalog(builder, store):
    order = builder.build_order(make_request([{"productId": 1, "quantity": 2}]))

    assert store.create_calls == 1
    assert order.id == 1
    assert order.total == Decimal("9.00")
    assert order.status == "Pending"
    assert order.payment_method == "Cash"
    assert order.payment_status == "Pending"
    assert order.notes == ""
    assert order.customer == {"name": "A", "email": "a@x.com", "phone": ""}
    [item] = order.items
    assert (item.product, item.name, item.quantity, item.price) == (1, "Latte", 2, Decimal("4.50"))


def test_total_ignores_client_supplied_prices(builder):
    order = builder.build_order(make_request([
        {"productId": 1, "quantity": 1, "price": 0.01},
        {"productId": 2, "quantity": 3, "price": 0.01},
        {"productId": 3, "quantity": 2},
    ]))

    assert order.total == Decimal("4.50") + Decimal("3.25") * 3 + Decimal("2.80") * 2
    assert order.total == sum(i.price * i.quantity for i in order.items)


def test_line_items_keep_request_order(builder):
    order = builder.build_order(make_request([
        {"productId": 3, "quantity": 1},
        {"productId": 1, "quantity": 1},
        {"productId": 2, "quantity": 1},
    ]))

    assert [i.product for i in order.items] == [3, 1, 2]
    assert [i.position for i in order.items] == [0, 1, 2]


def test_duplicate_product_is_priced_per_occurrence(builder, catalog):
    order = builder.build_order(make_request([
        {"productId": 1, "quantity": 1},
        {"productId": 1, "quantity": 2},
    ]))

    assert catalog.lookups == [1, 1]
    assert len(order.items) == 2
    assert order.total == Decimal("13.50")


def test_unknown_product_aborts_without_writing(builder, store, catalog):
    with pytest.raises(ProductReferenceError) as exc:
        builder.build_order(make_request([
            {"productId": 1, "quantity": 1},
            {"productId": 999, "quantity": 1},
            {"productId": 2, "quantity": 1},
        ]))

    assert exc.value.product_id == 999
    assert "999" in str(exc.value)
    assert store.create_calls == 0
    # Lookups stop at the first missing product
    assert catalog.lookups == [1, 999]


def test_empty_items_rejected(builder, store):
    with pytest.raises(ValidationError):
        builder.build_order(make_request([]))
    assert store.create_calls == 0


@pytest.mark.parametrize("customer", [
    {},
    {"name": "A"},
    {"email": "a@x.com"},
    {"name": "  ", "email": "a@x.com"},
    {"name": "A", "email": ""},
])
def test_incomplete_customer_rejected(builder, store, customer):
    with pytest.raises(ValidationError, match="Customer details"):
        builder.build_order(make_request([{"productId": 1, "quantity": 1}], customer=customer))
    assert store.create_calls == 0


def test_missing_customer_and_items_rejected(builder, store):
    with pytest.raises(ValidationError):
        builder.build_order(OrderCreate.model_validate({}))
    assert store.create_calls == 0


def test_item_without_quantity_rejected(builder, catalog, store):
    with pytest.raises(ValidationError, match="product ID and quantity"):
        builder.build_order(make_request([{"productId": 1}]))
    assert catalog.lookups == []
    assert store.create_calls == 0


def test_item_without_product_rejected(builder, store):
    with pytest.raises(ValidationError, match="product ID and quantity"):
        builder.build_order(make_request([{"quantity": 2}]))
    assert store.create_calls == 0


@pytest.mark.parametrize("quantity", [0, -3])
def test_non_positive_quantity_rejected(builder, store, quantity):
    with pytest.raises(ValidationError, match="positive integer"):
        builder.build_order(make_request([{"productId": 1, "quantity": quantity}]))
    assert store.create_calls == 0


def test_payment_method_and_notes_are_kept(builder):
    order = builder.build_order(make_request(
        [{"product": 2, "quantity": 1}],
        customer={"name": "B", "email": "b@x.com", "phone": "555-0100"},
        paymentMethod="Credit Card",
        notes="extra napkins",
    ))

    assert order.payment_method == "Credit Card"
    assert order.notes == "extra napkins"
    assert order.customer["phone"] == "555-0100"


def test_unknown_payment_method_rejected(builder, store):
    with pytest.raises(ValidationError, match="payment method"):
        builder.build_order(make_request([{"productId": 1, "quantity": 1}], payment_method="Bitcoin"))
    assert store.create_calls == 0


def test_captured_price_survives_catalog_change(builder, catalog, store):
    order = builder.build_order(make_request([{"productId": 1, "quantity": 2}]))

    catalog.add(1, "Latte (large)", "5.00")

    stored = store.get(order.id)
    assert stored.total == Decimal("9.00")
    assert stored.items[0].price == Decimal("4.50")
    assert stored.items[0].name == "Latte"


def test_store_failure_propagates(catalog):
    class FailingStore(IOrderStore):
        def create(self, order):
            raise StoreError("create order")

        def get(self, order_id):
            return None

        def update_status(self, order_id, status):
            return None

    builder = OrderBuilder(catalog, FailingStore())
    with pytest.raises(StoreError):
        builder.build_order(make_request([{"productId": 1, "quantity": 1}]))


def test_total_above_column_limit_rejected(builder, catalog, store):
    catalog.add(9, "Catering Package", "99999999.99")

    with pytest.raises(ValidationError, match="Order total must not exceed 99999999.99"):
        builder.build_order(make_request([{"productId": 9, "quantity": 1}, {"productId": 1, "quantity": 1}]))
    assert store.create_calls == 0


def test_quantity_above_column_limit_rejected(builder, catalog, store):
    with pytest.raises(ValidationError) as exc:
        builder.build_order(make_request([{"productId": 1, "quantity": 2**31}]))
    assert exc.value.field == "quantity"
    assert catalog.lookups == []
    assert store.create_calls == 0


def test_non_numeric_product_id_is_a_reference_error(builder, store):
    with pytest.raises(ProductReferenceError) as exc:
        builder.build_order(make_request([{"productId": "P999", "quantity": 1}]))
    assert str(exc.value) == "Product with ID P999 not found"
    assert store.create_calls == 0


def test_created_event_carries_masked_customer_email(builder, caplog):
    caplog.set_level(logging.INFO, logger="cafex_admin.application.order_builder")

    builder.build_order(make_request([{"productId": 1, "quantity": 1}]))

    [record] = [r for r in caplog.records if r.getMessage() == "Order 1 created"]
    assert "customer_email" in record.extra_fields
    assert CustomerDataFilter().filter(record)
    line = json.loads(StructuredFormatter().format(record))
    assert line["custom"]["customer_email"] == "***"
    assert line["custom"]["order_id"] == 1


# Status transitions

@pytest.fixture
def pending_order(builder):
    return builder.build_order(make_request([{"productId": 1, "quantity": 2}]))


def test_pending_to_processing(builder, store, pending_order):
    updated = builder.set_status(pending_order.id, "Processing")

    assert updated.status == "Processing"
    assert store.status_updates == [(pending_order.id, "Processing")]


def test_repeating_a_transition_is_rejected(builder, pending_order):
    builder.set_status(pending_order.id, "Processing")

    with pytest.raises(StateError) as exc:
        builder.set_status(pending_order.id, "Processing")
    assert exc.value.current == "Processing"


ALLOWED = {
    ("Pending", "Processing"),
    ("Pending", "Cancelled"),
    ("Processing", "Completed"),
}


@pytest.mark.parametrize("current", [s.value for s in OrderStatus])
@pytest.mark.parametrize("target", [s.value for s in OrderStatus])
def test_transition_table(builder, store, pending_order, current, target):
    pending_order.status = current

    if (current, target) in ALLOWED:
        assert builder.set_status(pending_order.id, target).status == target
    else:
        with pytest.raises(StateError):
            builder.set_status(pending_order.id, target)
        assert store.status_updates == []


@pytest.mark.parametrize("terminal", ["Completed", "Cancelled"])
def test_terminal_status_leaves_order_untouched(builder, pending_order, terminal):
    if terminal == "Completed":
        builder.set_status(pending_order.id, "Processing")
    builder.set_status(pending_order.id, terminal)
    items_before = [(i.product, i.quantity, i.price) for i in pending_order.items]

    with pytest.raises(StateError):
        builder.set_status(pending_order.id, "Pending")

    assert pending_order.status == terminal
    assert pending_order.total == Decimal("9.00")
    assert [(i.product, i.quantity, i.price) for i in pending_order.items] == items_before


def test_status_of_unknown_order(builder):
    with pytest.raises(NotFoundError):
        builder.set_status(42, "Processing")


@pytest.mark.parametrize("status", [None, "Shipped", "pending"])
def test_invalid_status_value(builder, pending_order, status):
    with pytest.raises(ValidationError):
        builder.set_status(pending_order.id, status)
