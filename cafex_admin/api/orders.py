from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cafex_admin.infrastructure.db import get_db
from cafex_admin.infrastructure.repositories import SqlOrderStore, SqlProductCatalog
from cafex_admin.application.errors import ProductReferenceError, ValidationError
from cafex_admin.application.order_builder import OrderBuilder
from cafex_admin.application.service import OrderService
from cafex_admin.application.schemas import OrderCreate, OrderRead, OrderStatusUpdate, OrderUpdate
from shared.core import get_logger

router = APIRouter(prefix="/orders", tags=["orders"])
logger = get_logger(__name__)

def get_order_builder(db: Session = Depends(get_db)) -> OrderBuilder:
    return OrderBuilder(SqlProductCatalog(db), SqlOrderStore(db))

@router.get("/", response_model=list[OrderRead])
def list_orders(db: Session = Depends(get_db)):
    """List all orders, newest first."""
    return OrderService(db).list()

@router.get("/status/{status}", response_model=list[OrderRead])
def list_orders_by_status(status: str, db: Session = Depends(get_db)):
    return OrderService(db).list_by_status(status)

@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return OrderService(db).get(order_id)

@router.post("/", response_model=OrderRead, status_code=201)
def create_order(payload: OrderCreate, builder: OrderBuilder = Depends(get_order_builder)):
    try:
        return builder.build_order(payload)
    except (ValidationError, ProductReferenceError) as e:
        logger.warning(f"Order rejected: {e}")
        raise

@router.patch("/{order_id}/status", response_model=OrderRead)
def update_order_status(order_id: int, payload: OrderStatusUpdate, builder: OrderBuilder = Depends(get_order_builder)):
    return builder.set_status(order_id, payload.status)

@router.put("/{order_id}", response_model=OrderRead)
def update_order(order_id: int, payload: OrderUpdate, db: Session = Depends(get_db)):
    """Update the mutable fields of an order; items, total and customer are fixed."""
    return OrderService(db).update(order_id, payload)

@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    OrderService(db).delete(order_id)
    return None
