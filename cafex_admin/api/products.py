from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cafex_admin.infrastructure.db import get_db
from cafex_admin.application.service import ProductService
from cafex_admin.application.schemas import ProductCreate, ProductRead

router = APIRouter(prefix="/products", tags=["products"])

@router.get("/", response_model=list[ProductRead])
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).list()

@router.get("/category/{category}", response_model=list[ProductRead])
def list_products_by_category(category: str, db: Session = Depends(get_db)):
    return ProductService(db).list_by_category(category)

@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ProductService(db).get(product_id)

@router.post("/", response_model=ProductRead, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return ProductService(db).create(payload)

@router.put("/{product_id}", response_model=ProductRead)
def update_product(product_id: int, payload: ProductCreate, db: Session = Depends(get_db)):
    # Full replacement; price changes never reach orders already placed
    return ProductService(db).update(product_id, payload)

@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    ProductService(db).delete(product_id)
    return None
