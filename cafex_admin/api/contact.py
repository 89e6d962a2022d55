from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cafex_admin.infrastructure.db import get_db
from cafex_admin.application.service import ContactService
from cafex_admin.application.schemas import ContactRead, ContactUpdate

router = APIRouter(prefix="/contact", tags=["contact"])

@router.get("/", response_model=ContactRead)
def get_contact(db: Session = Depends(get_db)):
    return ContactService(db).get_or_create()

@router.put("/", response_model=ContactRead)
def update_contact(payload: ContactUpdate, db: Session = Depends(get_db)):
    """Merge the given fields into the contact record; social links merge per network."""
    return ContactService(db).update(payload)
