from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cafex_admin.infrastructure.db import get_db
from cafex_admin.application.service import GalleryService
from cafex_admin.application.schemas import GalleryImageCreate, GalleryImageRead

router = APIRouter(prefix="/gallery", tags=["gallery"])

@router.get("/", response_model=list[GalleryImageRead])
def list_gallery_images(db: Session = Depends(get_db)):
    """List gallery entries by display order, newest first within the same slot."""
    return GalleryService(db).list()

@router.get("/featured", response_model=list[GalleryImageRead])
def list_featured_gallery_images(db: Session = Depends(get_db)):
    return GalleryService(db).list_featured()

@router.get("/{image_id}", response_model=GalleryImageRead)
def get_gallery_image(image_id: int, db: Session = Depends(get_db)):
    return GalleryService(db).get(image_id)

@router.post("/", response_model=GalleryImageRead, status_code=201)
def create_gallery_image(payload: GalleryImageCreate, db: Session = Depends(get_db)):
    return GalleryService(db).create(payload)

@router.put("/{image_id}", response_model=GalleryImageRead)
def update_gallery_image(image_id: int, payload: GalleryImageCreate, db: Session = Depends(get_db)):
    return GalleryService(db).update(image_id, payload)

@router.delete("/{image_id}", status_code=204)
def delete_gallery_image(image_id: int, db: Session = Depends(get_db)):
    GalleryService(db).delete(image_id)
    return None
