from pydantic import BaseModel, Field, AliasChoices, StrictInt
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from cafex_admin.domain.enums import ProductCategory
from cafex_admin.domain.models import MAX_AMOUNT, MAX_INTEGER

# Products

class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    category: ProductCategory = ProductCategory.OTHER
    price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    description: str = ""
    stock: int = Field(default=0, ge=0, le=MAX_INTEGER)
    image: str = ""
    featured: bool = False
    is_available: bool = True

class ProductRead(BaseModel):
    id: int
    name: str
    category: str
    price: float
    description: str
    stock: int
    image: str
    featured: bool
    is_available: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Orders
#
# Request fields are optional at the schema level so that missing values reach
# the order builder, which reports them with a specific message.

class CustomerIn(BaseModel):
    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)

class OrderItemCreate(BaseModel):
    # Unknown or malformed identifiers are reported by the catalog lookup
    product_id: Optional[Union[StrictInt, str]] = Field(
        default=None, validation_alias=AliasChoices("product_id", "productId", "product")
    )
    quantity: Optional[StrictInt] = None

class OrderCreate(BaseModel):
    customer: Optional[CustomerIn] = None
    items: Optional[list[OrderItemCreate]] = None
    notes: Optional[str] = None
    payment_method: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("payment_method", "paymentMethod")
    )

class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None

class OrderUpdate(BaseModel):
    status: Optional[str] = None
    payment_method: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("payment_method", "paymentMethod")
    )
    payment_status: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("payment_status", "paymentStatus")
    )
    notes: Optional[str] = None

class CustomerRead(BaseModel):
    name: str
    email: str
    phone: str = ""

class OrderItemRead(BaseModel):
    id: int
    product: int
    name: str
    quantity: int
    price: float

    class Config:
        from_attributes = True

class OrderRead(BaseModel):
    id: int
    customer: CustomerRead
    items: list[OrderItemRead]
    total: float
    status: str
    payment_method: str
    payment_status: str
    notes: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# Gallery

class GalleryImageCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    image: str = Field(min_length=1, max_length=500)
    featured: bool = False
    display_order: int = Field(
        default=0, ge=-MAX_INTEGER, le=MAX_INTEGER,
        validation_alias=AliasChoices("display_order", "displayOrder"),
    )

class GalleryImageRead(BaseModel):
    id: int
    title: str
    description: str
    image: str
    featured: bool
    display_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Contact

class SocialMedia(BaseModel):
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""

class SocialMediaUpdate(BaseModel):
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None

class ContactUpdate(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    website: Optional[str] = None
    social_media: Optional[SocialMediaUpdate] = Field(
        default=None, validation_alias=AliasChoices("social_media", "socialMedia")
    )

class ContactRead(BaseModel):
    phone: str
    email: str
    address: str
    hours: str
    website: str
    social_media: SocialMedia
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
