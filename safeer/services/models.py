"""Database Models - Pydantic models for storefront tables."""
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from safeer.services.money import to_decimal as _to_decimal

PLACEHOLDER_IMAGE = "/placeholder-product.jpg"


class Category(BaseModel):
    """Product category."""
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"


class ProductImage(BaseModel):
    image_url: str

    class Config:
        extra = "ignore"


class Service(BaseModel):
    """A catalog product (the backend calls them services)."""
    id: str
    title: str
    description: Optional[str] = None
    # Free text in the catalog ("1200 ج"), sometimes a plain number
    price: Union[str, int, float, None] = None
    sale_price: Union[str, int, float, None] = None
    image_url: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[Category] = None
    product_images: list[ProductImage] = []
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("id", "category_id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        return str(v) if v is not None else None

    @field_validator("product_images", mode="before")
    @classmethod
    def default_images(cls, v):
        return v or []

    @property
    def display_image(self) -> str:
        """First gallery image, else the main image, else a placeholder."""
        if self.product_images:
            return self.product_images[0].image_url
        return self.image_url or PLACEHOLDER_IMAGE

    @property
    def effective_price(self) -> Union[str, int, float, None]:
        """Sale price when set, otherwise the regular price."""
        return self.sale_price if self.sale_price not in (None, "") else self.price


class StoreSettings(BaseModel):
    """Store-wide settings row."""
    id: Optional[str] = None
    store_name: Optional[str] = None
    store_description: Optional[str] = None
    logo_url: Optional[str] = None
    whatsapp_number: Optional[str] = None

    class Config:
        extra = "ignore"

    @field_validator("id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        return str(v) if v is not None else None


class Order(BaseModel):
    """Cash-on-delivery order."""
    id: str
    customer_name: str
    customer_phone: str
    customer_address: str
    notes: Optional[str] = None
    payment_method: str = "cashOnDelivery"
    total_amount: Decimal
    status: str = "pending"
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        return str(v)

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return _to_decimal(v)


class OrderItem(BaseModel):
    """Order line (one per cart line item)."""
    id: Optional[str] = None
    order_id: str
    product_id: Optional[str] = None
    product_name: str
    quantity: int = 1
    price: Decimal

    class Config:
        extra = "ignore"

    @field_validator("id", "order_id", "product_id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        return str(v) if v is not None else None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)
