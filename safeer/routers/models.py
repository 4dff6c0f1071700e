"""
Storefront API Pydantic Models

Request bodies shared by the storefront routers.
"""
from typing import Optional, Union

from pydantic import BaseModel, Field


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    price: Union[str, float, int]
    image_url: str | None = None
    product_id: str | None = None


class UpdateCartItemRequest(BaseModel):
    quantity: int  # below 1 removes the item


class TogglePresentationRequest(BaseModel):
    open: Optional[bool] = None


# ==================== CHECKOUT MODELS ====================

class CheckoutRequest(BaseModel):
    # Loose types: field validation happens in CheckoutForm so the
    # shopper gets one message per field
    name: str = ""
    phone: str = ""
    address: str = ""
    notes: str | None = None
    payment_method: str = "cashOnDelivery"


# ==================== AI CHAT MODELS ====================

class ChatMessageRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000, description="User message text")


class ChatMessageResponse(BaseModel):
    reply_text: str
    ok: bool = True
    whatsapp_url: str
