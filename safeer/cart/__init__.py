"""Cart package: models, store, order composer and session registry."""
from .composer import (
    build_whatsapp_url,
    compose_inquiry_message,
    compose_order_message,
    whatsapp_contact_url,
)
from .models import CartSnapshot, LineItem, PresentationState
from .service import CartStore, OrderHandoff, loop_scheduler
from .sessions import CartSessionRegistry, get_cart_sessions

__all__ = [
    "LineItem",
    "CartSnapshot",
    "PresentationState",
    "CartStore",
    "OrderHandoff",
    "loop_scheduler",
    "CartSessionRegistry",
    "get_cart_sessions",
    "compose_order_message",
    "compose_inquiry_message",
    "build_whatsapp_url",
    "whatsapp_contact_url",
]
