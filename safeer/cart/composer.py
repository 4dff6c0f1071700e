"""
Order composer.

Formats cart contents into the WhatsApp message a shopper sends to place
an order, and builds the wa.me deep link that carries it. Nothing here
performs network I/O: the caller opens the returned URL.
"""
from decimal import Decimal
from typing import Iterable, Optional
from urllib.parse import quote

from safeer.config import CURRENCY_SUFFIX, WHATSAPP_NUMBER
from safeer.services.money import format_money

from .models import LineItem

WHATSAPP_CONTACT_TEMPLATE = "https://wa.me/{phone}"
WHATSAPP_URL_TEMPLATE = WHATSAPP_CONTACT_TEMPLATE + "?text={text}"

# Newline is encoded as %0A inside the deep link
LINE_SEPARATOR = "\n"

ORDER_GREETING = "مرحباً، أود طلب المنتجات التالية:"
ORDER_CLOSING = "شكراً لكم!"
LABEL_SUBTOTAL = "الإجمالي الفرعي"
LABEL_SHIPPING = "رسوم الشحن"
LABEL_TOTAL = "الإجمالي الكلي"

INQUIRY_TITLE = "استفسار عن المنتج"
INQUIRY_LINK = "رابط المنتج"


def format_order_line(item: LineItem) -> str:
    return f"- {item.title} ({item.quantity} × {item.display_price})"


def compose_order_message(
    items: Iterable[LineItem],
    subtotal: Decimal,
    shipping_fee: Decimal,
    total: Decimal,
    suffix: str = CURRENCY_SUFFIX,
) -> Optional[str]:
    """
    Build the order message text.

    Returns None when there are no items; callers turn that into the
    empty-cart warning instead of sending anything.
    """
    lines = [format_order_line(item) for item in items]
    if not lines:
        return None

    summary = [
        f"{LABEL_SUBTOTAL}: {format_money(subtotal, suffix)}",
        f"{LABEL_SHIPPING}: {format_money(shipping_fee, suffix)}",
        f"{LABEL_TOTAL}: {format_money(total, suffix)}",
    ]
    blocks = [
        ORDER_GREETING,
        LINE_SEPARATOR.join(lines),
        LINE_SEPARATOR.join(summary),
        ORDER_CLOSING,
    ]
    return (LINE_SEPARATOR * 2).join(blocks)


def compose_inquiry_message(title: str, product_url: str) -> str:
    """Message for the product card "contact now" button."""
    return f"{INQUIRY_TITLE}: {title}{LINE_SEPARATOR}{INQUIRY_LINK}: {product_url}"


def build_whatsapp_url(message: str, phone: str = WHATSAPP_NUMBER) -> str:
    """URL-encode a message into the wa.me deep link."""
    return WHATSAPP_URL_TEMPLATE.format(phone=phone, text=quote(message, safe=""))


def whatsapp_contact_url(phone: str = WHATSAPP_NUMBER) -> str:
    """Plain chat link with no prefilled text."""
    return WHATSAPP_CONTACT_TEMPLATE.format(phone=phone)
