"""Tests for the WhatsApp order composer"""
from decimal import Decimal
from urllib.parse import unquote

from safeer.cart import LineItem
from safeer.cart.composer import (
    ORDER_CLOSING,
    ORDER_GREETING,
    build_whatsapp_url,
    compose_inquiry_message,
    compose_order_message,
    format_order_line,
    whatsapp_contact_url,
)


def _item(title, display, numeric, quantity=1):
    return LineItem(
        id=title.lower(),
        title=title,
        display_price=display,
        numeric_price=Decimal(numeric),
        quantity=quantity,
    )


def test_format_order_line_uses_display_price():
    assert format_order_line(_item("Sauvage", "1200 ج", "1200", 2)) == "- Sauvage (2 × 1200 ج)"


def test_compose_order_message_layout():
    items = [_item("Sauvage", "1200 ج", "1200", 2), _item("Boss", "800", "800")]

    message = compose_order_message(
        items, Decimal("4000"), Decimal("100"), Decimal("4100"), suffix="ج"
    )

    blocks = message.split("\n\n")
    assert blocks[0] == ORDER_GREETING
    assert blocks[1] == "- Sauvage (2 × 1200 ج)\n- Boss (1 × 800)"
    assert blocks[2].splitlines() == [
        "الإجمالي الفرعي: 4000.00 ج",
        "رسوم الشحن: 100.00 ج",
        "الإجمالي الكلي: 4100.00 ج",
    ]
    assert blocks[3] == ORDER_CLOSING


def test_compose_order_message_empty():
    assert compose_order_message([], Decimal("0"), Decimal("100"), Decimal("100")) is None


def test_build_whatsapp_url_encodes_everything():
    url = build_whatsapp_url("طلب جديد\n- Boss (1 × 800)", phone="201027381559")

    prefix = "https://wa.me/201027381559?text="
    assert url.startswith(prefix)
    encoded = url[len(prefix):]
    assert " " not in encoded
    assert "\n" not in encoded
    assert "%0A" in encoded
    assert unquote(encoded) == "طلب جديد\n- Boss (1 × 800)"


def test_compose_inquiry_message():
    message = compose_inquiry_message("Sauvage", "https://safeer.example/product/svc-42")
    assert "Sauvage" in message
    assert message.endswith("https://safeer.example/product/svc-42")


def test_whatsapp_contact_url():
    assert whatsapp_contact_url("201027381559") == "https://wa.me/201027381559"
