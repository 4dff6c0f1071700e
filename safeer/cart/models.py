"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from safeer.services.money import format_amount, multiply, round_money, to_decimal, to_float


@dataclass
class LineItem:
    """Single product entry in the cart."""
    id: str
    title: str
    display_price: str
    numeric_price: Decimal
    quantity: int = 1
    image_url: Optional[str] = None
    product_id: Optional[str] = None

    def __post_init__(self):
        self.numeric_price = to_decimal(self.numeric_price)

    @property
    def line_total(self) -> Decimal:
        """Unrounded price × quantity."""
        return multiply(self.numeric_price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "price": self.display_price,
            "numeric_price": to_float(self.numeric_price),
            "quantity": self.quantity,
            "image_url": self.image_url,
            "product_id": self.product_id,
        }


@dataclass(frozen=True)
class CartSnapshot:
    """Totals derived from the line items at one point in time."""
    item_count: int
    subtotal: Decimal
    shipping_fee: Decimal
    total: Decimal

    @classmethod
    def from_items(cls, items: list[LineItem], shipping_fee: Decimal) -> "CartSnapshot":
        subtotal = round_money(sum((item.line_total for item in items), Decimal("0")))
        return cls(
            item_count=sum(item.quantity for item in items),
            subtotal=subtotal,
            shipping_fee=to_decimal(shipping_fee),
            total=round_money(subtotal + to_decimal(shipping_fee)),
        )

    def to_dict(self) -> dict:
        return {
            "item_count": self.item_count,
            "subtotal": format_amount(self.subtotal),
            "shipping_fee": format_amount(self.shipping_fee),
            "total": format_amount(self.total),
        }


@dataclass
class PresentationState:
    """Whether the cart panel is visible, and whether it opened by itself."""
    is_open: bool = False
    is_auto_showing: bool = False
