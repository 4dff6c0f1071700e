"""Cart store: line items, derived totals and panel presentation."""
import asyncio
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Protocol, Union

from safeer.config import CART_AUTO_HIDE_SECONDS, SHIPPING_FEE, WHATSAPP_NUMBER
from safeer.errors import ERROR_CART_EMPTY
from safeer.logging import get_logger, sanitize_string_for_logging
from safeer.services.money import format_amount, to_decimal
from safeer.services.pricing import normalize_price

from .composer import build_whatsapp_url, compose_order_message
from .models import CartSnapshot, LineItem, PresentationState

logger = get_logger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Optional[TimerHandle]]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> Optional[TimerHandle]:
    """Schedule callback on the running event loop (auto-hide needs one)."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop; cart auto-hide not scheduled")
        return None
    return loop.call_later(delay, callback)


@dataclass(frozen=True)
class OrderHandoff:
    """Result of composing the WhatsApp order message."""
    success: bool
    message: Optional[str] = None
    url: Optional[str] = None
    warning: Optional[str] = None


class CartStore:
    """
    Shopping cart for one browsing session.

    Items are keyed by title: adding an item whose title is already in the
    cart bumps its quantity and keeps the first-seen price. Totals are
    derived from the items on every read.

    Adding an item opens the cart panel for `auto_hide_seconds`; a newer
    add restarts the countdown and an explicit toggle cancels it.
    """

    def __init__(
        self,
        shipping_fee: Decimal = SHIPPING_FEE,
        auto_hide_seconds: float = CART_AUTO_HIDE_SECONDS,
        scheduler: Scheduler = loop_scheduler,
        whatsapp_number: str = WHATSAPP_NUMBER,
    ):
        self.shipping_fee = to_decimal(shipping_fee)
        self.auto_hide_seconds = auto_hide_seconds
        self.whatsapp_number = whatsapp_number
        self._scheduler = scheduler
        self._items: list[LineItem] = []
        self._presentation = PresentationState()
        self._auto_hide_timer: Optional[TimerHandle] = None

    # ==================== STATE ====================

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def presentation(self) -> PresentationState:
        return PresentationState(
            is_open=self._presentation.is_open,
            is_auto_showing=self._presentation.is_auto_showing,
        )

    @property
    def is_open(self) -> bool:
        return self._presentation.is_open

    @property
    def is_auto_showing(self) -> bool:
        return self._presentation.is_auto_showing

    def get_item(self, item_id: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.id == item_id), None)

    # ==================== DERIVED TOTALS ====================

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot.from_items(self._items, self.shipping_fee)

    @property
    def item_count(self) -> int:
        return self.snapshot().item_count

    @property
    def subtotal(self) -> str:
        """Subtotal as a fixed 2-decimal string."""
        return format_amount(self.snapshot().subtotal)

    @property
    def total(self) -> str:
        """Subtotal plus the shipping fee, as a fixed 2-decimal string."""
        return format_amount(self.snapshot().total)

    # ==================== MUTATIONS ====================

    def add_item(
        self,
        title: str,
        price: Union[str, int, float, Decimal],
        image_url: Optional[str] = None,
        product_id: Optional[str] = None,
    ) -> LineItem:
        """Add one unit of a product and auto-show the cart panel."""
        existing = next((item for item in self._items if item.title == title), None)

        if existing:
            existing.quantity += 1
            item = existing
        else:
            normalized = normalize_price(price)
            item = LineItem(
                id=uuid.uuid4().hex,
                title=title,
                display_price=normalized.display,
                numeric_price=normalized.numeric,
                quantity=1,
                image_url=image_url,
                product_id=product_id,
            )
            self._items.append(item)

        logger.debug(
            f"Cart add: {sanitize_string_for_logging(title)} -> quantity {item.quantity}"
        )
        self._show_temporarily()
        return item

    def remove_item(self, item_id: str) -> bool:
        """Remove a line item. Returns False if no item has that id."""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False

        self._items = remaining
        if not self._items and self._presentation.is_auto_showing:
            self.toggle_presentation(False)
        return True

    def set_quantity(self, item_id: str, quantity: int) -> bool:
        """Replace a line item's quantity; below 1 removes the item."""
        if quantity < 1:
            return self.remove_item(item_id)

        item = self.get_item(item_id)
        if item is None:
            return False
        item.quantity = quantity
        return True

    def clear(self) -> None:
        """Empty the cart. Presentation state is left as is."""
        self._items = []

    # ==================== PRESENTATION ====================

    def toggle_presentation(self, open: Optional[bool] = None) -> bool:
        """
        Open, close or flip the cart panel.

        An explicit call supersedes any pending auto-hide. Closing always
        clears the auto-showing flag. Returns the new visibility.
        """
        self._cancel_auto_hide()

        is_open = (not self._presentation.is_open) if open is None else open
        self._presentation.is_open = is_open
        if not is_open:
            self._presentation.is_auto_showing = False
        return is_open

    def _show_temporarily(self) -> None:
        self._cancel_auto_hide()
        self._presentation.is_open = True
        self._presentation.is_auto_showing = True
        self._auto_hide_timer = self._scheduler(self.auto_hide_seconds, self._auto_hide)

    def _auto_hide(self) -> None:
        self._auto_hide_timer = None
        self._presentation.is_open = False
        self._presentation.is_auto_showing = False

    def _cancel_auto_hide(self) -> None:
        if self._auto_hide_timer is not None:
            self._auto_hide_timer.cancel()
            self._auto_hide_timer = None

    def close(self) -> None:
        """Release the pending timer when the session ends."""
        self._cancel_auto_hide()

    # ==================== CHECKOUT HANDOFF ====================

    def compose_order_message(self) -> OrderHandoff:
        """
        Build the WhatsApp order message and deep link, then close the panel.

        An empty cart yields a warning and leaves presentation untouched.
        """
        snapshot = self.snapshot()
        message = compose_order_message(
            self._items, snapshot.subtotal, snapshot.shipping_fee, snapshot.total
        )
        if message is None:
            logger.info("Order message refused: cart is empty")
            return OrderHandoff(success=False, warning=ERROR_CART_EMPTY)

        url = build_whatsapp_url(message, self.whatsapp_number)
        self.toggle_presentation(False)
        return OrderHandoff(success=True, message=message, url=url)

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self._items],
            **self.snapshot().to_dict(),
            "is_open": self._presentation.is_open,
            "is_auto_showing": self._presentation.is_auto_showing,
        }
