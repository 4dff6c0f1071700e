"""
Checkout Service

Validates the delivery form and turns the session cart into a
cash-on-delivery order (one `orders` row plus one `order_items` row per
line item). The cart is cleared only after both inserts succeed.
"""
import re
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator

from safeer.cart import CartStore
from safeer.errors import (
    ERROR_ADDRESS_INVALID,
    ERROR_NAME_INVALID,
    ERROR_NOTES_TOO_LONG,
    ERROR_PAYMENT_METHOD_INVALID,
    ERROR_PHONE_INVALID,
    CheckoutValidationError,
    EmptyCartError,
    OrderSubmissionError,
)
from safeer.logging import get_logger, sanitize_id_for_logging
from safeer.services.models import Order, OrderItem
from safeer.services.repositories import OrderRepository

logger = get_logger(__name__)

PAYMENT_CASH_ON_DELIVERY = "cashOnDelivery"

NAME_MIN_LENGTH, NAME_MAX_LENGTH = 2, 100
ADDRESS_MIN_LENGTH, ADDRESS_MAX_LENGTH = 10, 500
NOTES_MAX_LENGTH = 1000

# Optional +/00 prefix, then 10-15 digits once spaces and dashes are removed
PHONE_PATTERN = re.compile(r"^(\+|00)?\d{10,15}$")

FIELD_ERRORS = {
    "name": ERROR_NAME_INVALID,
    "phone": ERROR_PHONE_INVALID,
    "address": ERROR_ADDRESS_INVALID,
    "notes": ERROR_NOTES_TOO_LONG,
    "payment_method": ERROR_PAYMENT_METHOD_INVALID,
}


class CheckoutForm(BaseModel):
    """Delivery details entered on the checkout page."""
    name: str
    phone: str
    address: str
    notes: Optional[str] = None
    payment_method: str = PAYMENT_CASH_ON_DELIVERY

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise ValueError(ERROR_NAME_INVALID)
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        compact = re.sub(r"[\s-]", "", v)
        if not PHONE_PATTERN.match(compact):
            raise ValueError(ERROR_PHONE_INVALID)
        return compact

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str) -> str:
        v = v.strip()
        if not ADDRESS_MIN_LENGTH <= len(v) <= ADDRESS_MAX_LENGTH:
            raise ValueError(ERROR_ADDRESS_INVALID)
        return v

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if len(v) > NOTES_MAX_LENGTH:
            raise ValueError(ERROR_NOTES_TOO_LONG)
        return v or None

    @field_validator("payment_method")
    @classmethod
    def check_payment_method(cls, v: str) -> str:
        if v != PAYMENT_CASH_ON_DELIVERY:
            raise ValueError(ERROR_PAYMENT_METHOD_INVALID)
        return v


def validate_checkout_form(data: dict[str, Any]) -> dict[str, str]:
    """
    Validate raw form data.

    Returns:
        Mapping of field name -> user-facing message; empty when valid.
    """
    try:
        CheckoutForm(**data)
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "form"
            errors.setdefault(field, FIELD_ERRORS.get(field, str(err["msg"])))
        return errors
    return {}


def parse_checkout_form(data: dict[str, Any]) -> CheckoutForm:
    """Build a CheckoutForm or raise CheckoutValidationError with field messages."""
    errors = validate_checkout_form(data)
    if errors:
        raise CheckoutValidationError(errors)
    return CheckoutForm(**data)


class CheckoutService:
    """Places orders for a session cart."""

    def __init__(self, orders: OrderRepository):
        self.orders = orders

    async def place_order(self, store: CartStore, form: CheckoutForm) -> str:
        """
        Store the cart as a pending order and clear it.

        Returns:
            The new order id

        Raises:
            EmptyCartError: the cart has no items
            OrderSubmissionError: the backend failed; the cart is kept
        """
        items = store.items
        if not items:
            raise EmptyCartError()

        snapshot = store.snapshot()
        try:
            order = await self.orders.create(
                customer_name=form.name,
                customer_phone=form.phone,
                customer_address=form.address,
                total_amount=snapshot.total,
                notes=form.notes,
                payment_method=form.payment_method,
            )
            await self.orders.add_items(
                order.id,
                [
                    {
                        "product_id": item.product_id,
                        "product_name": item.title,
                        "quantity": item.quantity,
                        "price": item.numeric_price,
                    }
                    for item in items
                ],
            )
        except Exception as e:
            logger.error(f"Failed to submit order: {e}", exc_info=True)
            raise OrderSubmissionError() from e

        store.clear()
        logger.info(
            f"Order {sanitize_id_for_logging(order.id)} placed: "
            f"{snapshot.item_count} items, total {snapshot.total}"
        )
        return order.id

    async def get_order(self, order_id: str) -> Order | None:
        try:
            return await self.orders.get_by_id(order_id)
        except Exception as e:
            logger.error(f"Failed to load order: {e}", exc_info=True)
            return None

    async def get_order_items(self, order_id: str) -> list[OrderItem]:
        """Order lines for the confirmation page; empty on backend failure."""
        try:
            return await self.orders.get_items(order_id)
        except Exception as e:
            logger.error(f"Failed to load order items: {e}", exc_info=True)
            return []
