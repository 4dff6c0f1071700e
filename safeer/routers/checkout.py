"""
Storefront Checkout Router

Cash-on-delivery checkout and order confirmation lookup.
"""
from fastapi import APIRouter, Depends, HTTPException

from safeer.errors import (
    ERROR_ORDER_NOT_FOUND,
    CheckoutValidationError,
    EmptyCartError,
    OrderSubmissionError,
)
from safeer.logging import get_logger
from safeer.services.checkout import parse_checkout_form
from safeer.services.database import Database
from safeer.services.money import format_amount

from .deps import CartSession, find_cart_session, get_db
from .models import CheckoutRequest

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/checkout", status_code=201)
async def checkout(
    request: CheckoutRequest,
    session: CartSession = Depends(find_cart_session),
    db: Database = Depends(get_db),
):
    """
    Place the session cart as a pending order.

    Errors:
        422: field-level validation messages in detail.errors
        400: the cart is empty
        502: the backend failed to store the order (cart kept)
    """
    try:
        form = parse_checkout_form(request.model_dump())
        order_id = await db.checkout.place_order(session.store, form)
    except CheckoutValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except OrderSubmissionError as e:
        raise HTTPException(status_code=502, detail=e.message)

    return {
        "order_id": order_id,
        "redirect": f"/order-confirmation/{order_id}",
    }


@router.get("/orders/{order_id}")
async def get_order(order_id: str, db: Database = Depends(get_db)):
    """Order confirmation details."""
    order = await db.checkout.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    items = await db.checkout.get_order_items(order.id)
    return {
        "id": order.id,
        "customer_name": order.customer_name,
        "customer_phone": order.customer_phone,
        "customer_address": order.customer_address,
        "notes": order.notes,
        "payment_method": order.payment_method,
        "total_amount": format_amount(order.total_amount),
        "status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "items": [
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "quantity": item.quantity,
                "price": format_amount(item.price),
            }
            for item in items
        ],
    }
