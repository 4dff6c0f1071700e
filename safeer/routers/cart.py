"""
Storefront Cart Router

Session cart endpoints. Every handler is async so the cart store and its
auto-hide timer live on the event loop thread. Only adding an item starts
a session; callers without one see an empty cart.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, Response

from safeer.cart import CartSessionRegistry
from safeer.config import CART_SESSION_COOKIE
from safeer.errors import ERROR_LINE_ITEM_NOT_FOUND
from safeer.logging import get_logger

from .deps import CartSession, find_cart_session, get_cart_session, get_sessions
from .models import AddToCartRequest, TogglePresentationRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


@router.get("/cart")
async def get_cart(session: CartSession = Depends(find_cart_session)):
    """Current cart with derived totals and panel state."""
    return session.store.to_dict()


@router.post("/cart/items", status_code=201)
async def add_to_cart(request: AddToCartRequest, session: CartSession = Depends(get_cart_session)):
    """Add one unit of a product (same title bumps the quantity)."""
    item = session.store.add_item(
        title=request.title,
        price=request.price,
        image_url=request.image_url,
        product_id=request.product_id,
    )
    return {"item": item.to_dict(), "cart": session.store.to_dict()}


@router.patch("/cart/items/{item_id}")
async def update_cart_item(
    item_id: str,
    request: UpdateCartItemRequest,
    session: CartSession = Depends(find_cart_session),
):
    """Set a line item's quantity; quantities below 1 remove it."""
    if not session.store.set_quantity(item_id, request.quantity):
        raise HTTPException(status_code=404, detail=ERROR_LINE_ITEM_NOT_FOUND)
    return session.store.to_dict()


@router.delete("/cart/items/{item_id}")
async def remove_cart_item(item_id: str, session: CartSession = Depends(find_cart_session)):
    if not session.store.remove_item(item_id):
        raise HTTPException(status_code=404, detail=ERROR_LINE_ITEM_NOT_FOUND)
    return session.store.to_dict()


@router.delete("/cart")
async def clear_cart(session: CartSession = Depends(find_cart_session)):
    session.store.clear()
    return session.store.to_dict()


@router.post("/cart/toggle")
async def toggle_cart(
    request: TogglePresentationRequest,
    session: CartSession = Depends(find_cart_session),
):
    """Open, close, or flip the cart panel."""
    session.store.toggle_presentation(request.open)
    return session.store.to_dict()


@router.post("/cart/whatsapp")
async def send_order_via_whatsapp(session: CartSession = Depends(find_cart_session)):
    """
    Compose the WhatsApp order message.

    An empty cart is not an error: the response carries a warning instead
    of a URL.
    """
    handoff = session.store.compose_order_message()
    if not handoff.success:
        return {"success": False, "warning": handoff.warning, "cart": session.store.to_dict()}
    return {
        "success": True,
        "message": handoff.message,
        "url": handoff.url,
        "cart": session.store.to_dict(),
    }


@router.delete("/cart/session")
async def end_cart_session(
    request: Request,
    response: Response,
    sessions: CartSessionRegistry = Depends(get_sessions),
):
    """End the browsing session and discard its cart."""
    ended = sessions.end(request.cookies.get(CART_SESSION_COOKIE))
    response.delete_cookie(CART_SESSION_COOKIE)
    return {"success": ended}
