"""
Shared Dependencies for Routers

FastAPI dependencies for the database, the chat assistant and the
per-session cart store.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request, Response

from safeer.assistant import ChatAssistant, get_chat_assistant
from safeer.cart import CartSessionRegistry, CartStore, get_cart_sessions
from safeer.config import CART_SESSION_COOKIE, CART_SESSION_TTL_SECONDS
from safeer.services.database import Database, get_database_async


@dataclass
class CartSession:
    # None when the caller has no live session; the store is then a
    # throwaway empty cart that is never registered
    session_id: Optional[str]
    store: CartStore


async def get_db() -> Database:
    return await get_database_async()


def get_sessions() -> CartSessionRegistry:
    return get_cart_sessions()


def get_assistant() -> ChatAssistant:
    return get_chat_assistant()


def set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        CART_SESSION_COOKIE,
        session_id,
        max_age=CART_SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
    )


async def find_cart_session(
    request: Request,
    sessions: CartSessionRegistry = Depends(get_sessions),
) -> CartSession:
    """Resolve the caller's cart from its cookie without starting a session."""
    session_id = request.cookies.get(CART_SESSION_COOKIE)
    store = sessions.get(session_id)
    if store is None:
        return CartSession(session_id=None, store=CartStore())
    return CartSession(session_id=session_id, store=store)


async def get_cart_session(
    request: Request,
    response: Response,
    sessions: CartSessionRegistry = Depends(get_sessions),
) -> CartSession:
    """Resolve the caller's cart, starting a session if needed (adding items only)."""
    current_id = request.cookies.get(CART_SESSION_COOKIE)
    session_id, store = sessions.get_or_start(current_id)
    if session_id != current_id:
        set_session_cookie(response, session_id)
    return CartSession(session_id=session_id, store=store)
