"""Storefront API routers (mounted under /api)."""
from fastapi import APIRouter

from .ai_chat import router as ai_router
from .cart import router as cart_router
from .catalog import router as catalog_router
from .checkout import router as checkout_router

router = APIRouter()
router.include_router(catalog_router)
router.include_router(cart_router)
router.include_router(checkout_router)
router.include_router(ai_router)

__all__ = ["router"]
