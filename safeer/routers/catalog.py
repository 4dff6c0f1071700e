"""
Storefront Catalog Router

Categories, product listing, search, store settings and the per-product
WhatsApp inquiry link.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from safeer.cart import build_whatsapp_url, compose_inquiry_message
from safeer.config import SITE_URL
from safeer.errors import ERROR_SERVICE_NOT_FOUND
from safeer.services.database import Database
from safeer.services.models import Service
from safeer.services.pricing import normalize_price

from .deps import get_db

router = APIRouter(tags=["catalog"])


def _service_summary(service: Service) -> dict:
    price = normalize_price(service.effective_price)
    return {
        "id": service.id,
        "title": service.title,
        "description": service.description,
        "price": price.display,
        "numeric_price": float(price.numeric),
        "sale_price": service.sale_price,
        "category_id": service.category_id,
        "category_name": service.category.name if service.category else None,
        "image": service.display_image,
    }


@router.get("/categories")
async def list_categories(db: Database = Depends(get_db)):
    categories = await db.catalog.list_categories()
    return [category.model_dump(mode="json") for category in categories]


@router.get("/services")
async def list_services(
    category_id: Optional[str] = Query(None, description="Only this category"),
    db: Database = Depends(get_db),
):
    services = await db.catalog.list_services(category_id)
    return [_service_summary(service) for service in services]


@router.get("/services/{service_id}")
async def get_service(service_id: str, db: Database = Depends(get_db)):
    service = await db.catalog.get_service(service_id)
    if service is None:
        raise HTTPException(status_code=404, detail=ERROR_SERVICE_NOT_FOUND)
    return {
        **_service_summary(service),
        "images": [image.image_url for image in service.product_images],
    }


@router.get("/services/{service_id}/inquiry")
async def get_service_inquiry(service_id: str, db: Database = Depends(get_db)):
    """WhatsApp link asking about one product."""
    service = await db.catalog.get_service(service_id)
    if service is None:
        raise HTTPException(status_code=404, detail=ERROR_SERVICE_NOT_FOUND)
    product_url = f"{SITE_URL.rstrip('/')}/product/{service.id}"
    message = compose_inquiry_message(service.title, product_url)
    return {"message": message, "url": build_whatsapp_url(message)}


@router.get("/search")
async def search_services(
    q: str = Query("", max_length=200, description="Search text (2+ characters)"),
    db: Database = Depends(get_db),
):
    services = await db.catalog.search_services(q)
    return [_service_summary(service) for service in services]


@router.get("/settings")
async def get_store_settings(db: Database = Depends(get_db)):
    settings = await db.catalog.get_store_settings()
    return settings.model_dump() if settings else {}
