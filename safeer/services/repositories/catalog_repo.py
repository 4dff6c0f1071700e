"""Catalog Repository - categories, services and store settings."""

import re

from safeer.services.models import Category, Service, StoreSettings

from .base import BaseRepository

SERVICE_WITH_CATEGORY = "*, category:categories(*)"
SERVICE_WITH_IMAGES = "*, category:categories(*), product_images(image_url)"

# Characters that would break a PostgREST or() filter
_FILTER_SPECIAL = re.compile(r"[,()%*\\]")


class CatalogRepository(BaseRepository):
    """Read-only catalog queries."""

    async def list_categories(self) -> list[Category]:
        result = await self.client.table("categories").select("*").order("name").execute()
        return [Category(**row) for row in result.data or []]

    async def list_services(self, category_id: str | None = None) -> list[Service]:
        query = self.client.table("services").select(SERVICE_WITH_CATEGORY)
        if category_id:
            query = query.eq("category_id", category_id)
        result = await query.order("created_at", desc=True).execute()
        return [Service(**row) for row in result.data or []]

    async def get_service(self, service_id: str) -> Service | None:
        result = (
            await self.client.table("services")
            .select(SERVICE_WITH_IMAGES)
            .eq("id", service_id)
            .limit(1)
            .execute()
        )
        return Service(**result.data[0]) if result.data else None

    async def search_services(self, query: str, limit: int = 10) -> list[Service]:
        """Case-insensitive substring match on title or description."""
        term = _FILTER_SPECIAL.sub(" ", query).strip()
        if not term:
            return []
        result = (
            await self.client.table("services")
            .select(SERVICE_WITH_IMAGES)
            .or_(f"title.ilike.%{term}%,description.ilike.%{term}%")
            .limit(limit)
            .execute()
        )
        return [Service(**row) for row in result.data or []]

    async def get_store_settings(self) -> StoreSettings | None:
        result = await self.client.table("store_settings").select("*").limit(1).execute()
        return StoreSettings(**result.data[0]) if result.data else None
