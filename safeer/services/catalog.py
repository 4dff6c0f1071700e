"""
Catalog Domain Service

Category browsing, product listing, search and store settings. Backend
failures never reach the shopper: they are logged and turned into an
empty result.
"""

from safeer.logging import get_logger, sanitize_string_for_logging
from safeer.services.models import Category, Service, StoreSettings
from safeer.services.repositories import CatalogRepository

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT = 10


class CatalogService:
    """Catalog reads with safe defaults on failure."""

    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    async def list_categories(self) -> list[Category]:
        try:
            return await self.repo.list_categories()
        except Exception as e:
            logger.error(f"Failed to load categories: {e}", exc_info=True)
            return []

    async def list_services(self, category_id: str | None = None) -> list[Service]:
        try:
            return await self.repo.list_services(category_id)
        except Exception as e:
            logger.error(f"Failed to load services: {e}", exc_info=True)
            return []

    async def get_service(self, service_id: str) -> Service | None:
        try:
            return await self.repo.get_service(service_id)
        except Exception as e:
            logger.error(
                f"Failed to load service {sanitize_string_for_logging(service_id)}: {e}",
                exc_info=True,
            )
            return None

    async def search_services(self, query: str | None) -> list[Service]:
        """Search titles and descriptions; queries under 2 characters return nothing."""
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []
        try:
            return await self.repo.search_services(query, limit=SEARCH_LIMIT)
        except Exception as e:
            logger.error(
                f"Search failed for {sanitize_string_for_logging(query)}: {e}", exc_info=True
            )
            return []

    async def get_store_settings(self) -> StoreSettings | None:
        try:
            return await self.repo.get_store_settings()
        except Exception as e:
            logger.warning(f"Failed to load store settings: {e}")
            return None
