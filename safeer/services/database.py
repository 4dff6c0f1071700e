"""
Supabase Database Service

Provides the Database facade over the repositories and domain services.

Usage:
    from safeer.services.database import get_database_async

    # At FastAPI startup (lifespan):
    await init_database()

    db = await get_database_async()
    services = await db.catalog.search_services("sauvage")
"""

import asyncio
from typing import Optional

from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client

from safeer.config import get_required
from safeer.logging import get_logger
from safeer.services.catalog import CatalogService
from safeer.services.checkout import CheckoutService
from safeer.services.repositories import CatalogRepository, OrderRepository

logger = get_logger(__name__)


class Database:
    """
    Supabase client plus the storefront services built on it.

    Must be created via `Database.create()` or `init_database()`.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

        self._catalog_repo = CatalogRepository(self.client)
        self._orders_repo = OrderRepository(self.client)

        self.catalog = CatalogService(self._catalog_repo)
        self.checkout = CheckoutService(self._orders_repo)

    @classmethod
    async def create(cls) -> "Database":
        """Create the async Supabase client from SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY."""
        url = get_required("SUPABASE_URL")
        key = get_required("SUPABASE_SERVICE_ROLE_KEY")
        client = await acreate_client(url, key)
        return cls(client)


_db: Database | None = None
_db_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    global _db_lock
    if _db_lock is None:
        _db_lock = asyncio.Lock()
    return _db_lock


async def init_database() -> Database:
    """Initialize the database singleton (idempotent)."""
    global _db
    if _db is not None:
        return _db

    async with _get_lock():
        if _db is None:
            logger.info("Initializing async Supabase client...")
            _db = await Database.create()
            logger.info("Async Supabase client initialized successfully")
    return _db


async def get_database_async() -> Database:
    """Get the database, initializing it lazily."""
    if _db is None:
        return await init_database()
    return _db


async def close_database() -> None:
    """Drop the singleton at shutdown."""
    global _db
    if _db is not None:
        try:
            await _db.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Error closing Supabase client: {e}")
        _db = None
        logger.info("Supabase client closed")
