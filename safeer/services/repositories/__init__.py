"""Repositories over the Supabase tables."""
from .base import BaseRepository
from .catalog_repo import CatalogRepository
from .order_repo import OrderRepository

__all__ = [
    "BaseRepository",
    "CatalogRepository",
    "OrderRepository",
]
