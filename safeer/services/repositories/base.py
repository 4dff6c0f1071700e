"""Base repository with shared Supabase client."""

from supabase._async.client import AsyncClient


class BaseRepository:
    """Base class for all repositories.

    All methods await `.execute()` on the async client.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client
