"""Per-session cart stores kept in process memory."""
import secrets
import time
from typing import Callable, Optional

from safeer.config import CART_SESSION_TTL_SECONDS
from safeer.logging import get_logger, sanitize_id_for_logging

from .service import CartStore

logger = get_logger(__name__)


# Full idle sweeps run at most this often; lookups check their own entry
SWEEP_INTERVAL_SECONDS = 60


class CartSessionRegistry:
    """
    Owns one CartStore per browsing session.

    A store is constructed when a session starts and discarded when the
    session ends or has been idle for `ttl_seconds`. Carts never outlive
    their session.
    """

    def __init__(
        self,
        store_factory: Callable[[], CartStore] = CartStore,
        ttl_seconds: int = CART_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ):
        self._store_factory = store_factory
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()
        self._sessions: dict[str, tuple[CartStore, float]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def start(self) -> tuple[str, CartStore]:
        """Start a new session with an empty cart."""
        now = self._clock()
        self._maybe_sweep(now)
        session_id = secrets.token_urlsafe(24)
        store = self._store_factory()
        self._sessions[session_id] = (store, now)
        logger.info(f"Cart session started: {sanitize_id_for_logging(session_id)}")
        return session_id, store

    def get(self, session_id: Optional[str]) -> Optional[CartStore]:
        """Return the session's store and refresh its idle timer."""
        now = self._clock()
        self._maybe_sweep(now)
        entry = self._sessions.get(session_id) if session_id else None
        if entry is None:
            return None

        store, last_seen = entry
        if now - last_seen > self._ttl_seconds:
            self._discard(session_id)
            return None
        self._sessions[session_id] = (store, now)
        return store

    def get_or_start(self, session_id: Optional[str]) -> tuple[str, CartStore]:
        store = self.get(session_id)
        if store is not None:
            return session_id, store
        return self.start()

    def end(self, session_id: Optional[str]) -> bool:
        """Discard a session's cart. Returns False if it did not exist."""
        if not session_id or not self._discard(session_id):
            return False
        logger.info(f"Cart session ended: {sanitize_id_for_logging(session_id)}")
        return True

    def _discard(self, session_id: str) -> bool:
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            return False
        entry[0].close()
        return True

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep < self._sweep_interval:
            return
        self._last_sweep = now

        expired = [
            session_id
            for session_id, (_, last_seen) in self._sessions.items()
            if now - last_seen > self._ttl_seconds
        ]
        for session_id in expired:
            self._discard(session_id)
        if expired:
            logger.info(f"Evicted {len(expired)} idle cart sessions")


_registry: Optional[CartSessionRegistry] = None


def get_cart_sessions() -> CartSessionRegistry:
    """Get the process-wide session registry."""
    global _registry
    if _registry is None:
        _registry = CartSessionRegistry()
    return _registry
