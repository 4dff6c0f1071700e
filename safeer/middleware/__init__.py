"""HTTP middlewares."""
from .prerender import CrawlerGateMiddleware, GateState, classify_request, is_crawler, is_static_asset

__all__ = [
    "CrawlerGateMiddleware",
    "GateState",
    "classify_request",
    "is_crawler",
    "is_static_asset",
]
