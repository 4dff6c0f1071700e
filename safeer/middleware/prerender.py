"""
Crawler pre-rendering middleware.

Search engine and link-preview bots get a pre-rendered HTML snapshot from
the rendering service (Prerender.io); everyone else, and every static
asset, goes through the normal app. Any failure to fetch the snapshot
falls back to the normal response.
"""

import re
from enum import Enum
from typing import Optional

import httpx
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from safeer.config import PRERENDER_SERVICE_URL, PRERENDER_TOKEN
from safeer.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

CRAWLER_UA_SUBSTRINGS = (
    "googlebot",
    "bingbot",
    "yandex",
    "duckduckbot",
    "baiduspider",
    "facebookexternalhit",
    "twitterbot",
    "rogerbot",
    "linkedinbot",
    "embedly",
    "quora link preview",
    "showyoubot",
    "outbrain",
    "pinterest",
    "slackbot",
    "vkshare",
    "w3c_validator",
)

# Paths ending in a short extension (.js, .css, .png, .woff2) are assets
STATIC_ASSET_PATTERN = re.compile(r"\.[a-zA-Z0-9]{2,5}$")

PRERENDERED_HEADER = "x-prerendered"

# Snapshots are page reads; writes always reach the app
RENDERABLE_METHODS = frozenset({"GET", "HEAD"})

# Not forwarded from the upstream response: httpx already decoded the body
_DROPPED_RESPONSE_HEADERS = {
    "connection",
    "content-encoding",
    "content-length",
    "keep-alive",
    "transfer-encoding",
}


class GateState(str, Enum):
    PASS_THROUGH = "pass_through"
    PROXY_RENDER = "proxy_render"


def is_crawler(user_agent: Optional[str]) -> bool:
    ua = (user_agent or "").lower()
    return any(bot in ua for bot in CRAWLER_UA_SUBSTRINGS)


def is_static_asset(path: str) -> bool:
    return STATIC_ASSET_PATTERN.search(path) is not None


def classify_request(path: str, user_agent: Optional[str], method: str = "GET") -> GateState:
    """Decide whether a request should be served a pre-rendered snapshot."""
    if method.upper() not in RENDERABLE_METHODS or is_static_asset(path):
        return GateState.PASS_THROUGH
    if is_crawler(user_agent):
        return GateState.PROXY_RENDER
    return GateState.PASS_THROUGH


async def fetch_prerendered(
    url: str,
    user_agent: str,
    token: str,
    service_url: str = PRERENDER_SERVICE_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Response]:
    """
    Fetch a snapshot of `url` from the rendering service.

    Returns None on network errors and on 5xx from the service; other
    statuses (including the page's own 404) are passed through.
    """
    try:
        async with httpx.AsyncClient(transport=transport) as client:
            upstream = await client.get(
                f"{service_url}{url}",
                headers={"X-Prerender-Token": token, "User-Agent": user_agent},
            )
    except httpx.HTTPError as e:
        logger.error(f"Prerender proxy failed for {sanitize_string_for_logging(url)}: {e}")
        return None

    if upstream.status_code >= 500:
        logger.warning(
            f"Prerender service returned {upstream.status_code} for "
            f"{sanitize_string_for_logging(url)}, serving normal response"
        )
        return None

    headers = {
        name: value
        for name, value in upstream.headers.items()
        if name.lower() not in _DROPPED_RESPONSE_HEADERS
    }
    headers[PRERENDERED_HEADER] = "true"
    return Response(content=upstream.content, status_code=upstream.status_code, headers=headers)


class CrawlerGateMiddleware(BaseHTTPMiddleware):
    """Serve crawlers pre-rendered snapshots; pass everything else through."""

    def __init__(
        self,
        app,
        token: Optional[str] = None,
        service_url: str = PRERENDER_SERVICE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(app)
        self.token = PRERENDER_TOKEN if token is None else token
        self.service_url = service_url
        self.transport = transport
        self._warned_missing_token = False

    async def dispatch(self, request: Request, call_next):
        user_agent = request.headers.get("user-agent", "")

        state = classify_request(request.url.path, user_agent, request.method)
        if state is GateState.PASS_THROUGH:
            return await call_next(request)

        if not self.token:
            if not self._warned_missing_token:
                logger.warning("PRERENDER_TOKEN is not set; crawlers get the normal response")
                self._warned_missing_token = True
            return await call_next(request)

        response = await fetch_prerendered(
            str(request.url),
            user_agent,
            self.token,
            service_url=self.service_url,
            transport=self.transport,
        )
        if response is None:
            return await call_next(request)

        logger.info(
            f"Served pre-rendered {request.url.path} to {sanitize_string_for_logging(user_agent)}"
        )
        return response
