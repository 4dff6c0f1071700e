"""
Logging setup for the storefront.

Every module gets its logger here:
    from safeer.logging import get_logger
    logger = get_logger(__name__)

Shopper-controlled values (search text, user-agents, phone numbers,
session ids) go through the sanitize_* helpers before they are logged.
"""

import logging
import os
import re
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Vercel prefixes its own timestamp
LOG_FORMAT_SERVERLESS = "%(levelname)s - %(name)s - %(message)s"

# Clients that log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")

_CONTROL_CHARS = re.compile(r"[\r\n\t\x00]")
_CONTROL_REPLACEMENTS = {"\r": "\\r", "\n": "\\n", "\t": "\\t", "\x00": ""}


def _level_from_env() -> int:
    name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def setup_logging() -> None:
    """Attach a stdout handler to the root logger once per process."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _level_from_env()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    fmt = LOG_FORMAT_SERVERLESS if os.environ.get("VERCEL") == "1" else LOG_FORMAT
    handler.setFormatter(logging.Formatter(fmt))

    root.setLevel(level)
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


setup_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _neutralize(value) -> str:
    """Escape line breaks so one log call stays one log line."""
    return _CONTROL_CHARS.sub(lambda m: _CONTROL_REPLACEMENTS[m.group()], str(value))


def sanitize_id_for_logging(id_value: str | None) -> str:
    """First 8 characters of an id (session ids are secrets), or "N/A"."""
    if not id_value:
        return "N/A"
    return _neutralize(id_value)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Escape and shorten free text for a log line.

    Args:
        value: Shopper-controlled text
        max_length: Longer values are cut and suffixed with "..."
    """
    if not value:
        return "N/A"
    safe_value = _neutralize(value)
    if len(safe_value) > max_length:
        return f"{safe_value[:max_length]}..."
    return safe_value


__all__ = [
    "get_logger",
    "setup_logging",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
