"""
Storefront configuration.

All settings come from environment variables. Secrets (Supabase service key,
chat-completion key, prerender token) have no defaults and stay server-side.
"""

import os
from decimal import Decimal


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


# Backend (Supabase)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Chat completion (Groq, OpenAI-compatible)
GROQ_API_KEY = os.environ.get("GROQ_API_KEY", "")
GROQ_API_URL = os.environ.get("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
GROQ_MODEL = os.environ.get("GROQ_MODEL", "openai/gpt-oss-20b")
GROQ_TIMEOUT_SECONDS = float(os.environ.get("GROQ_TIMEOUT_SECONDS", "30"))

# Crawler pre-rendering
PRERENDER_TOKEN = os.environ.get("PRERENDER_TOKEN", "")
PRERENDER_SERVICE_URL = os.environ.get("PRERENDER_SERVICE_URL", "https://service.prerender.io/")

# Store
SITE_URL = os.environ.get("SITE_URL", "https://safeer-perfumes.netlify.app")
WHATSAPP_NUMBER = os.environ.get("WHATSAPP_NUMBER", "201027381559")
CURRENCY_SUFFIX = os.environ.get("CURRENCY_SUFFIX", "ج")
SHIPPING_FEE = Decimal(os.environ.get("SHIPPING_FEE", "100"))

# Cart sessions
CART_AUTO_HIDE_SECONDS = float(os.environ.get("CART_AUTO_HIDE_SECONDS", "4"))
CART_SESSION_TTL_SECONDS = int(os.environ.get("CART_SESSION_TTL_SECONDS", "86400"))
CART_SESSION_COOKIE = "cart_session"

# HTTP
CORS_ORIGINS = _env_list("CORS_ORIGINS", SITE_URL)


def get_required(name: str) -> str:
    """
    Read a required setting at first use.

    Raises:
        ValueError: if the environment variable is missing or empty
    """
    value = os.environ.get(name, "")
    if not value:
        raise ValueError(f"{name} must be set")
    return value
