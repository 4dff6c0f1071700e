"""
Safeer Perfumes Storefront - Main FastAPI Application

Single entry point for the storefront JSON API, deployed as one
serverless function. Crawler requests are intercepted by the
pre-rendering middleware before any route runs.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safeer.config import CORS_ORIGINS
from safeer.logging import get_logger
from safeer.middleware import CrawlerGateMiddleware
from safeer.routers import router as storefront_router
from safeer.services.database import close_database, init_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    try:
        await init_database()
    except ValueError as e:
        # Missing Supabase settings: catalog/checkout routes retry lazily
        logger.error(f"Database not initialized at startup: {e}")
    yield
    await close_database()


app = FastAPI(
    title="Safeer Perfumes Storefront",
    description="Catalog, cart, checkout and store assistant API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,  # cart session cookie
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CrawlerGateMiddleware)

app.include_router(storefront_router, prefix="/api")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "safeer"}
