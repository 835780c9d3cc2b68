"""
Arqui Quote API - Main Application

Prices architecture projects: covered area times floors times a plan rate,
plus add-on services priced flat, per unit area, or as a percent of the base.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from arqui_api.api.v1.router import api_router
from arqui_api.config import settings
from arqui_api.database import init_db
from arqui_api.exceptions import register_exception_handlers
from arqui_api.middleware import CacheHeadersMiddleware, CorrelationIdMiddleware, CorrelationLogFilter
# Import all models to register them with SQLAlchemy metadata before init_db()
from arqui_api.models import PricingPlan, Service, Quote, QuoteLineItem  # noqa: F401

API_VERSION = "1.0.0"


def _log_level() -> int:
    if settings.LOG_LEVEL:
        return logging.getLevelName(settings.LOG_LEVEL)
    return logging.DEBUG if settings.DEBUG else logging.INFO


logging.basicConfig(
    level=_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
)
for _handler in logging.getLogger().handlers:
    _handler.addFilter(CorrelationLogFilter())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Arqui Quote API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    # Don't log the full database URL, it may carry credentials
    if settings.DATABASE_URL:
        logger.info(f"Database URL prefix: {settings.DATABASE_URL[:30]}...")
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {type(e).__name__}")
        logger.warning("App starting without database - quote endpoints will fail")
    yield
    # Shutdown
    logger.info("Shutting down Arqui Quote API...")


docs_url = "/docs" if settings.DOCS_ENABLED else None
redoc_url = "/redoc" if settings.DOCS_ENABLED else None

app = FastAPI(
    title="Arqui Quote API",
    description="Quote pricing engine for architecture projects",
    version=API_VERSION,
    docs_url=docs_url,
    redoc_url=redoc_url,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Added last runs first: correlation ids are set before anything logs
app.add_middleware(CacheHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

# Include routers
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - API info."""
    response = {
        "name": "Arqui Quote API",
        "version": API_VERSION,
        "health": "/health",
    }
    # Only include docs link if enabled
    if settings.DOCS_ENABLED:
        response["docs"] = "/docs"
    return response


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": API_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# For running with uvicorn directly (development only)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "arqui_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
