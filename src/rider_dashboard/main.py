"""FastAPI application for the rider dashboard."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_availability_resolver, get_metrics_client
from .api.exception_handlers import register_exception_handlers
from .api.routes import catalog, readiness, recommendations, worlds
from .config import get_settings
from .utils.log_sanitizer import install_log_sanitizer
from .utils.timestamps import utc_now_iso


def configure_logging(level: str = "INFO") -> None:
    """Set up the root handler and install the sanitizer on it."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    install_log_sanitizer()


configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting Rider Dashboard v{__version__}")
    logger.info(f"World schedule: {settings.schedule_url} (TTL {settings.schedule_ttl_seconds}s)")
    if not settings.garmin_api_base_url:
        logger.warning("GARMIN_API_BASE_URL is not configured. Readiness sync will be unavailable.")

    yield

    logger.info("Shutting down Rider Dashboard")
    await get_availability_resolver().close()
    if settings.garmin_api_base_url:
        await get_metrics_client().close()


app = FastAPI(
    title="Rider Dashboard API",
    description="Readiness scoring and route recommendations for virtual cycling",
    version=__version__,
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(readiness.router, prefix="/api/v1/readiness", tags=["readiness"])
app.include_router(worlds.router, prefix="/api/v1/worlds", tags=["worlds"])
app.include_router(catalog.router, prefix="/api/v1", tags=["catalog"])
app.include_router(recommendations.router, prefix="/api/v1", tags=["recommendations"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "time": utc_now_iso()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
