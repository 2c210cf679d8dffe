# blog_search/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
from typing import AsyncGenerator

from fastapi import FastAPI, Response

from .core.background import background_tasks
from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME, SEARCH_ROUTE_PREFIX
from .database import Base, engine
from .errors import register_error_handlers
from .monitoring.prometheus_metrics import prometheus_metrics
from .routes import search
from .schemas.main_responses import HealthResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

SHUTDOWN_DRAIN_TIMEOUT_S = 5.0


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{BRAND_NAME} search API starting up...")
    logger.info(f"Environment: {settings.environment}")

    if settings.environment == "development" and not is_running_tests():
        # Local convenience; deployed schemas are owned by the blog service migrations
        Base.metadata.create_all(bind=engine)

    yield

    logger.info(f"{BRAND_NAME} search API shutting down...")
    pending = background_tasks.pending
    if pending:
        logger.info(f"Waiting for {pending} background task(s) to finish")
    await background_tasks.drain(timeout=SHUTDOWN_DRAIN_TIMEOUT_S)


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

register_error_handlers(app)

app.include_router(search.router, prefix=SEARCH_ROUTE_PREFIX)


@app.get("/health", response_model=HealthResponse, include_in_schema=False)
def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=f"{BRAND_NAME.lower()}-search",
        version=API_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        pending_background_tasks=background_tasks.pending,
    )


@app.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    """Prometheus exposition for the service registry."""
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
    )
