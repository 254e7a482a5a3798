"""FastAPI application entrypoint (``uvicorn juvo.main:app``)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status
from sqlalchemy import text

from juvo.core.config import Settings, get_settings
from juvo.core.database import db
from juvo.core.metrics import build_metrics_response, instrument_http_request
from juvo.modules.booking.router import router as booking_router
from juvo.modules.catalog.router import router as catalog_router
from juvo.modules.scheduling.router import router as scheduling_router
from juvo.modules.settlement.router import router as settlement_router
from juvo.shared.exceptions import register_exception_handlers
from juvo.shared.utils import utc_now

logger = logging.getLogger(__name__)

API_ROUTERS = (catalog_router, booking_router, scheduling_router, settlement_router)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    _configure_logging(settings)
    logger.info("Starting %s (%s)", settings.app_name, settings.app_env)
    db.init(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
    )
    try:
        yield
    finally:
        logger.info("Shutting down %s", settings.app_name)
        await db.dispose()


async def healthcheck() -> dict[str, str]:
    """Liveness probe; never touches the database."""
    return {"status": "ok"}


async def _is_database_ready() -> bool:
    if not db.is_initialized:
        return False
    try:
        async with db.session() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database readiness check failed")
        return False
    return True


async def readiness_check() -> dict[str, str]:
    """Readiness probe: 503 until the database answers."""
    if not await _is_database_ready():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not ready",
        )
    return {
        "status": "ready",
        "database": "ok",
        "timestamp": utc_now().isoformat(),
    }


async def metrics_endpoint(_: Request) -> Response:
    return build_metrics_response()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    application.state.settings = settings

    application.middleware("http")(instrument_http_request)
    register_exception_handlers(application)

    for router in API_ROUTERS:
        application.include_router(router, prefix=settings.api_prefix)

    application.add_api_route("/health", healthcheck, methods=["GET"], tags=["ops"])
    application.add_api_route("/ready", readiness_check, methods=["GET"], tags=["ops"])
    application.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)
    return application


app = create_app()
