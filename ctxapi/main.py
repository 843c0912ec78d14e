"""
FastAPI application for the shared-context currency endpoints and the todo API.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict, Optional

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import __version__, db
from .api import todo_router, user_router
from .context import (
    create_closure_app,
    create_extension_app,
    create_generic_state_app,
    create_mutable_state_app,
    create_shared_cell_app,
    create_state_app,
)
from .currency import AllExchangeRates, EURtoUSD, GBPtoUSD, RateCell
from .logging_utils import configure_logging, reset_request_id, set_request_id
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Starting shared-context API...")
    if settings.database_url:
        logger.info("DATABASE_URL detected, enabling Postgres persistence")
        try:
            await db.init_db(settings.database_url, settings.db_max_connections)
        except Exception:
            logger.exception("Failed to initialize database connection")
            raise
    else:
        logger.info("DATABASE_URL not set, using in-memory todo storage")

    yield

    logger.info("Shutting down shared-context API...")
    await db.close_db()


def mount_context_apps(app: FastAPI, settings: Settings) -> None:
    gbp_rate = settings.gbp_to_usd_rate
    app.mount("/context/closure", create_closure_app(gbp_rate))
    app.mount("/context/shared", create_shared_cell_app(RateCell(gbp_rate)))
    app.mount("/context/state", create_state_app(gbp_rate))
    app.mount("/context/mutable_state", create_mutable_state_app(RateCell(gbp_rate)))
    app.mount(
        "/context/generic",
        create_generic_state_app(
            AllExchangeRates(
                gbp_to_usd=GBPtoUSD(gbp_rate),
                eur_to_usd=EURtoUSD(settings.eur_to_usd_rate),
            )
        ),
    )
    app.mount("/context/extension", create_extension_app(gbp_rate))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Shared Context API",
        description="Context-sharing currency endpoints and a todo CRUD API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.exception_handler(asyncpg.PostgresError)
    @app.exception_handler(asyncpg.InterfaceError)
    async def database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, type(exc).__name__)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Database error"},
        )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_token = set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(request_token)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/")
    async def root() -> Dict[str, str]:
        """Root endpoint with basic API info."""
        return {
            "message": "Shared Context API",
            "todos": "/todo/",
            "users": "/users",
            "context": "/context",
        }

    @app.get("/health")
    async def health_check() -> Dict[str, str]:
        if db.is_enabled():
            await db.select_one_plus_one()
            return {"status": "ok", "database": "postgres"}
        return {"status": "ok", "database": "memory"}

    app.include_router(todo_router)
    app.include_router(user_router)
    mount_context_apps(app, settings)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "ctxapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
