"""
Backend Service - Main Application
==================================

Entry point of the service.

Startup:
1. Load settings from ./env (once, here)
2. Setup structured logging
3. Connect to the database
4. On success, serve the FastAPI app on PORT (default 8000)
   On failure, log "MONGO db connection failed !!!" and stop

Run with ``python -m src.main`` or the ``backend-bootstrap`` script.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional, Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import bootstrap
from src.config import DEFAULT_ENV_FILE, Settings, load_settings
from src.infrastructure.database import DatabaseHandle, make_connector
from src.infrastructure.server import UvicornListener
from src.shared.api.middleware import CorrelationIDMiddleware, global_exception_handler
from src.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    The database is connected before the server starts, so startup has
    nothing to do. Shutdown closes the handle.
    """
    settings: Settings = app.state.settings
    logger.info("Starting service", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    yield  # Application runs here

    logger.info("Shutting down service")
    database: Optional[DatabaseHandle] = app.state.database
    if database is not None:
        await database.close()
    logger.info("Service shutdown complete")


def create_app(settings: Settings, database: Optional[DatabaseHandle] = None) -> FastAPI:
    """Build the FastAPI application for ``settings``."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIDMiddleware)
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """
        Health check endpoint for load balancers and orchestrators.

        Returns 503 when the database no longer answers.
        """
        handle: Optional[DatabaseHandle] = request.app.state.database
        connected = handle is not None and await handle.ping()
        body = {
            "status": "healthy" if connected else "degraded",
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": {"database": "connected" if connected else "unavailable"},
        }
        return JSONResponse(status_code=200 if connected else 503, content=body)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with service information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "docs": "/docs",
            "health": "/health",
        }

    return app


async def serve(settings: Settings) -> bootstrap.BootstrapOutcome:
    """Connect, then serve ``create_app(settings)`` until shutdown."""
    app = create_app(settings)
    listener = UvicornListener(app, host=settings.host, log_level=settings.log_level)

    def attach(handle: DatabaseHandle) -> None:
        app.state.database = handle

    return await bootstrap.start(
        settings,
        make_connector(settings),
        listener,
        on_connected=attach,
    )


def main(env_file: Union[str, Path, None] = DEFAULT_ENV_FILE) -> None:
    settings = load_settings(env_file)
    setup_logging(level=settings.log_level, environment=settings.environment)
    # uvicorn re-raises the SIGINT it captured once shutdown completes
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
