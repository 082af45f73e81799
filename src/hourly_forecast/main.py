"""Main FastAPI application for the hourly forecast dashboard."""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from hourly_forecast.api.endpoints import router as dashboard_router
from hourly_forecast.config import HOST, PORT, DEBUG, LOG_LEVEL, VERSION
from hourly_forecast.logging_config import configure_logging
from hourly_forecast.session import SessionController

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

STATIC_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start the dashboard session on startup and stop it on shutdown."""
    session: SessionController = app.state.session
    logger.info("Starting Hour-by-Hour Forecast dashboard")
    await session.start()
    try:
        yield
    finally:
        logger.info("Shutting down Hour-by-Hour Forecast dashboard")
        try:
            await session.stop()
        except Exception as e:
            logger.error(f"Shutdown error: {e}")


def create_app(session: Optional[SessionController] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        session: Session controller to serve (creates default if None)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Hour-by-Hour Forecast",
        description="Single-user weather dashboard backed by the Open-Meteo geocoding and forecast APIs",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.session = session or SessionController()

    app.include_router(dashboard_router)
    app.mount("/static", StaticFiles(directory=STATIC_PATH), name="static")

    # Serve the web interface
    @app.get("/", tags=["root"], include_in_schema=False)
    async def root():
        """Root endpoint serving the web interface."""
        return FileResponse(os.path.join(STATIC_PATH, "index.html"))

    return app


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        create_app(),
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower() if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
