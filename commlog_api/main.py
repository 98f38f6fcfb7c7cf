"""
Communication Log FastAPI Backend

Entry point for the API server that exposes call and SMS records kept in
Google Calendar.

Architecture:
- FastAPI handles HTTP routing and response validation
- Pydantic schemas define the JSON shapes
- CommunicationService runs the classification and search pipeline
- GoogleCalendarClient is the only outbound dependency

Run with:
    uvicorn commlog_api.main:app --reload --port 3001

Or:
    python -m commlog_api.main
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from commlog import __version__
from commlog.core.config import Config
from commlog.core.logging_setup import configure_logging
from commlog.integrations.google_calendar import GoogleCalendarClient
from commlog_api.dependencies import load_config
from commlog_api.errors import register_exception_handlers
from commlog_api.routers import (
    events_router,
    search_router,
    calendars_router,
    health_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup: report configuration and warn when Google credentials are missing.
    """
    config: Config = app.state.config
    logger.info(f"Display timezone: {config.display_timezone}")
    if not config.has_google_credentials():
        logger.warning(
            "GOOGLE_ACCESS_TOKEN / GOOGLE_REFRESH_TOKEN not set; "
            "calendar endpoints will fail until credentials are configured"
        )

    yield

    logger.info("Shutting down...")


def create_app(config: Optional[Config] = None, prefix: str = "") -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Configuration to use (default: the cached application Config)
        prefix: Path prefix for every route, e.g. "/api" for serverless hosting
    """
    if config is None:
        config = load_config()

    configure_logging(config.get("log_level", "INFO"))

    app = FastAPI(
        title="Communication Log API",
        description="""
        Call and SMS records kept as Google Calendar events.

        ## Features

        - **Events**: Calls and SMS messages in a date range or on a single day
        - **Search**: Every word of the query must match contact, phone or text
        - **Calendars**: Calendars available to the account
        """,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.calendar_client = GoogleCalendarClient.from_config(config)

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, debug=config.debug)

    # Include routers
    app.include_router(events_router, prefix=prefix)
    app.include_router(search_router, prefix=prefix)
    app.include_router(calendars_router, prefix=prefix)
    app.include_router(health_router, prefix=prefix)

    @app.get(f"{prefix}/")
    async def root():
        """API root - returns basic info and available endpoints."""
        return {
            "name": "Communication Log API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "events": f"{prefix}/events",
                "day": f"{prefix}/events/day/{{date}}",
                "search": f"{prefix}/events/search",
                "calendars": f"{prefix}/calendars",
                "health": f"{prefix}/health",
            }
        }

    return app


app = create_app()


# Allow running directly with: python -m commlog_api.main
if __name__ == "__main__":
    import uvicorn
    config = load_config()
    uvicorn.run(
        "commlog_api.main:app",
        host=config.get("host", "0.0.0.0"),
        port=int(config.get("port", 3001)),
        reload=config.debug,
    )
