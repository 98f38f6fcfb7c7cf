"""
Dependency injection for FastAPI endpoints.

Provides the application Config, the shared calendar client and a
per-request CommunicationService built on top of them.

Pattern: **Dependency Injection** - FastAPI's Depends() mechanism lets
route handlers receive the calendar client as a collaborator held on the
application state instead of a module-level global; tests swap it through
app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends, Request

from commlog.core.config import Config
from commlog.communications.service import CommunicationService
from commlog.integrations.google_calendar import GoogleCalendarClient


@lru_cache()
def load_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only read settings and environment once
    for the lifetime of the process.
    """
    return Config()


def get_config(request: Request) -> Config:
    """Config the running app was created with."""
    return request.app.state.config


def get_calendar_client(request: Request) -> GoogleCalendarClient:
    """
    Get the app's Google Calendar client.

    The client is created once with the app; it shares credentials across
    requests and builds a separate service per call.
    """
    return request.app.state.calendar_client


def get_communication_service(
    client: GoogleCalendarClient = Depends(get_calendar_client),
    config: Config = Depends(get_config),
) -> CommunicationService:
    """
    Get CommunicationService for event operations.

    Creates a new service per request, sharing the client and Config.
    """
    return CommunicationService.from_config(client, config)
