"""
API routers for the communication log backend.

Each router handles a specific area:
- events: communication event listing, single-day view and search
- calendars: calendar list of the account
- health: liveness check
"""

from .events import router as events_router, search_router
from .calendars import router as calendars_router
from .health import router as health_router

__all__ = [
    'events_router',
    'search_router',
    'calendars_router',
    'health_router',
]
