"""
Pydantic schemas for API responses.

These schemas provide:
- Stable JSON shapes for the frontend (camelCase where clients expect it)
- OpenAPI documentation generation
- Serialization of the core dataclasses
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# =============================================================================
# Error Schema
# =============================================================================

class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str
    details: Optional[str] = None


# =============================================================================
# Communication Event Schemas
# =============================================================================

class CommunicationEventResponse(BaseModel):
    """A calendar event recognized as a call or SMS."""
    id: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM, 00:00 for all-day events
    type: str  # call, sms
    contact: str
    phone: str = ""
    duration: str = ""
    content: str = ""
    original_title: str = Field(default="", alias="originalTitle")
    original_description: str = Field(default="", alias="originalDescription")

    class Config:
        populate_by_name = True


class EventListResponse(BaseModel):
    """Response for listing events in a date range."""
    events: List[CommunicationEventResponse]
    total: int
    date: str  # single date or "start to end"


class SearchResponse(BaseModel):
    """Response for event search."""
    events: List[CommunicationEventResponse]
    total: int
    query: str


# =============================================================================
# Calendar Schemas
# =============================================================================

class CalendarResponse(BaseModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    primary: bool = False


class CalendarListResponse(BaseModel):
    calendars: List[CalendarResponse]


# =============================================================================
# Health Schema
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    message: Optional[str] = None
