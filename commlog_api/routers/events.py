"""
Communication event API endpoints.

Thin adapters over CommunicationService: every endpoint resolves its
parameters, runs the shared pipeline and shapes the response.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query

from commlog.communications.service import CommunicationService, EventsResult
from commlog.communications.date_range import parse_date
from commlog.core.models import DateRange
from commlog_api.dependencies import get_communication_service
from commlog_api.schemas import (
    CommunicationEventResponse,
    ErrorResponse,
    EventListResponse,
    SearchResponse,
)

router = APIRouter(prefix="/events", tags=["events"])

# Top-level /search, kept for clients of the serverless layout
search_router = APIRouter(tags=["events"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _event_list_response(result: EventsResult) -> EventListResponse:
    return EventListResponse(
        events=[CommunicationEventResponse(**e.to_dict()) for e in result.events],
        total=result.total,
        date=result.date_range.label(),
    )


@router.get("", response_model=EventListResponse, responses=ERROR_RESPONSES)
def list_events(
    start_date: Optional[str] = Query(None, alias="startDate", description="First day (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Last day (YYYY-MM-DD)"),
    date: Optional[str] = Query(None, description="Single day, overrides startDate/endDate"),
    calendar_id: Optional[str] = Query(None, alias="calendarId", description="Calendar ID (default: primary)"),
    service: CommunicationService = Depends(get_communication_service),
):
    """
    List call and SMS events for a date range.

    Either `date` or both `startDate` and `endDate` are required.
    """
    result = service.list_events(
        start_date=start_date,
        end_date=end_date,
        single_date=date,
        calendar_id=calendar_id,
    )
    return _event_list_response(result)


@router.get("/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
def search_events(
    q: Optional[str] = Query(None, description="Search query, every word must match"),
    start_date: Optional[str] = Query(None, alias="startDate", description="First day (default: 30 days ago)"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Last day (default: today)"),
    type_filter: Optional[str] = Query(None, alias="type", description="call, sms or all"),
    calendar_id: Optional[str] = Query(None, alias="calendarId", description="Calendar ID (default: primary)"),
    service: CommunicationService = Depends(get_communication_service),
):
    """Search call and SMS events by contact, phone or text."""
    result = service.search(
        q,
        start_date=start_date,
        end_date=end_date,
        type_filter=type_filter,
        calendar_id=calendar_id,
    )
    return SearchResponse(
        events=[CommunicationEventResponse(**e.to_dict()) for e in result.events],
        total=result.total,
        query=result.query,
    )


search_router.add_api_route(
    "/search",
    search_events,
    methods=["GET"],
    response_model=SearchResponse,
    responses=ERROR_RESPONSES,
)


@router.get("/day/{date}", response_model=EventListResponse, responses=ERROR_RESPONSES)
def events_for_day(
    date: str = Path(..., description="Day (YYYY-MM-DD)"),
    calendar_id: Optional[str] = Query(None, alias="calendarId", description="Calendar ID (default: primary)"),
    service: CommunicationService = Depends(get_communication_service),
):
    """List call and SMS events for a single day."""
    day = parse_date(date, "date")
    result = service.events_for_range(DateRange(start=day, end=day), calendar_id)
    return _event_list_response(result)
