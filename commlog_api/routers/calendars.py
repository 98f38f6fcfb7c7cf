"""Calendar list endpoint."""

from fastapi import APIRouter, Depends

from commlog.communications.service import CommunicationService
from commlog_api.dependencies import get_communication_service
from commlog_api.schemas import CalendarListResponse, CalendarResponse, ErrorResponse

router = APIRouter(prefix="/calendars", tags=["calendars"])


@router.get("", response_model=CalendarListResponse, responses={500: {"model": ErrorResponse}})
def list_calendars(service: CommunicationService = Depends(get_communication_service)):
    """List calendars of the authenticated account."""
    calendars = service.list_calendars()
    return CalendarListResponse(
        calendars=[CalendarResponse(**c.to_dict()) for c in calendars],
    )
