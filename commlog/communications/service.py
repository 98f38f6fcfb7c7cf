"""
Communication event service.

Runs the request pipeline shared by every events endpoint:

    date range -> provider fetch -> communication filter
        -> normalization -> drop unknown -> (search) -> result

The calendar client is injected, so the service holds no global state and
can be exercised with a fake provider.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from commlog.core.errors import CommlogError, MissingSearchQuery, UpstreamProviderError
from commlog.core.models import CalendarInfo, DateRange, NormalizedEvent, UNKNOWN
from commlog.communications.date_range import (
    resolve_date_range,
    resolve_search_range,
    to_instants,
    today_in,
)
from commlog.communications.filters import filter_communication_events
from commlog.communications.normalizer import EventNormalizer
from commlog.communications.search import search_events

logger = logging.getLogger(__name__)


@dataclass
class EventsResult:
    """Outcome of an events listing or search."""
    events: List[NormalizedEvent]
    date_range: DateRange
    query: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.events)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "events": [event.to_dict() for event in self.events],
            "total": self.total,
        }
        if self.query is not None:
            data["query"] = self.query
        else:
            data["date"] = self.date_range.label()
        return data


class CommunicationService:
    """
    Orchestrates calendar fetches and the classification pipeline.

    Args:
        client: Object with list_events(time_min, time_max, calendar_id, max_results)
            and list_calendars(), e.g. GoogleCalendarClient
        display_timezone: Timezone for display times and day boundaries
        default_calendar_id: Calendar used when a request names none
        max_results: Cap on events fetched per request
        search_window_days: Default look-back window for search
    """

    def __init__(
        self,
        client,
        display_timezone: str = "Europe/Prague",
        default_calendar_id: str = "primary",
        max_results: int = 1000,
        search_window_days: int = 30,
    ):
        self.client = client
        self.display_timezone = display_timezone
        self.default_calendar_id = default_calendar_id
        self.max_results = max_results
        self.search_window_days = search_window_days
        self.normalizer = EventNormalizer(display_timezone)

    @classmethod
    def from_config(cls, client, config) -> 'CommunicationService':
        return cls(
            client,
            display_timezone=config.get("display_timezone", "Europe/Prague"),
            default_calendar_id=config.get("default_calendar_id", "primary"),
            max_results=int(config.get("max_results", 1000)),
            search_window_days=int(config.get("search_window_days", 30)),
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def fetch_communications(
        self,
        date_range: DateRange,
        calendar_id: Optional[str] = None,
    ) -> List[NormalizedEvent]:
        """Fetch the range and return its recognized call/SMS events."""
        calendar_id = calendar_id or self.default_calendar_id
        time_min, time_max = to_instants(date_range, self.display_timezone)
        logger.info(f"Fetching {calendar_id} events for {date_range.label()}")

        raw_events = self._call_provider(
            self.client.list_events,
            time_min=time_min,
            time_max=time_max,
            calendar_id=calendar_id,
            max_results=self.max_results,
        )

        candidates = filter_communication_events(raw_events)
        normalized = [self.normalizer.normalize(event) for event in candidates]
        recognized = [event for event in normalized if event.type != UNKNOWN]

        logger.info(
            f"Fetched {len(raw_events)} events, {len(candidates)} mention communication, "
            f"{len(recognized)} recognized"
        )
        return recognized

    def _call_provider(self, method, **kwargs):
        """Invoke a provider method; other failures become UpstreamProviderError."""
        try:
            return method(**kwargs)
        except CommlogError:
            raise
        except Exception as e:
            logger.exception("Calendar provider call failed")
            raise UpstreamProviderError(
                "Failed to fetch data from the calendar",
                details=str(e),
            ) from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_events(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        single_date: Optional[str] = None,
        calendar_id: Optional[str] = None,
    ) -> EventsResult:
        """Communication events for an explicit range or a single date."""
        date_range = resolve_date_range(start_date, end_date, single_date)
        return self.events_for_range(date_range, calendar_id)

    def events_for_range(self, date_range: DateRange, calendar_id: Optional[str] = None) -> EventsResult:
        events = self.fetch_communications(date_range, calendar_id)
        return EventsResult(events=events, date_range=date_range)

    def search(
        self,
        query: Optional[str],
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        type_filter: Optional[str] = None,
        calendar_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> EventsResult:
        """
        Communication events matching every token of `query`.

        Without explicit bounds the trailing search window up to today is
        searched.

        Raises:
            MissingSearchQuery: query is empty
        """
        if not query:
            raise MissingSearchQuery()

        date_range = resolve_search_range(
            start_date,
            end_date,
            today=today or today_in(self.display_timezone),
            window_days=self.search_window_days,
        )
        events = self.fetch_communications(date_range, calendar_id)
        matched = search_events(events, query, type_filter)
        logger.info(f"Search {query!r} matched {len(matched)} of {len(events)} events")
        return EventsResult(events=matched, date_range=date_range, query=query)

    def list_calendars(self) -> List[CalendarInfo]:
        calendars = self._call_provider(self.client.list_calendars)
        return [CalendarInfo.from_dict(item) for item in calendars]
