"""
Date range resolution for event queries.

Turns request parameters (an explicit range, a single date, or nothing for
search) into a DateRange, and a DateRange into the instant window sent to
the calendar provider.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from dateutil import tz

from commlog.core.errors import InvalidDateFormat, MissingRequiredParameter
from commlog.core.models import DateRange

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

END_OF_DAY = time(23, 59, 59)


def parse_date(value: str, parameter: str = "date") -> date:
    """
    Parse a strict YYYY-MM-DD string into a date.

    Raises:
        InvalidDateFormat: wrong shape or not a real calendar date
    """
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidDateFormat(value, parameter)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateFormat(value, parameter) from None


def resolve_date_range(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    single_date: Optional[str] = None,
) -> DateRange:
    """
    Range for the events listing.

    A single date wins over startDate/endDate and yields a one-day range.
    Otherwise both startDate and endDate are required.
    """
    if single_date:
        day = parse_date(single_date, "date")
        return DateRange(start=day, end=day)

    if not start_date or not end_date:
        raise MissingRequiredParameter("startDate and endDate (or date) are required parameters")

    return DateRange(
        start=parse_date(start_date, "startDate"),
        end=parse_date(end_date, "endDate"),
    )


def resolve_search_range(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    today: Optional[date] = None,
    window_days: int = 30,
) -> DateRange:
    """
    Range for search requests.

    Missing bounds default independently: the start to `window_days` before
    today, the end to today.
    """
    if today is None:
        today = date.today()

    start = parse_date(start_date, "startDate") if start_date else today - timedelta(days=window_days)
    end = parse_date(end_date, "endDate") if end_date else today
    return DateRange(start=start, end=end)


def to_instants(date_range: DateRange, timezone_name: str = "UTC") -> Tuple[datetime, datetime]:
    """Start of the first day and 23:59:59 of the last day, in timezone_name."""
    zone = tz.gettz(timezone_name) or tz.UTC
    time_min = datetime.combine(date_range.start, time.min, tzinfo=zone)
    time_max = datetime.combine(date_range.end, END_OF_DAY, tzinfo=zone)
    return time_min, time_max


def today_in(timezone_name: str) -> date:
    """Current calendar date in the given timezone."""
    return datetime.now(tz.gettz(timezone_name) or tz.UTC).date()
