"""
Data models for the communication log service
Defines the normalized event, date range and calendar summary structures.
"""

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Optional


# Communication types
CALL = "call"
SMS = "sms"
UNKNOWN = "unknown"

# Search type filter value meaning "no restriction"
ALL_TYPES = "all"

UNKNOWN_CONTACT = "Neznámý kontakt"


@dataclass(frozen=True)
class NormalizedEvent:
    """A calendar event classified as a call or SMS, with extracted fields"""
    id: str = ""
    date: str = ""  # YYYY-MM-DD
    time: str = "00:00"  # HH:MM, 00:00 for all-day events
    type: str = UNKNOWN  # 'call', 'sms', 'unknown'
    contact: str = UNKNOWN_CONTACT
    phone: str = ""
    duration: str = ""
    content: str = ""
    original_title: str = ""
    original_description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used in API responses"""
        data = asdict(self)
        data["originalTitle"] = data.pop("original_title")
        data["originalDescription"] = data.pop("original_description")
        return data


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date window; start <= end is assumed, not checked"""
    start: date
    end: date

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def label(self) -> str:
        """Human label used in responses: 'YYYY-MM-DD' or 'start to end'"""
        if self.is_single_day:
            return self.start.isoformat()
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class CalendarInfo:
    """Calendar summary from the account's calendar list"""
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    primary: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalendarInfo':
        """Create CalendarInfo from a calendarList item"""
        return cls(
            id=data.get('id', ''),
            name=data.get('summary'),
            description=data.get('description'),
            primary=bool(data.get('primary', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
