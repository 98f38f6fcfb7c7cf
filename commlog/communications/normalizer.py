"""
Event normalization.

Turns a raw Google Calendar event into a NormalizedEvent by classifying it
as a call or SMS from keywords in its title and extracting the contact,
phone number, call duration and message content with fixed regex
heuristics (Czech and English wording).

The patterns and their evaluation order are part of the observable
behavior: changing them changes which events are recognized.
"""

import logging
import re
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as date_parser
from dateutil import tz

from commlog.core.models import (
    NormalizedEvent,
    CALL,
    SMS,
    UNKNOWN,
    UNKNOWN_CONTACT,
)

logger = logging.getLogger(__name__)

# Case-sensitive title keywords, checked in this order; the first type wins
TYPE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (CALL, ("Hovor", "Call", "Volání")),
    (SMS, ("SMS", "Zpráva", "Message")),
)

CALL_CONTACT_PATTERN = re.compile(r"(?:Hovor|Call|Volání)[\s\-:]*(.+?)(?:\s*\(|\s*$)")
SMS_CONTACT_PATTERN = re.compile(r"(?:SMS|Zpráva|Message)[\s\-:]*(.+?)(?:\s*\(|\s*$)")

DURATION_PATTERN = re.compile(
    r"(?:délka|duration|trvání)[\s:]*(\d+\s*(?:min|minut|s|sekund))",
    re.IGNORECASE,
)

# A "telefon: <number>" line embedded in an SMS body
# Separators include newlines, so leading digits of the next line are consumed too
SMS_PHONE_LINE_PATTERN = re.compile(r"telefon[\s:]*\+?\d+[\s\d\-\(\)]*\n?", re.IGNORECASE)

LABELED_PHONE_PATTERN = re.compile(
    r"(?:telefon|phone|číslo)[\s:]*(\+?\d+[\s\d\-\(\)]+)",
    re.IGNORECASE,
)
BARE_PHONE_PATTERN = re.compile(r"(\+?\d{3,4}[\s\-]?\d{3}[\s\-]?\d{3}[\s\-]?\d{3})")
PHONE_SEPARATORS = re.compile(r"[\s\-\(\)]")

TIME_FORMAT = "%H:%M"
ALL_DAY_TIME = "00:00"


def classify(title: str) -> str:
    """Return 'call', 'sms' or 'unknown' from the event title."""
    for event_type, keywords in TYPE_KEYWORDS:
        if any(keyword in title for keyword in keywords):
            return event_type
    return UNKNOWN


def extract_contact(title: str, event_type: str) -> str:
    """Contact name following the type keyword, up to '(' or end of title."""
    if event_type == CALL:
        pattern = CALL_CONTACT_PATTERN
    elif event_type == SMS:
        pattern = SMS_CONTACT_PATTERN
    else:
        return ""

    match = pattern.search(title)
    return match.group(1).strip() if match else ""


def extract_duration(description: str) -> str:
    match = DURATION_PATTERN.search(description)
    return match.group(1) if match else ""


def extract_sms_content(description: str) -> str:
    """Message body with any 'telefon: <number>' line removed."""
    return SMS_PHONE_LINE_PATTERN.sub("", description).strip()


def extract_phone(title: str, description: str) -> str:
    """
    Phone number from the description, or anywhere in the event text.

    A labeled number ("telefon: ...", "phone: ...", "číslo: ...") in the
    description wins; otherwise the first bare number of the form
    NNN(N) NNN NNN NNN in title + description is used. Spaces, hyphens and
    parentheses are stripped, a leading '+' is kept.
    """
    match = LABELED_PHONE_PATTERN.search(description)
    if not match:
        match = BARE_PHONE_PATTERN.search(f"{title} {description}")
    if not match:
        return ""
    return PHONE_SEPARATORS.sub("", match.group(1))


def split_start(start: Optional[Dict[str, Any]], display_tz: Optional[Any] = None) -> Tuple[str, str]:
    """
    Date and display time of an event start.

    Timed events take the date portion of the raw dateTime string and the
    time converted to display_tz; all-day events use their date and the
    '00:00' sentinel.
    """
    start = start or {}
    date_time = start.get("dateTime")
    if not date_time:
        return start.get("date") or "", ALL_DAY_TIME

    date_part = date_time.split("T")[0]
    try:
        parsed = date_parser.isoparse(date_time)
    except (ValueError, OverflowError):
        logger.warning(f"Unparseable event start {date_time!r}, using {ALL_DAY_TIME}")
        return date_part, ALL_DAY_TIME

    if display_tz is not None:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=display_tz)
        parsed = parsed.astimezone(display_tz)
    return date_part, parsed.strftime(TIME_FORMAT)


class EventNormalizer:
    """
    Converts raw calendar events into NormalizedEvent records.

    Normalization never fails: missing title, description or start default
    to empty values and the contact falls back to UNKNOWN_CONTACT.
    """

    def __init__(self, display_timezone: str = "Europe/Prague"):
        self.display_timezone = display_timezone
        self.display_tz = tz.gettz(display_timezone)
        if self.display_tz is None:
            logger.warning(f"Unknown timezone {display_timezone!r}, falling back to UTC")
            self.display_tz = tz.UTC

    def normalize(self, event: Dict[str, Any]) -> NormalizedEvent:
        title = event.get("summary") or ""
        description = event.get("description") or ""

        event_type = classify(title)
        contact = extract_contact(title, event_type)
        duration = extract_duration(description) if event_type == CALL else ""
        content = extract_sms_content(description) if event_type == SMS else ""
        phone = extract_phone(title, description)
        date, time = split_start(event.get("start"), self.display_tz)

        return NormalizedEvent(
            id=event.get("id") or "",
            date=date,
            time=time,
            type=event_type,
            contact=contact or UNKNOWN_CONTACT,
            phone=phone,
            duration=duration,
            content=content or description,
            original_title=title,
            original_description=description,
        )

