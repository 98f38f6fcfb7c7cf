"""Pre-filter for raw events that mention a call, SMS or phone."""

from typing import Any, Dict, Iterable, List

COMMUNICATION_KEYWORDS = ("hovor", "call", "volání", "sms", "zpráva", "message", "telefon")


def is_communication_event(event: Dict[str, Any]) -> bool:
    """True if the lowercased title or description contains any keyword."""
    title = (event.get("summary") or "").lower()
    description = (event.get("description") or "").lower()
    return any(
        keyword in title or keyword in description
        for keyword in COMMUNICATION_KEYWORDS
    )


def filter_communication_events(events: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep communication events, preserving order and duplicates."""
    return [event for event in events if is_communication_event(event)]
