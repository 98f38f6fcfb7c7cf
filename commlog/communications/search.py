"""
Free-text search over normalized events.

A query is split into lowercase tokens; an event matches when every token
occurs as a substring of its searchable text (contact, content, phone,
original title and original description). No ranking, no fuzzy matching.
"""

from typing import Iterable, List, Optional

from commlog.core.models import NormalizedEvent, ALL_TYPES


def tokenize(query: str) -> List[str]:
    """Whitespace-separated, lowercased, non-empty tokens."""
    return [token.lower() for token in (query or "").split() if token]


def searchable_text(event: NormalizedEvent) -> str:
    return " ".join((
        event.contact,
        event.content,
        event.phone,
        event.original_title,
        event.original_description,
    )).lower()


def matches(event: NormalizedEvent, tokens: List[str]) -> bool:
    text = searchable_text(event)
    return all(token in text for token in tokens)


def search_events(
    events: Iterable[NormalizedEvent],
    query: str,
    type_filter: Optional[str] = None,
) -> List[NormalizedEvent]:
    """
    Events matching every query token, optionally restricted by type.

    Args:
        events: Normalized events to search
        query: Free-text query
        type_filter: 'call' or 'sms' to restrict results; None or 'all' keeps every type

    Returns:
        Matching events in their original order
    """
    tokens = tokenize(query)
    results = [event for event in events if matches(event, tokens)]

    if type_filter and type_filter != ALL_TYPES:
        results = [event for event in results if event.type == type_filter]

    return results
