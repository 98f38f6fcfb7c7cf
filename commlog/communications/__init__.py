"""
Communication event pipeline.

- filters: keyword pre-filter over raw events
- normalizer: call/SMS classification and field extraction
- search: conjunctive token search over normalized events
- date_range: request date parameters to date and instant windows
- service: the orchestrator tying the above to the calendar provider
"""

from .filters import filter_communication_events, is_communication_event
from .normalizer import EventNormalizer, classify
from .search import search_events, tokenize
from .date_range import resolve_date_range, resolve_search_range, parse_date, to_instants
from .service import CommunicationService, EventsResult

__all__ = [
    'filter_communication_events',
    'is_communication_event',
    'EventNormalizer',
    'classify',
    'search_events',
    'tokenize',
    'resolve_date_range',
    'resolve_search_range',
    'parse_date',
    'to_instants',
    'CommunicationService',
    'EventsResult',
]
