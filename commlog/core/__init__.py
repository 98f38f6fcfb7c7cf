"""
Core module for the communication log service
Contains configuration, error taxonomy, logging setup and data models
"""

from .config import Config
from .errors import (
    CommlogError,
    InvalidDateFormat,
    MissingRequiredParameter,
    MissingSearchQuery,
    MethodNotAllowed,
    UpstreamProviderError,
    InternalError,
)
from .models import NormalizedEvent, DateRange, CalendarInfo

__all__ = [
    'Config',
    'CommlogError',
    'InvalidDateFormat',
    'MissingRequiredParameter',
    'MissingSearchQuery',
    'MethodNotAllowed',
    'UpstreamProviderError',
    'InternalError',
    'NormalizedEvent',
    'DateRange',
    'CalendarInfo',
]
