"""
Communication log service.

Reads Google Calendar events, recognizes the ones that record phone calls
and SMS messages, and exposes them filtered by date range or search query.
"""

__version__ = "1.0.0"
