from .calendar_client import GoogleCalendarClient, MAX_EVENTS

__all__ = ['GoogleCalendarClient', 'MAX_EVENTS']
