"""
Google Calendar API wrapper for the communication log service.

Provides authenticated, read-only access to Google Calendar using
pre-provisioned OAuth tokens. Provider failures are raised as
UpstreamProviderError; nothing is retried.

Credentials are shared by all callers; every API call builds its own
service, and with it its own httplib2 transport, which is not thread-safe.
"""

import logging
import threading
from datetime import datetime
from typing import Optional, List, Dict, Any

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from commlog.core.errors import UpstreamProviderError

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/calendar.readonly']

# Hard cap on events fetched per request
MAX_EVENTS = 1000


def _http_error_message(error: HttpError) -> str:
    """Best-effort human message from a googleapiclient HttpError"""
    reason = getattr(error, 'reason', None)
    if reason:
        return str(reason)
    return str(error)


class GoogleCalendarClient:
    """
    Google Calendar API client with token-based authentication.

    The OAuth consent flow is not handled here: tokens are expected to be
    obtained elsewhere and handed over through configuration.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        token_uri: str = 'https://oauth2.googleapis.com/token',
        service: Any = None,
    ):
        """
        Initialize the Google Calendar client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            access_token: Current access token (may be expired)
            refresh_token: Refresh token used to obtain new access tokens
            token_uri: OAuth token endpoint
            service: Prebuilt calendar service resource used for every call
                (skips authentication)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.token_uri = token_uri
        self.service = service
        self.credentials: Optional[Credentials] = None
        self._auth_lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> 'GoogleCalendarClient':
        """Build a client from Config.google_credentials()"""
        return cls(**config.google_credentials())

    def authenticate(self) -> bool:
        """
        Load credentials from the configured tokens.

        Refreshes the access token first when only a refresh token is
        available or the access token has expired. Runs once per client;
        concurrent callers wait for the first one.

        Returns:
            bool: True once credentials are ready

        Raises:
            UpstreamProviderError: credentials are missing or refresh failed
        """
        if self.service is not None:
            return True

        with self._auth_lock:
            if self.credentials is not None and self.credentials.valid:
                return True

            if not (self.access_token or self.refresh_token):
                raise UpstreamProviderError(
                    "Google Calendar credentials are not configured",
                    details="Set GOOGLE_ACCESS_TOKEN or GOOGLE_REFRESH_TOKEN",
                )

            creds = self.credentials or Credentials(
                token=self.access_token,
                refresh_token=self.refresh_token,
                token_uri=self.token_uri,
                client_id=self.client_id,
                client_secret=self.client_secret,
                scopes=SCOPES,
            )

            if not creds.valid and creds.refresh_token:
                try:
                    creds.refresh(Request())
                    logger.info("Refreshed Google access token")
                except GoogleAuthError as e:
                    logger.error(f"Failed to refresh credentials: {e}")
                    raise UpstreamProviderError(
                        "Failed to authenticate with Google Calendar",
                        details=str(e),
                    ) from e

            self.credentials = creds
        return True

    def build_service(self):
        """
        Calendar service for a single call.

        Each service owns a fresh AuthorizedHttp over a new httplib2.Http,
        so concurrent requests never share a transport.
        """
        if self.service is not None:
            return self.service

        self.authenticate()
        return build('calendar', 'v3', credentials=self.credentials, cache_discovery=False)

    def list_events(
        self,
        time_min: datetime,
        time_max: datetime,
        calendar_id: str = 'primary',
        max_results: int = MAX_EVENTS,
        order_by: str = 'startTime'
    ) -> List[Dict[str, Any]]:
        """
        List calendar events within a time range.

        Recurring events are expanded into single instances.

        Args:
            time_min: Start of time range (timezone-aware)
            time_max: End of time range (timezone-aware)
            calendar_id: Calendar ID (default: 'primary')
            max_results: Maximum number of events to return, capped at MAX_EVENTS
            order_by: How to order results ('startTime' or 'updated')

        Returns:
            List of raw event dictionaries

        Raises:
            UpstreamProviderError: the API call failed
        """
        service = self.build_service()

        params = {
            'calendarId': calendar_id,
            'timeMin': time_min.isoformat(),
            'timeMax': time_max.isoformat(),
            'maxResults': min(max_results, MAX_EVENTS),
            'singleEvents': True,
            'orderBy': order_by,
        }

        try:
            events_result = service.events().list(**params).execute()
        except HttpError as e:
            logger.error(f"HTTP error listing events: {e}")
            raise UpstreamProviderError(
                "Failed to fetch events from the calendar",
                details=_http_error_message(e),
            ) from e
        except Exception as e:
            logger.exception("Error listing events")
            raise UpstreamProviderError(
                "Failed to fetch events from the calendar",
                details=str(e),
            ) from e

        events = events_result.get('items', [])
        logger.info(f"Retrieved {len(events)} events from {calendar_id}")
        return events

    def list_calendars(self) -> List[Dict[str, Any]]:
        """
        List calendars of the authenticated account.

        Follows nextPageToken until every page has been read.

        Returns:
            List of raw calendarList entries

        Raises:
            UpstreamProviderError: the API call failed
        """
        service = self.build_service()

        calendars: List[Dict[str, Any]] = []
        page_token = None
        try:
            while True:
                params = {'pageToken': page_token} if page_token else {}
                result = service.calendarList().list(**params).execute()
                calendars.extend(result.get('items', []))
                page_token = result.get('nextPageToken')
                if not page_token:
                    break
        except HttpError as e:
            logger.error(f"HTTP error listing calendars: {e}")
            raise UpstreamProviderError(
                "Failed to fetch the calendar list",
                details=_http_error_message(e),
            ) from e
        except Exception as e:
            logger.exception("Error listing calendars")
            raise UpstreamProviderError(
                "Failed to fetch the calendar list",
                details=str(e),
            ) from e

        logger.info(f"Retrieved {len(calendars)} calendars")
        return calendars
