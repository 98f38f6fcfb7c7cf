"""
Unit tests for GoogleCalendarClient.
The Google API service is mocked; no network access.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from commlog.core.errors import UpstreamProviderError
from commlog.integrations.google_calendar.calendar_client import GoogleCalendarClient, MAX_EVENTS

CLIENT_MODULE = "commlog.integrations.google_calendar.calendar_client"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mock_service():
    """Calendar service resource with events().list() and calendarList().list()."""
    service = MagicMock()
    service.events.return_value.list.return_value.execute.return_value = {
        "items": [{"id": "a", "summary": "Call Jan"}]
    }
    return service


@pytest.fixture
def client(mock_service):
    return GoogleCalendarClient(service=mock_service)


@pytest.fixture
def time_window():
    return (
        datetime(2024, 5, 1, tzinfo=timezone.utc),
        datetime(2024, 5, 1, 23, 59, 59, tzinfo=timezone.utc),
    )


def _http_error(status=403, message="Calendar access denied"):
    resp = MagicMock()
    resp.status = status
    resp.reason = "Forbidden"
    content = ('{"error": {"message": "%s"}}' % message).encode("utf-8")
    return HttpError(resp, content)


# =============================================================================
# Authentication
# =============================================================================

class TestAuthenticate:

    def test_missing_tokens(self):
        client = GoogleCalendarClient(client_id="cid", client_secret="secret")
        with pytest.raises(UpstreamProviderError) as exc_info:
            client.authenticate()
        assert "not configured" in exc_info.value.message

    def test_prebuilt_service_skips_auth(self, client, mock_service):
        assert client.authenticate() is True
        assert client.service is mock_service

    @patch(f"{CLIENT_MODULE}.build")
    def test_valid_access_token_loads_credentials(self, mock_build):
        client = GoogleCalendarClient(access_token="token", refresh_token="refresh")
        assert client.authenticate() is True

        assert client.credentials.token == "token"
        mock_build.assert_not_called()

    @patch(f"{CLIENT_MODULE}.build")
    @patch(f"{CLIENT_MODULE}.Request")
    @patch(f"{CLIENT_MODULE}.Credentials")
    def test_refresh_when_invalid(self, mock_credentials, mock_request, mock_build):
        creds = mock_credentials.return_value
        creds.valid = False
        creds.refresh_token = "refresh"

        client = GoogleCalendarClient(refresh_token="refresh")
        client.authenticate()

        creds.refresh.assert_called_once_with(mock_request.return_value)
        assert client.credentials is creds

    @patch(f"{CLIENT_MODULE}.build")
    @patch(f"{CLIENT_MODULE}.Request")
    @patch(f"{CLIENT_MODULE}.Credentials")
    def test_refresh_failure(self, mock_credentials, mock_request, mock_build):
        creds = mock_credentials.return_value
        creds.valid = False
        creds.refresh_token = "refresh"
        creds.refresh.side_effect = RefreshError("invalid_grant")

        with pytest.raises(UpstreamProviderError) as exc_info:
            GoogleCalendarClient(refresh_token="refresh").authenticate()

        assert "invalid_grant" in exc_info.value.details
        mock_build.assert_not_called()

    def test_from_config(self):
        config = MagicMock()
        config.google_credentials.return_value = {
            "client_id": "cid",
            "client_secret": "secret",
            "access_token": None,
            "refresh_token": "refresh",
            "token_uri": "https://oauth2.googleapis.com/token",
        }
        client = GoogleCalendarClient.from_config(config)
        assert client.client_id == "cid"
        assert client.refresh_token == "refresh"
        assert client.service is None


# =============================================================================
# Events
# =============================================================================

class TestListEvents:

    def test_query_parameters(self, client, mock_service, time_window):
        events = client.list_events(*time_window, calendar_id="primary")

        assert events == [{"id": "a", "summary": "Call Jan"}]
        mock_service.events.return_value.list.assert_called_once_with(
            calendarId="primary",
            timeMin="2024-05-01T00:00:00+00:00",
            timeMax="2024-05-01T23:59:59+00:00",
            maxResults=MAX_EVENTS,
            singleEvents=True,
            orderBy="startTime",
        )

    def test_max_results_capped(self, client, mock_service, time_window):
        client.list_events(*time_window, max_results=5000)
        kwargs = mock_service.events.return_value.list.call_args.kwargs
        assert kwargs["maxResults"] == MAX_EVENTS

    def test_missing_items(self, client, mock_service, time_window):
        mock_service.events.return_value.list.return_value.execute.return_value = {}
        assert client.list_events(*time_window) == []

    def test_http_error_raised_as_upstream(self, client, mock_service, time_window):
        mock_service.events.return_value.list.return_value.execute.side_effect = _http_error()

        with pytest.raises(UpstreamProviderError) as exc_info:
            client.list_events(*time_window)
        assert "Calendar access denied" in exc_info.value.details

    def test_transport_error_raised_as_upstream(self, client, mock_service, time_window):
        mock_service.events.return_value.list.return_value.execute.side_effect = OSError("timed out")

        with pytest.raises(UpstreamProviderError) as exc_info:
            client.list_events(*time_window)
        assert exc_info.value.details == "timed out"


# =============================================================================
# Calendars
# =============================================================================

class TestListCalendars:

    def test_follows_pages(self, client, mock_service):
        list_call = mock_service.calendarList.return_value.list
        list_call.return_value.execute.side_effect = [
            {"items": [{"id": "a"}], "nextPageToken": "p2"},
            {"items": [{"id": "b"}]},
        ]

        calendars = client.list_calendars()

        assert [c["id"] for c in calendars] == ["a", "b"]
        assert list_call.call_args_list[0].kwargs == {}
        assert list_call.call_args_list[1].kwargs == {"pageToken": "p2"}

    def test_http_error(self, client, mock_service):
        mock_service.calendarList.return_value.list.return_value.execute.side_effect = _http_error(401, "Invalid Credentials")

        with pytest.raises(UpstreamProviderError) as exc_info:
            client.list_calendars()
        assert "Invalid Credentials" in exc_info.value.details


# =============================================================================
# Per-call services
# =============================================================================

class TestServicePerCall:
    """Credentials are shared, transports are not."""

    @patch(f"{CLIENT_MODULE}.build")
    def test_each_call_builds_its_own_service(self, mock_build, mock_service, time_window):
        mock_service.calendarList.return_value.list.return_value.execute.return_value = {"items": []}
        mock_build.return_value = mock_service
        client = GoogleCalendarClient(access_token="token")

        client.list_events(*time_window)
        client.list_calendars()

        assert mock_build.call_count == 2
        for call in mock_build.call_args_list:
            assert call.kwargs["credentials"] is client.credentials

    def test_concurrent_calls_use_separate_transports(self):
        """Built from the bundled discovery document, no network needed."""
        client = GoogleCalendarClient(access_token="token")

        with ThreadPoolExecutor(max_workers=4) as pool:
            services = list(pool.map(lambda _: client.build_service(), range(4)))

        transports = [service._http.http for service in services]
        assert len({id(transport) for transport in transports}) == 4
        assert all(service._http.credentials is client.credentials for service in services)

    @patch(f"{CLIENT_MODULE}.Credentials")
    def test_credentials_created_once_under_concurrency(self, mock_credentials):
        mock_credentials.return_value.valid = True
        client = GoogleCalendarClient(access_token="token")

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda _: client.authenticate(), range(8)))

        mock_credentials.assert_called_once()
        assert client.credentials is mock_credentials.return_value
