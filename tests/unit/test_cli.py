"""
Unit tests for the commlog command-line front end.
The CommunicationService is injected with a mocked calendar client.
"""

import json
from unittest.mock import MagicMock

import pytest

from commlog.cli import main
from commlog.communications.service import CommunicationService
from commlog.core.errors import UpstreamProviderError


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def calendar_client():
    client = MagicMock()
    client.list_events.return_value = [
        {
            "id": "call-1",
            "summary": "Call - Jan Novák",
            "description": "duration: 3 min\nphone: +420 111 222 333",
            "start": {"dateTime": "2024-05-01T10:00:00+02:00"},
        },
        {
            "id": "sms-1",
            "summary": "SMS - Eva",
            "description": "Ahoj",
            "start": {"date": "2024-05-01"},
        },
    ]
    client.list_calendars.return_value = [{"id": "me@example.com", "summary": "Me", "primary": True}]
    return client


@pytest.fixture
def service(calendar_client):
    return CommunicationService(calendar_client, display_timezone="Europe/Prague")


class TestCommands:

    def test_events_json(self, service, capsys):
        code = main(["events", "--start", "2024-05-01", "--end", "2024-05-02", "--json"], service=service)

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["total"] == 2
        assert data["date"] == "2024-05-01 to 2024-05-02"
        assert data["events"][0]["phone"] == "+420111222333"
        assert data["events"][0]["duration"] == "3 min"

    def test_day_text(self, service, capsys):
        code = main(["day", "2024-05-01"], service=service)

        assert code == 0
        out = capsys.readouterr().out
        assert "2024-05-01 (2):" in out
        assert "Jan Novák" in out
        assert "[3 min]" in out

    def test_search_compact(self, service, capsys):
        code = main(["search", "eva", "--type", "sms", "--json", "--compact"], service=service)

        assert code == 0
        out = capsys.readouterr().out.strip()
        data = json.loads(out)
        assert data["query"] == "eva"
        assert [e["id"] for e in data["events"]] == ["sms-1"]
        assert "\n" not in out

    def test_calendars(self, service, capsys):
        assert main(["calendars"], service=service) == 0
        assert "* Me  <me@example.com>" in capsys.readouterr().out


class TestErrors:

    def test_invalid_date_json(self, service, capsys):
        code = main(["day", "2024-13-40", "--json"], service=service)

        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert data["error"] == "Invalid date format. Use YYYY-MM-DD"

    def test_upstream_error_text(self, service, calendar_client, capsys):
        calendar_client.list_events.side_effect = UpstreamProviderError("Failed", details="quota")

        code = main(["events", "--date", "2024-05-01"], service=service)

        assert code == 1
        assert "Error: Failed (quota)" in capsys.readouterr().err

    def test_no_command(self, service, capsys):
        assert main([], service=service) == 1

    def test_invalid_type_choice(self, service):
        with pytest.raises(SystemExit):
            main(["search", "jan", "--type", "email"], service=service)
