# web_api/tests/test_google_actions.py
"""Tests for POST /api/actions/google/* endpoints.

Tests cover:
- send-invite returns {"data": true} and passes the configured host through
- send-invite fails with the default 500 when input or PROD_HOST is missing
- update-events builds RSVP links from the request's Host header
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

# Ensure we import from root main.py
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from core.calendar.sync import EventIdPair
from main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def error_client():
    """Client that returns 500 responses instead of re-raising server errors."""
    return TestClient(app, raise_server_exceptions=False)


class TestSendInvite:
    """POST /api/actions/google/send-invite"""

    def test_returns_true_on_success(self, client, monkeypatch):
        monkeypatch.setenv("PROD_HOST", "events.example.com")
        monkeypatch.delenv("GOOGLE_CALENDAR_ID", raising=False)

        with patch(
            "web_api.routes.google.send_invites_and_mark",
            new_callable=AsyncMock,
            return_value=True,
        ) as mock_send:
            response = client.post(
                "/api/actions/google/send-invite",
                json={"events": [1, 2], "email": "guest@example.com"},
            )

        assert response.status_code == 200
        assert response.json() == {"data": True}
        mock_send.assert_called_once_with(
            [1, 2],
            "guest@example.com",
            host="events.example.com",
            default_calendar_id="primary",
        )

    def test_empty_events_list_returns_true(self, client, monkeypatch):
        monkeypatch.setenv("PROD_HOST", "events.example.com")

        with patch(
            "core.rsvps.send_invite", new_callable=AsyncMock, return_value=[]
        ) as mock_invite:
            response = client.post(
                "/api/actions/google/send-invite",
                json={"events": [], "email": "guest@example.com"},
            )

        assert response.status_code == 200
        assert response.json() == {"data": True}
        mock_invite.assert_called_once()

    def test_missing_events_is_a_server_error(self, error_client, monkeypatch):
        monkeypatch.setenv("PROD_HOST", "events.example.com")

        with patch(
            "core.rsvps.send_invite", new_callable=AsyncMock
        ) as mock_invite:
            response = error_client.post(
                "/api/actions/google/send-invite",
                json={"email": "guest@example.com"},
            )

        assert response.status_code == 500
        mock_invite.assert_not_called()

    def test_missing_email_is_a_server_error(self, error_client, monkeypatch):
        monkeypatch.setenv("PROD_HOST", "events.example.com")

        with patch(
            "core.rsvps.send_invite", new_callable=AsyncMock
        ) as mock_invite:
            response = error_client.post(
                "/api/actions/google/send-invite", json={"events": [1]}
            )

        assert response.status_code == 500
        mock_invite.assert_not_called()

    def test_missing_prod_host_is_a_server_error(self, error_client, monkeypatch):
        monkeypatch.delenv("PROD_HOST", raising=False)

        with patch(
            "core.rsvps.send_invite", new_callable=AsyncMock
        ) as mock_invite:
            response = error_client.post(
                "/api/actions/google/send-invite",
                json={"events": [1], "email": "guest@example.com"},
            )

        assert response.status_code == 500
        mock_invite.assert_not_called()


class TestUpdateEvents:
    """POST /api/actions/google/update-events"""

    def test_returns_id_pairs_and_uses_request_host(self, client):
        updated_rows = [{"event_id": 1, "g_cal_event_id": "gcal_1"}]
        deleted_rows = [{"event_id": 2, "g_cal_event_id": "gcal_2"}]

        with patch("web_api.routes.google.get_connection") as mock_conn:
            mock_conn.return_value.__aenter__.return_value = AsyncMock()
            with patch(
                "web_api.routes.google.get_full_events",
                new_callable=AsyncMock,
                side_effect=[updated_rows, deleted_rows],
            ), patch(
                "web_api.routes.google.update_events",
                new_callable=AsyncMock,
                return_value=[EventIdPair("gcal_1", 1), EventIdPair("gcal_2", 2)],
            ) as mock_sync:
                response = client.post(
                    "/api/actions/google/update-events",
                    json={"updated": [1], "deleted": [2]},
                    headers={"host": "localhost:3000"},
                )

        assert response.status_code == 200
        assert response.json() == {
            "data": [
                {"calendarEventId": "gcal_1", "databaseEventId": 1},
                {"calendarEventId": "gcal_2", "databaseEventId": 2},
            ]
        }
        kwargs = mock_sync.call_args.kwargs
        assert kwargs["updated"] == updated_rows
        assert kwargs["deleted"] == deleted_rows
        assert kwargs["host"] == "localhost:3000"
