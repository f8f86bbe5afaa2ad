"""Tests for building the Google Calendar client from stored credentials."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

from core.calendar.client import (
    _is_rate_limit_error,
    _log_calendar_error,
    credentials_from_record,
    get_calendar_service,
)
from core.errors import CalendarNotConfiguredError
from googleapiclient.errors import HttpError


def _http_error(status: int) -> HttpError:
    resp = MagicMock()
    resp.status = status
    return HttpError(resp, b"{}")


class TestCredentialsFromRecord:
    def test_builds_oauth_credentials(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "client-id")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "client-secret")

        creds = credentials_from_record(
            {
                "access_token": "access",
                "refresh_token": "refresh",
                "scope": "https://www.googleapis.com/auth/calendar",
                "expiry_date": datetime(2026, 1, 1, tzinfo=timezone.utc),
            }
        )

        assert creds.token == "access"
        assert creds.refresh_token == "refresh"
        assert creds.client_id == "client-id"
        assert creds.expiry.tzinfo is None


class TestGetCalendarService:
    @pytest.mark.asyncio
    async def test_uses_stored_google_credential(self):
        record = {"access_token": "access", "refresh_token": "refresh"}

        with patch("core.calendar.client.is_database_configured", return_value=True):
            with patch("core.calendar.client.get_connection") as mock_conn:
                mock_conn.return_value.__aenter__.return_value = AsyncMock()
                with patch(
                    "core.calendar.client.get_google_credential",
                    new_callable=AsyncMock,
                    return_value=record,
                ):
                    with patch("core.calendar.client.build") as mock_build:
                        service = await get_calendar_service()

        assert service is mock_build.return_value
        assert mock_build.call_args.args == ("calendar", "v3")
        assert mock_build.call_args.kwargs["credentials"].token == "access"

    @pytest.mark.asyncio
    async def test_raises_when_nothing_configured(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_CALENDAR_CREDENTIALS_JSON", raising=False)
        monkeypatch.delenv("GOOGLE_CALENDAR_CREDENTIALS_FILE", raising=False)

        with patch("core.calendar.client.is_database_configured", return_value=False):
            with pytest.raises(CalendarNotConfiguredError):
                await get_calendar_service()


class TestLogCalendarError:
    def test_detects_rate_limit(self):
        assert _is_rate_limit_error(_http_error(429)) is True
        assert _is_rate_limit_error(_http_error(500)) is False
        assert _is_rate_limit_error(ValueError("nope")) is False

    def test_rate_limit_reported_as_warning_message(self):
        with patch("core.calendar.client.sentry_sdk") as mock_sentry:
            _log_calendar_error(_http_error(429), "send_invite", {"event_id": 1})

        mock_sentry.capture_message.assert_called_once()
        mock_sentry.capture_exception.assert_not_called()

    def test_other_errors_reported_as_exceptions(self):
        error = _http_error(500)
        with patch("core.calendar.client.sentry_sdk") as mock_sentry:
            _log_calendar_error(error, "send_invite")

        mock_sentry.capture_exception.assert_called_once_with(error)
