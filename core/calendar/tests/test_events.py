"""Tests for Google Calendar event operations.

These tests mock the Google API client to avoid requiring credentials.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, Mock, patch

from googleapiclient.errors import HttpError

from core.calendar.events import create_event, get_event, patch_event, update_event


@pytest.fixture
def mock_calendar_service():
    """Mock Google Calendar service returned by get_calendar_service."""
    with patch(
        "core.calendar.events.get_calendar_service", new_callable=AsyncMock
    ) as mock_get:
        mock_service = Mock()
        mock_get.return_value = mock_service
        yield mock_service


def _http_error(status: int) -> HttpError:
    resp = MagicMock()
    resp.status = status
    resp.reason = "error"
    return HttpError(resp, b"{}")


class TestGetEvent:
    @pytest.mark.asyncio
    async def test_returns_event_with_attendees(self, mock_calendar_service):
        mock_calendar_service.events().get().execute.return_value = {
            "id": "event123",
            "attendees": [{"email": "user1@example.com"}],
        }

        result = await get_event("cal@example.com", "event123")

        assert result["attendees"] == [{"email": "user1@example.com"}]
        mock_calendar_service.events().get.assert_called_with(
            calendarId="cal@example.com", eventId="event123"
        )

    @pytest.mark.asyncio
    async def test_uses_given_service(self):
        service = Mock()
        service.events().get().execute.return_value = {"id": "event123"}

        with patch(
            "core.calendar.events.get_calendar_service", new_callable=AsyncMock
        ) as mock_get:
            await get_event("cal@example.com", "event123", service=service)

        mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_propagates_provider_errors(self, mock_calendar_service):
        mock_calendar_service.events().get().execute.side_effect = _http_error(404)

        with pytest.raises(HttpError):
            await get_event("cal@example.com", "missing")


class TestUpdateEvent:
    @pytest.mark.asyncio
    async def test_sends_full_body_and_notifies_attendees(self, mock_calendar_service):
        mock_calendar_service.events().update().execute.return_value = {
            "id": "event123"
        }
        body = {"summary": "New Title", "attendees": [{"email": "a@example.com"}]}

        result = await update_event("cal@example.com", "event123", body)

        assert result == {"id": "event123"}
        call_kwargs = mock_calendar_service.events().update.call_args.kwargs
        assert call_kwargs["calendarId"] == "cal@example.com"
        assert call_kwargs["eventId"] == "event123"
        assert call_kwargs["body"] == body
        assert call_kwargs["sendUpdates"] == "all"

    @pytest.mark.asyncio
    async def test_propagates_provider_errors(self, mock_calendar_service):
        mock_calendar_service.events().update().execute.side_effect = _http_error(500)

        with pytest.raises(HttpError):
            await update_event("cal@example.com", "event123", {"summary": "x"})


class TestPatchEvent:
    @pytest.mark.asyncio
    async def test_patches_only_given_fields(self, mock_calendar_service):
        mock_calendar_service.events().patch().execute.return_value = {"id": "event123"}

        await patch_event(
            "cal@example.com",
            "event123",
            {"attendees": []},
            send_updates="none",
        )

        call_kwargs = mock_calendar_service.events().patch.call_args.kwargs
        assert call_kwargs["body"] == {"attendees": []}
        assert call_kwargs["sendUpdates"] == "none"


class TestCreateEvent:
    @pytest.mark.asyncio
    async def test_creates_event_and_returns_resource(self, mock_calendar_service):
        mock_calendar_service.events().insert().execute.return_value = {
            "id": "event123"
        }

        result = await create_event("cal@example.com", {"summary": "Test Event"})

        assert result["id"] == "event123"
        call_kwargs = mock_calendar_service.events().insert.call_args.kwargs
        assert call_kwargs["body"]["summary"] == "Test Event"
        assert call_kwargs["sendUpdates"] == "all"
