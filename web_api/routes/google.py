"""
Google Calendar action routes.

Endpoints:
- POST /api/actions/google/send-invite - Invite an email to events' calendar entries
- POST /api/actions/google/update-events - Push edited/cancelled events to Google
"""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from core.config import get_default_calendar_id, get_prod_host
from core.database import get_connection
from core.calendar.sync import update_events
from core.queries.events import get_full_events
from core.rsvps import send_invites_and_mark

router = APIRouter(prefix="/api/actions/google", tags=["google"])


class SendInviteRequest(BaseModel):
    """Events to invite ``email`` to. Missing fields fail the request; an empty list does not."""

    events: list[int] | None = None
    email: str | None = None


class UpdateEventsRequest(BaseModel):
    """Ids of events already saved as edited or cancelled."""

    updated: list[int] = []
    deleted: list[int] = []


@router.post("/send-invite")
async def send_invite_endpoint(body: SendInviteRequest) -> dict[str, Any]:
    """
    Send calendar invites and flag the user's RSVPs as added to the calendar.

    Errors (missing fields, PROD_HOST not set) are not caught here and
    produce the default 500 response.
    """
    result = await send_invites_and_mark(
        body.events,
        body.email,
        host=get_prod_host(),
        default_calendar_id=get_default_calendar_id(),
    )
    return {"data": result}


@router.post("/update-events")
async def update_events_endpoint(
    body: UpdateEventsRequest,
    request: Request,
) -> dict[str, Any]:
    """
    Sync saved events to Google Calendar.

    RSVP links in descriptions use the Host header of this request.
    Every event must already be linked to a calendar event.
    """
    host = request.headers.get("host") or get_prod_host() or "localhost"

    async with get_connection() as conn:
        updated = await get_full_events(conn, body.updated)
        deleted = await get_full_events(conn, body.deleted)

    pairs = await update_events(
        updated=updated,
        deleted=deleted,
        host=host,
        default_calendar_id=get_default_calendar_id(),
    )
    return {
        "data": [
            {
                "calendarEventId": pair.calendar_event_id,
                "databaseEventId": pair.database_event_id,
            }
            for pair in pairs
        ]
    }
