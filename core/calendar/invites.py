"""Invite an attendee to the Google Calendar events behind local events."""

import logging

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from core.database import get_connection
from core.queries.events import get_full_events
from .client import _log_calendar_error, get_calendar_service
from .events import get_event, patch_event
from .sync import build_rsvp_url

logger = logging.getLogger(__name__)


def _with_attendee(attendees: list[dict], email: str) -> list[dict]:
    """Attendee list with ``email`` appended unless already present."""
    if any(a.get("email", "").lower() == email.lower() for a in attendees):
        return attendees
    return [*attendees, {"email": email}]


async def send_invite(
    event_ids: list[int],
    attendee_email: str,
    host: str,
    default_calendar_id: str = "primary",
    service: Resource | None = None,
) -> list[int]:
    """
    Add ``attendee_email`` as a guest on each event's calendar entry.

    Google sends the invite email (sendUpdates="all"). The remote event's
    source link is set to the RSVP page on ``host``.

    Events without a g_cal_event_id, and events whose Google call fails,
    are logged and skipped; the rest are still invited.

    Returns:
        Ids of the events the attendee was invited to
    """
    async with get_connection() as conn:
        event_rows = await get_full_events(conn, event_ids)

    if not event_rows:
        return []

    service = service or await get_calendar_service()

    invited = []
    for event in event_rows:
        event_id = event["event_id"]
        if not event.get("g_cal_event_id"):
            logger.warning(f"Event {event_id} has no calendar event, not inviting")
            continue

        calendar_id = event.get("g_cal_id") or default_calendar_id
        try:
            remote = await get_event(
                calendar_id, event["g_cal_event_id"], service=service
            )
            await patch_event(
                calendar_id,
                event["g_cal_event_id"],
                {
                    "attendees": _with_attendee(
                        remote.get("attendees") or [], attendee_email
                    ),
                    "source": {
                        "title": event["title"],
                        "url": build_rsvp_url(host, event["hash"]),
                    },
                },
                service=service,
            )
        except HttpError as e:
            _log_calendar_error(
                e,
                operation="send_invite",
                context={"event_id": event_id},
            )
            continue

        invited.append(event_id)

    return invited
