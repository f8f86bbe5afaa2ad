"""Push local event changes (edits and cancellations) to Google Calendar.

Google's events.update replaces the whole event, so an update that omits
``attendees`` wipes the guest list. For live events we therefore do a
read-modify-write: fetch the remote event, copy its attendees into the
outgoing body, then update. Attendee changes made on the calendar between
the fetch and the update are lost; nothing here guards against that race.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NamedTuple

from googleapiclient.discovery import Resource

from core.errors import MissingCalendarEventIdError
from .client import get_calendar_service
from .events import get_event, update_event

logger = logging.getLogger(__name__)

CANCELLED_PREFIX = "CANCELLED: "


class EventIdPair(NamedTuple):
    calendar_event_id: str | None
    database_event_id: int | None


@dataclass
class ParsedEvent:
    """An event ready to send to Google, plus the local ids it came from."""

    database_id: int | None
    g_cal_event_id: str
    g_cal_id: str | None
    is_deleted: bool
    body: dict[str, Any] = field(default_factory=dict)


def build_rsvp_url(host: str, event_hash: str) -> str:
    """Public RSVP link for an event. Plain http only for localhost."""
    protocol = "http" if "localhost" in host else "https"
    return f"{protocol}://{host}/rsvp/{event_hash}"


def build_description(event: dict, host: str) -> str:
    """Event description, proposer line and RSVP link, in that order."""
    description = event.get("description_html") or event.get("description_text") or ""
    nickname = event.get("proposer_nickname")
    if nickname:
        description += f"\n\nProposer: {nickname}"
    description += f"\nRSVP here: {build_rsvp_url(host, event['hash'])}"
    return description


def _as_iso(value: datetime | str) -> str:
    return value.isoformat() if isinstance(value, datetime) else str(value)


def build_event_body(event: dict, host: str) -> dict[str, Any]:
    """Google Calendar event resource for an event row (no attendees)."""
    title = event["title"]
    if event.get("is_deleted"):
        title = f"{CANCELLED_PREFIX}{title}"

    return {
        "summary": title,
        "start": {"dateTime": _as_iso(event["start_date_time"])},
        "end": {"dateTime": _as_iso(event["end_date_time"])},
        "guestsCanSeeOtherGuests": False,
        "guestsCanInviteOthers": False,
        "location": event.get("location"),
        "description": build_description(event, host),
    }


def parse_events(events: list[dict], host: str) -> list[ParsedEvent]:
    """
    Turn event rows into calendar payloads.

    Raises:
        MissingCalendarEventIdError: if any event has no g_cal_event_id.
            Raised before anything is sent to Google.
    """
    parsed = []
    for event in events:
        if not event.get("g_cal_event_id"):
            raise MissingCalendarEventIdError(event.get("event_id"))

        parsed.append(
            ParsedEvent(
                database_id=event.get("event_id"),
                g_cal_event_id=event["g_cal_event_id"],
                g_cal_id=event.get("g_cal_id"),
                is_deleted=bool(event.get("is_deleted")),
                body=build_event_body(event, host),
            )
        )
    return parsed


async def update_events(
    updated: list[dict],
    deleted: list[dict],
    host: str,
    default_calendar_id: str = "primary",
    service: Resource | None = None,
) -> list[EventIdPair]:
    """
    Sync edited and cancelled events to their Google Calendar counterparts.

    Args:
        updated: Event rows (with proposer_nickname) that were edited
        deleted: Event rows that were cancelled; sent with a "CANCELLED: " title
        host: Host serving the app, used for RSVP links in descriptions
        default_calendar_id: Calendar for cancelled events with no g_cal_id
        service: Calendar service to reuse (built from stored credentials if None)

    Returns:
        One (calendar_event_id, database_event_id) pair per event sent to Google

    Raises:
        MissingCalendarEventIdError: if any event has no g_cal_event_id
        HttpError: if any single update fails; the whole batch fails with it
    """
    cancelled = [{**event, "is_deleted": True} for event in deleted]
    parsed_events = parse_events([*updated, *cancelled], host)
    if not parsed_events:
        return []

    service = service or await get_calendar_service()

    to_update: list[ParsedEvent] = []
    for parsed in parsed_events:
        if parsed.is_deleted:
            to_update.append(parsed)
            continue
        if not parsed.g_cal_id:
            logger.error(f"Event {parsed.database_id} has no g_cal_id, skipping")
            continue

        # Read step of read-modify-write: keep the current guest list
        remote = await get_event(parsed.g_cal_id, parsed.g_cal_event_id, service=service)
        parsed.body["attendees"] = remote.get("attendees") or []
        to_update.append(parsed)

    results = await asyncio.gather(
        *(
            update_event(
                parsed.g_cal_id or default_calendar_id,
                parsed.g_cal_event_id,
                parsed.body,
                service=service,
            )
            for parsed in to_update
        )
    )

    return [
        EventIdPair(
            calendar_event_id=result.get("id"),
            database_event_id=parsed.database_id,
        )
        for parsed, result in zip(to_update, results)
    ]
