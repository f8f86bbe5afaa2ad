"""
Event proposals: creating, editing and cancelling events.

A proposal with several sessions becomes one event row per session. Rows
linked to Google Calendar are kept in sync through core.calendar.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Any

import sentry_sdk
from googleapiclient.errors import HttpError

from core.calendar import sync as calendar_sync
from core.calendar.client import get_calendar_service
from core.calendar.events import create_event
from core.database import get_connection, get_transaction
from core.enums import EventType
from core.errors import CalendarNotConfiguredError
from core.queries.events import (
    get_full_events,
    insert_event,
    mark_events_deleted,
    set_calendar_linkage,
    update_event,
)
from core.queries.users import create_user, get_or_create_user_by_email

logger = logging.getLogger(__name__)

# Fields callers may change on an existing event. is_deleted and the
# g_cal_* linkage are managed here, never taken from input.
EDITABLE_FIELDS = {
    "title",
    "description_text",
    "description_html",
    "start_date_time",
    "end_date_time",
    "location",
    "limit",
    "type",
}


def generate_event_hash() -> str:
    """Random, URL-safe id used in RSVP links."""
    return secrets.token_hex(16)


def session_bounds(start: datetime, duration_hours: float) -> tuple[datetime, datetime]:
    """Start and end of a session lasting ``duration_hours``."""
    return start, start + timedelta(hours=duration_hours)


async def _link_to_calendar(
    created: list[dict],
    host: str,
    calendar_id: str,
) -> None:
    """
    Create a Google Calendar event for each newly created row.

    Failures are logged and leave the row unlinked; the local event stays.
    """
    try:
        service = await get_calendar_service()
    except CalendarNotConfiguredError as e:
        logger.warning(f"Calendar not configured, events left unlinked: {e}")
        return

    for event in created:
        try:
            remote = await create_event(
                calendar_id,
                calendar_sync.build_event_body(event, host),
                service=service,
            )
        except HttpError as e:
            logger.error(f"Failed to create calendar event for {event['event_id']}: {e}")
            sentry_sdk.capture_exception(e)
            continue

        async with get_transaction() as conn:
            await set_calendar_linkage(conn, event["event_id"], remote["id"], calendar_id)
        event["g_cal_event_id"] = remote["id"]
        event["g_cal_id"] = calendar_id


async def create_events(
    title: str,
    sessions: list[dict],
    host: str,
    proposer_email: str | None = None,
    nickname: str | None = None,
    description: str | None = None,
    location: str = "",
    limit: int = 0,
    event_type: EventType = EventType.in_person,
    g_cal_event: bool = False,
    calendar_id: str = "primary",
) -> list[dict[str, Any]]:
    """
    Create one event per session for a proposal.

    Args:
        title: Event title
        sessions: List of {"start": datetime, "duration": hours}
        host: Host serving the app, used for RSVP links
        proposer_email: Proposer's email; an anonymous user is created if None
        nickname: Proposer's display name
        description: Event description (HTML)
        location: Where the event happens
        limit: Max attendees, 0 for no limit
        event_type: EventType
        g_cal_event: Also create Google Calendar events
        calendar_id: Calendar to create them in

    Returns:
        The created event rows, with proposer_nickname
    """
    async with get_transaction() as conn:
        if proposer_email:
            proposer = await get_or_create_user_by_email(
                conn, proposer_email, nickname=nickname
            )
        else:
            proposer = await create_user(conn, nickname=nickname)

        created = []
        for session in sessions:
            start, end = session_bounds(session["start"], session["duration"])
            row = await insert_event(
                conn,
                title=title,
                description_html=description,
                start_date_time=start,
                end_date_time=end,
                location=location,
                hash=generate_event_hash(),
                limit=limit,
                type=event_type,
                g_cal_event_requested=g_cal_event,
                proposer_id=proposer["user_id"],
            )
            row["proposer_nickname"] = proposer["nickname"]
            created.append(row)

    if g_cal_event and created:
        await _link_to_calendar(created, host, calendar_id)

    return created


async def update_events(
    updated: list[dict],
    deleted_ids: list[int],
    host: str,
    default_calendar_id: str = "primary",
) -> list[calendar_sync.EventIdPair]:
    """
    Apply edits and cancellations, then push them to Google Calendar.

    Args:
        updated: Dicts with "event_id" plus any EDITABLE_FIELDS to change
        deleted_ids: Ids of events to cancel
        host: Host serving the app, used for RSVP links

    Returns:
        (calendar_event_id, database_event_id) pairs for synced events.
        Events not linked to a calendar are updated locally only.
    """
    async with get_transaction() as conn:
        for changes in updated:
            values = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
            if values:
                await update_event(conn, changes["event_id"], **values)
        await mark_events_deleted(conn, deleted_ids)

    async with get_connection() as conn:
        updated_rows = await get_full_events(conn, [u["event_id"] for u in updated])
        deleted_rows = await get_full_events(conn, deleted_ids)

    # An event both edited and cancelled is only sent as a cancellation
    linked_updated = [
        row for row in updated_rows if row["g_cal_event_id"] and not row["is_deleted"]
    ]
    linked_deleted = [row for row in deleted_rows if row["g_cal_event_id"]]

    if not linked_updated and not linked_deleted:
        return []

    return await calendar_sync.update_events(
        updated=linked_updated,
        deleted=linked_deleted,
        host=host,
        default_calendar_id=default_calendar_id,
    )
