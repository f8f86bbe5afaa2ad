"""RSVPs: attending events and recording calendar invites."""

import logging

import sentry_sdk

from core.calendar.invites import send_invite
from core.database import get_connection, get_transaction
from core.errors import ConfigurationError, EventNotFoundError, MissingInputError
from core.queries.events import get_event_by_hash
from core.queries.rsvps import create_rsvp, delete_rsvp, set_added_to_google_calendar
from core.queries.users import get_or_create_user_by_email, get_user_by_email

logger = logging.getLogger(__name__)


async def rsvp_to_event(
    event_hash: str,
    email: str,
    nickname: str | None = None,
) -> dict:
    """
    RSVP a user (found or created by email) to the event with ``event_hash``.

    Returns:
        {"event_id", "attendee_id", "created"} where created is False if
        the user had already RSVP'd
    """
    async with get_transaction() as conn:
        event = await get_event_by_hash(conn, event_hash)
        if not event or event["is_deleted"]:
            raise EventNotFoundError(f"No event with hash {event_hash}")

        user = await get_or_create_user_by_email(conn, email, nickname=nickname)
        row = await create_rsvp(conn, event["event_id"], user["user_id"])

    return {
        "event_id": event["event_id"],
        "attendee_id": user["user_id"],
        "created": row is not None,
    }


async def cancel_rsvp(event_hash: str, email: str) -> bool:
    """Remove the user's RSVP. Returns False if there was nothing to remove."""
    async with get_transaction() as conn:
        event = await get_event_by_hash(conn, event_hash)
        user = await get_user_by_email(conn, email)
        if not event or not user:
            return False
        return await delete_rsvp(conn, event["event_id"], user["user_id"])


async def send_invites_and_mark(
    event_ids: list[int] | None,
    email: str | None,
    host: str | None,
    default_calendar_id: str = "primary",
) -> bool:
    """
    Invite ``email`` to the calendar events of ``event_ids`` and flag the
    matching RSVPs as added to Google Calendar.

    Flagging is best effort and not transactional: a failing row is logged
    and the loop moves on, so some RSVPs may end up flagged and others not.
    If no user has ``email`` the loop stops at that point instead of
    trying the remaining events. An empty ``event_ids`` list is not an
    error; there is simply nothing to invite to.

    Raises:
        MissingInputError: if event_ids is missing or email is empty
        ConfigurationError: if host is not set
    """
    if event_ids is None or not email:
        raise MissingInputError("`events` and/or `email` not found in request")
    if not host:
        raise ConfigurationError("PROD_HOST must be set (the host of the app in prod)")

    await send_invite(
        event_ids,
        attendee_email=email,
        host=host,
        default_calendar_id=default_calendar_id,
    )

    for event_id in event_ids:
        async with get_connection() as conn:
            user = await get_user_by_email(conn, email)
        if not user:
            logger.error(f"No user with email {email}, stopping at event {event_id}")
            break

        try:
            async with get_transaction() as conn:
                marked = await set_added_to_google_calendar(
                    conn, event_id, user["user_id"]
                )
            if not marked:
                logger.warning(
                    f"No RSVP for user {user['user_id']} on event {event_id}"
                )
        except Exception as e:
            logger.error(f"Failed to flag RSVP for event {event_id}: {e}")
            sentry_sdk.capture_exception(e)

    return True
