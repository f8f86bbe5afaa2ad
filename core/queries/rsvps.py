"""RSVP-related database queries using SQLAlchemy Core."""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import rsvps, users


async def create_rsvp(
    conn: AsyncConnection,
    event_id: int,
    attendee_id: int,
) -> dict[str, Any] | None:
    """
    Insert an RSVP for (event, attendee).

    Returns the new row, or None if the pair already exists.
    """
    stmt = (
        insert(rsvps)
        .values(event_id=event_id, attendee_id=attendee_id)
        .on_conflict_do_nothing(constraint="rsvps_event_attendee_unique")
        .returning(rsvps)
    )
    result = await conn.execute(stmt)
    row = result.mappings().first()
    return dict(row) if row else None


async def delete_rsvp(
    conn: AsyncConnection,
    event_id: int,
    attendee_id: int,
) -> bool:
    result = await conn.execute(
        delete(rsvps)
        .where(rsvps.c.event_id == event_id)
        .where(rsvps.c.attendee_id == attendee_id)
    )
    return result.rowcount > 0


async def set_added_to_google_calendar(
    conn: AsyncConnection,
    event_id: int,
    attendee_id: int,
) -> bool:
    """Flag the (event, attendee) RSVP as invited. Returns False if no such RSVP."""
    result = await conn.execute(
        update(rsvps)
        .where(rsvps.c.event_id == event_id)
        .where(rsvps.c.attendee_id == attendee_id)
        .values(is_added_to_google_calendar=True)
    )
    return result.rowcount > 0


async def get_event_rsvps(
    conn: AsyncConnection,
    event_id: int,
) -> list[dict[str, Any]]:
    """Get RSVPs for an event with attendee nickname and email."""
    result = await conn.execute(
        select(
            rsvps,
            users.c.nickname.label("attendee_nickname"),
            users.c.email.label("attendee_email"),
        )
        .join(users, users.c.user_id == rsvps.c.attendee_id)
        .where(rsvps.c.event_id == event_id)
        .order_by(rsvps.c.created_at)
    )
    return [dict(row) for row in result.mappings()]
