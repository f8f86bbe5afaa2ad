"""Event-related database queries using SQLAlchemy Core."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import events, users


def _full_event_query():
    """Events joined with the proposer's nickname and email."""
    return select(
        events,
        users.c.nickname.label("proposer_nickname"),
        users.c.email.label("proposer_email"),
    ).join(users, users.c.user_id == events.c.proposer_id)


async def get_full_events(
    conn: AsyncConnection,
    event_ids: list[int],
) -> list[dict[str, Any]]:
    """
    Get events with proposer info, in the order the ids were given.

    Ids with no matching row are left out.
    """
    if not event_ids:
        return []

    result = await conn.execute(
        _full_event_query().where(events.c.event_id.in_(event_ids))
    )
    by_id = {row["event_id"]: dict(row) for row in result.mappings()}
    return [by_id[event_id] for event_id in event_ids if event_id in by_id]


async def get_event_by_hash(
    conn: AsyncConnection,
    event_hash: str,
) -> dict[str, Any] | None:
    result = await conn.execute(
        _full_event_query().where(events.c.hash == event_hash)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def insert_event(conn: AsyncConnection, **values: Any) -> dict[str, Any]:
    """Insert an event row and return it."""
    result = await conn.execute(insert(events).values(**values).returning(events))
    return dict(result.mappings().first())


async def update_event(
    conn: AsyncConnection,
    event_id: int,
    **updates: Any,
) -> dict[str, Any] | None:
    """
    Update a live event by ID and return the updated record.

    Deleted events are not touched: returns None for them.
    """
    updates["updated_at"] = datetime.now(timezone.utc)
    result = await conn.execute(
        update(events)
        .where(events.c.event_id == event_id)
        .where(events.c.is_deleted.is_(False))
        .values(**updates)
        .returning(events)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def mark_events_deleted(
    conn: AsyncConnection,
    event_ids: list[int],
) -> list[int]:
    """Set is_deleted on the given events. Returns the ids actually marked."""
    if not event_ids:
        return []

    result = await conn.execute(
        update(events)
        .where(events.c.event_id.in_(event_ids))
        .where(events.c.is_deleted.is_(False))
        .values(is_deleted=True, updated_at=datetime.now(timezone.utc))
        .returning(events.c.event_id)
    )
    return [row.event_id for row in result]


async def set_calendar_linkage(
    conn: AsyncConnection,
    event_id: int,
    g_cal_event_id: str,
    g_cal_id: str,
) -> bool:
    """
    Link an event to its Google Calendar counterpart.

    Only links events that have no g_cal_event_id yet; an existing link is
    never replaced. Returns True if the row was updated.
    """
    result = await conn.execute(
        update(events)
        .where(events.c.event_id == event_id)
        .where(events.c.g_cal_event_id.is_(None))
        .values(
            g_cal_event_id=g_cal_event_id,
            g_cal_id=g_cal_id,
            updated_at=datetime.now(timezone.utc),
        )
    )
    return result.rowcount > 0
