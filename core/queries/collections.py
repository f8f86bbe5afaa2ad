"""Collection-related database queries using SQLAlchemy Core."""

from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import collection_events, collections, events


async def create_collection(
    conn: AsyncConnection,
    name: str,
    user_id: int,
) -> dict[str, Any]:
    result = await conn.execute(
        insert(collections)
        .values(name=name, user_id=user_id)
        .returning(collections)
    )
    return dict(result.mappings().first())


async def get_collection(
    conn: AsyncConnection,
    collection_id: int,
) -> dict[str, Any] | None:
    result = await conn.execute(
        select(collections).where(collections.c.collection_id == collection_id)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def add_events_to_collection(
    conn: AsyncConnection,
    collection_id: int,
    event_ids: list[int],
) -> int:
    """Link events to a collection, ignoring links that already exist."""
    if not event_ids:
        return 0

    stmt = (
        pg_insert(collection_events)
        .values(
            [
                {"collection_id": collection_id, "event_id": event_id}
                for event_id in event_ids
            ]
        )
        .on_conflict_do_nothing()
    )
    result = await conn.execute(stmt)
    return result.rowcount


async def get_collection_events(
    conn: AsyncConnection,
    collection_id: int,
) -> list[dict[str, Any]]:
    """Get live events in a collection, ordered by start time."""
    result = await conn.execute(
        select(events)
        .join(collection_events, collection_events.c.event_id == events.c.event_id)
        .where(collection_events.c.collection_id == collection_id)
        .where(events.c.is_deleted.is_(False))
        .order_by(events.c.start_date_time)
    )
    return [dict(row) for row in result.mappings()]
