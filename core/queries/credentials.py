"""Third-party credential queries (Google)."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import google_credentials


async def get_google_credential(conn: AsyncConnection) -> dict[str, Any] | None:
    """Get the most recently stored Google credential."""
    result = await conn.execute(
        select(google_credentials)
        .order_by(google_credentials.c.created_at.desc())
        .limit(1)
    )
    row = result.mappings().first()
    return dict(row) if row else None
