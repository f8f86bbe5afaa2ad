"""User-related database queries using SQLAlchemy Core."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import users

DEFAULT_NICKNAME = "Anonymous"


async def get_user_by_email(
    conn: AsyncConnection,
    email: str,
) -> dict[str, Any] | None:
    """Get a user by their email address."""
    result = await conn.execute(select(users).where(users.c.email == email))
    row = result.mappings().first()
    return dict(row) if row else None


async def create_user(
    conn: AsyncConnection,
    email: str | None = None,
    wallet_address: str | None = None,
    nickname: str | None = None,
) -> dict[str, Any]:
    """Create a new user and return the created record."""
    values: dict[str, Any] = {"nickname": nickname or DEFAULT_NICKNAME}
    if email:
        values["email"] = email
    if wallet_address:
        values["wallet_address"] = wallet_address

    result = await conn.execute(insert(users).values(**values).returning(users))
    row = result.mappings().first()
    return dict(row)


async def update_user(
    conn: AsyncConnection,
    user_id: int,
    **updates: Any,
) -> dict[str, Any] | None:
    """Update a user by ID and return the updated record."""
    updates["updated_at"] = datetime.now(timezone.utc)
    result = await conn.execute(
        update(users)
        .where(users.c.user_id == user_id)
        .values(**updates)
        .returning(users)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def get_or_create_user_by_email(
    conn: AsyncConnection,
    email: str,
    nickname: str | None = None,
) -> dict[str, Any]:
    """
    Get or create a user by email.

    If the user exists and a different nickname is given, updates it.
    """
    existing = await get_user_by_email(conn, email)

    if existing:
        if nickname and nickname != existing.get("nickname"):
            return await update_user(conn, existing["user_id"], nickname=nickname)
        return existing

    return await create_user(conn, email=email, nickname=nickname)
