"""
Collection routes.

Endpoints:
- POST /api/collections - Create a collection for a user
- POST /api/collections/{collection_id}/events - Add events to a collection
- GET /api/collections/{collection_id}/events - List a collection's events
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from core.database import get_connection, get_transaction
from core.queries.collections import (
    add_events_to_collection,
    create_collection,
    get_collection,
    get_collection_events,
)
from core.queries.users import get_or_create_user_by_email

router = APIRouter(prefix="/api/collections", tags=["collections"])


class CreateCollectionRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str


class AddEventsRequest(BaseModel):
    events: list[int] = Field(min_length=1)


@router.post("")
async def create_collection_endpoint(body: CreateCollectionRequest) -> dict[str, Any]:
    async with get_transaction() as conn:
        user = await get_or_create_user_by_email(conn, body.email)
        collection = await create_collection(conn, body.name, user["user_id"])
    return {"data": collection}


@router.post("/{collection_id}/events")
async def add_collection_events(
    collection_id: int,
    body: AddEventsRequest,
) -> dict[str, Any]:
    async with get_transaction() as conn:
        if not await get_collection(conn, collection_id):
            raise HTTPException(404, "Collection not found")
        added = await add_events_to_collection(conn, collection_id, body.events)
    return {"data": {"added": added}}


@router.get("/{collection_id}/events")
async def list_collection_events(collection_id: int) -> dict[str, Any]:
    async with get_connection() as conn:
        collection = await get_collection(conn, collection_id)
        if not collection:
            raise HTTPException(404, "Collection not found")
        events = await get_collection_events(conn, collection_id)
    return {"collection": collection, "events": events}
