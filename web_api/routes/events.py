"""
Event proposal routes.

Endpoints:
- POST /api/events - Propose an event (one row per session)
- PATCH /api/events - Edit and/or cancel events
- GET /api/events/{event_hash} - Get an event and its RSVPs
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from core.config import get_default_calendar_id, get_prod_host
from core.database import get_connection
from core.enums import EventType
from core.events import create_events, update_events
from core.queries.events import get_event_by_hash
from core.queries.rsvps import get_event_rsvps

router = APIRouter(prefix="/api/events", tags=["events"])


class SessionInput(BaseModel):
    date_time: datetime
    duration: float = Field(ge=0.1, description="Duration in hours")


class ProposeEventRequest(BaseModel):
    """Schema for proposing an event."""

    title: str = Field(min_length=1)
    description: str | None = None
    sessions: list[SessionInput] = Field(min_length=1)
    limit: int = Field(default=0, ge=0)
    location: str = ""
    nickname: str | None = None
    email: str | None = None
    type: EventType = EventType.in_person
    g_cal_event: bool = False


class EventUpdate(BaseModel):
    event_id: int
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    start_date_time: datetime | None = None
    end_date_time: datetime | None = None
    location: str | None = None
    limit: int | None = Field(default=None, ge=0)
    type: EventType | None = None


class UpdateEventsRequest(BaseModel):
    updated: list[EventUpdate] = []
    deleted: list[int] = []


def _request_host(request: Request) -> str:
    return request.headers.get("host") or get_prod_host() or "localhost"


@router.post("")
async def propose_event(
    body: ProposeEventRequest,
    request: Request,
) -> dict[str, Any]:
    """Create the proposal's events, optionally on Google Calendar too."""
    created = await create_events(
        title=body.title,
        sessions=[
            {"start": session.date_time, "duration": session.duration}
            for session in body.sessions
        ],
        host=_request_host(request),
        proposer_email=body.email,
        nickname=body.nickname,
        description=body.description,
        location=body.location,
        limit=body.limit,
        event_type=body.type,
        g_cal_event=body.g_cal_event,
        calendar_id=get_default_calendar_id(),
    )
    return {"data": created}


@router.patch("")
async def edit_events(
    body: UpdateEventsRequest,
    request: Request,
) -> dict[str, Any]:
    """Save edits and cancellations, then sync linked events to Google."""
    updated = []
    for change in body.updated:
        values = change.model_dump(exclude_none=True)
        if "description" in values:
            values["description_html"] = values.pop("description")
        updated.append(values)

    pairs = await update_events(
        updated,
        body.deleted,
        host=_request_host(request),
        default_calendar_id=get_default_calendar_id(),
    )
    return {
        "data": [
            {
                "calendarEventId": pair.calendar_event_id,
                "databaseEventId": pair.database_event_id,
            }
            for pair in pairs
        ]
    }


@router.get("/{event_hash}")
async def get_event(event_hash: str) -> dict[str, Any]:
    async with get_connection() as conn:
        event = await get_event_by_hash(conn, event_hash)
        if not event:
            raise HTTPException(404, "Event not found")
        rsvps = await get_event_rsvps(conn, event["event_id"])

    return {"event": event, "rsvps": rsvps}
