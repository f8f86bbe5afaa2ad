"""
RSVP routes.

Endpoints:
- POST /api/rsvps - RSVP to an event
- DELETE /api/rsvps - Withdraw an RSVP
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from core.errors import EventNotFoundError
from core.rsvps import cancel_rsvp, rsvp_to_event

router = APIRouter(prefix="/api/rsvps", tags=["rsvps"])


class RsvpRequest(BaseModel):
    hash: str
    email: str
    nickname: str | None = None


class CancelRsvpRequest(BaseModel):
    hash: str
    email: str


@router.post("")
async def create_rsvp_endpoint(body: RsvpRequest) -> dict[str, Any]:
    try:
        result = await rsvp_to_event(body.hash, body.email, nickname=body.nickname)
    except EventNotFoundError:
        raise HTTPException(404, "Event not found")
    return {"data": result}


@router.delete("")
async def cancel_rsvp_endpoint(body: CancelRsvpRequest) -> dict[str, Any]:
    removed = await cancel_rsvp(body.hash, body.email)
    if not removed:
        raise HTTPException(404, "RSVP not found")
    return {"data": True}
