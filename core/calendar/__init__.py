"""Google Calendar integration for event sync and invites."""

from .client import get_calendar_service
from .events import create_event, get_event, patch_event, update_event
from .invites import send_invite
from .sync import (
    EventIdPair,
    build_event_body,
    build_rsvp_url,
    parse_events,
    update_events,
)

__all__ = [
    "get_calendar_service",
    "create_event",
    "get_event",
    "patch_event",
    "update_event",
    "send_invite",
    "EventIdPair",
    "build_event_body",
    "build_rsvp_url",
    "parse_events",
    "update_events",
]
