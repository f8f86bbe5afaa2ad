"""Query layer for database operations using SQLAlchemy Core."""

from .credentials import get_google_credential
from .events import (
    get_event_by_hash,
    get_full_events,
    insert_event,
    mark_events_deleted,
    set_calendar_linkage,
    update_event,
)
from .rsvps import create_rsvp, delete_rsvp, get_event_rsvps, set_added_to_google_calendar
from .users import (
    create_user,
    get_or_create_user_by_email,
    get_user_by_email,
    update_user,
)

__all__ = [
    # Users
    "get_user_by_email",
    "create_user",
    "update_user",
    "get_or_create_user_by_email",
    # Events
    "get_full_events",
    "get_event_by_hash",
    "insert_event",
    "update_event",
    "mark_events_deleted",
    "set_calendar_linkage",
    # RSVPs
    "create_rsvp",
    "delete_rsvp",
    "get_event_rsvps",
    "set_added_to_google_calendar",
    # Credentials
    "get_google_credential",
]
