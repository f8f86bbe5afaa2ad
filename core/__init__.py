"""
Core business logic - platform-agnostic.
Used by the web API; functions take configuration (e.g. the host) as arguments.
"""

# Database (SQLAlchemy)
from .database import get_connection, get_transaction, get_engine, close_engine, is_configured

# Errors
from .errors import (
    CalendarNotConfiguredError,
    ConfigurationError,
    EventNotFoundError,
    MissingCalendarEventIdError,
    MissingInputError,
)

# Events and RSVPs (async functions - must be awaited)
from .events import create_events, update_events
from .rsvps import cancel_rsvp, rsvp_to_event, send_invites_and_mark

__all__ = [
    # Database (SQLAlchemy)
    'get_connection', 'get_transaction', 'get_engine', 'close_engine', 'is_configured',
    # Errors
    'CalendarNotConfiguredError', 'ConfigurationError', 'EventNotFoundError',
    'MissingCalendarEventIdError', 'MissingInputError',
    # Events
    'create_events', 'update_events',
    # RSVPs
    'rsvp_to_event', 'cancel_rsvp', 'send_invites_and_mark',
]
