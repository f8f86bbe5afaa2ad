"""Exceptions raised by the event and calendar services."""


class ConfigurationError(Exception):
    """Required deployment configuration is missing."""


class MissingInputError(ValueError):
    """A required request field is missing or empty."""


class CalendarNotConfiguredError(Exception):
    """No Google credential is available to build a Calendar client."""


class MissingCalendarEventIdError(Exception):
    """An event slated for sync has no linked Google Calendar event."""

    def __init__(self, event_id: int | None):
        self.event_id = event_id
        super().__init__(f"g_cal_event_id not found for event {event_id}")


class EventNotFoundError(Exception):
    """No event matches the given id or hash."""
