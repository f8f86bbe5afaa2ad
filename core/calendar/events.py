"""Google Calendar event operations.

The googleapiclient calls block, so each one runs in a worker thread.
Provider errors (HttpError) propagate to the caller.
"""

import asyncio

from googleapiclient.discovery import Resource

from .client import get_calendar_service


async def get_event(
    calendar_id: str,
    event_id: str,
    service: Resource | None = None,
) -> dict:
    """Fetch a calendar event, including its current attendee list."""
    service = service or await get_calendar_service()

    def _sync_get():
        return service.events().get(calendarId=calendar_id, eventId=event_id).execute()

    return await asyncio.to_thread(_sync_get)


async def update_event(
    calendar_id: str,
    event_id: str,
    body: dict,
    service: Resource | None = None,
    send_updates: str = "all",
) -> dict:
    """
    Replace a calendar event with ``body``.

    The provider's update replaces the whole resource: any field missing
    from ``body`` (attendees included) is cleared.
    """
    service = service or await get_calendar_service()

    def _sync_update():
        return (
            service.events()
            .update(
                calendarId=calendar_id,
                eventId=event_id,
                body=body,
                sendUpdates=send_updates,
            )
            .execute()
        )

    return await asyncio.to_thread(_sync_update)


async def patch_event(
    calendar_id: str,
    event_id: str,
    body: dict,
    service: Resource | None = None,
    send_updates: str = "all",
) -> dict:
    """Patch only the fields present in ``body``."""
    service = service or await get_calendar_service()

    def _sync_patch():
        return (
            service.events()
            .patch(
                calendarId=calendar_id,
                eventId=event_id,
                body=body,
                sendUpdates=send_updates,
            )
            .execute()
        )

    return await asyncio.to_thread(_sync_patch)


async def create_event(
    calendar_id: str,
    body: dict,
    service: Resource | None = None,
) -> dict:
    """
    Create a calendar event.

    Returns:
        The created event resource ("id" is the remote event id)
    """
    service = service or await get_calendar_service()

    def _sync_insert():
        return (
            service.events()
            .insert(
                calendarId=calendar_id,
                body=body,
                sendUpdates="all",
            )
            .execute()
        )

    return await asyncio.to_thread(_sync_insert)
