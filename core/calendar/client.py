"""Google Calendar API client initialization."""

import json
import logging
import os

import sentry_sdk
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

from core.database import get_connection, is_configured as is_database_configured
from core.errors import CalendarNotConfiguredError
from core.queries.credentials import get_google_credential

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if exception is a Google API rate limit error."""
    if isinstance(exception, HttpError):
        return exception.resp.status == 429
    return False


def _log_calendar_error(
    exception: Exception,
    operation: str,
    context: dict | None = None,
) -> None:
    """
    Log calendar API errors with appropriate severity.

    Rate limits get warning level + specific Sentry event.
    Other errors get error level.
    """
    context = context or {}

    if _is_rate_limit_error(exception):
        logger.warning(
            f"Google Calendar rate limit hit during {operation}",
            extra={"operation": operation, **context},
        )
        sentry_sdk.capture_message(
            f"Google Calendar rate limit: {operation}",
            level="warning",
            extras={"operation": operation, **context},
        )
    else:
        logger.error(
            f"Google Calendar API error during {operation}: {exception}",
            extra={"operation": operation, **context},
        )
        sentry_sdk.capture_exception(exception)


def _service_account_info() -> dict | None:
    """Service account from GOOGLE_CALENDAR_CREDENTIALS_JSON or _FILE, if set."""
    creds_json = os.environ.get("GOOGLE_CALENDAR_CREDENTIALS_JSON")
    if creds_json:
        return json.loads(creds_json)

    creds_file = os.environ.get("GOOGLE_CALENDAR_CREDENTIALS_FILE")
    if creds_file and os.path.exists(creds_file):
        with open(creds_file) as f:
            return json.load(f)

    return None


def credentials_from_record(record: dict) -> Credentials:
    """Build OAuth user credentials from a stored google_credentials row."""
    expiry = record.get("expiry_date")
    if expiry is not None and expiry.tzinfo is not None:
        # google-auth compares expiry against a naive UTC datetime
        expiry = expiry.replace(tzinfo=None)

    return Credentials(
        token=record["access_token"],
        refresh_token=record.get("refresh_token"),
        id_token=record.get("id_token"),
        token_uri=TOKEN_URI,
        client_id=os.environ.get("GOOGLE_CLIENT_ID"),
        client_secret=os.environ.get("GOOGLE_CLIENT_SECRET"),
        scopes=(record.get("scope") or " ".join(SCOPES)).split(),
        expiry=expiry,
    )


async def get_calendar_service() -> Resource:
    """
    Build a Google Calendar API service for the current request.

    Credentials come from:
    - the most recent google_credentials row (linked Google account)
    - GOOGLE_CALENDAR_CREDENTIALS_JSON / _FILE service account, as fallback

    Raises CalendarNotConfiguredError if neither is available.
    """
    record = None
    if is_database_configured():
        async with get_connection() as conn:
            record = await get_google_credential(conn)

    if record:
        creds = credentials_from_record(record)
    else:
        info = _service_account_info()
        if info is None:
            raise CalendarNotConfiguredError(
                "No Google credential stored and no service account configured"
            )
        creds = service_account.Credentials.from_service_account_info(
            info,
            scopes=SCOPES,
        )
        calendar_email = os.environ.get("GOOGLE_CALENDAR_EMAIL")
        if calendar_email:
            # Service account acts as this user
            creds = creds.with_subject(calendar_email)

    return build("calendar", "v3", credentials=creds, cache_discovery=False)
