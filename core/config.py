"""
Centralized configuration for the event proposals app.

Only the web layer reads these; core functions take the values they need
(e.g. the deployment host) as explicit parameters.
"""

import os


def is_dev_mode() -> bool:
    """Check if running in development mode (DEV_MODE env)."""
    return os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def get_frontend_port() -> int:
    """Get frontend dev server port from env or default."""
    return int(os.getenv("FRONTEND_PORT", "3000"))


def get_prod_host() -> str | None:
    """Host the app is served from in production, e.g. "events.example.com"."""
    host = os.environ.get("PROD_HOST", "").strip()
    return host or None


def get_default_calendar_id() -> str:
    """Calendar used when an event has no g_cal_id of its own."""
    return os.environ.get("GOOGLE_CALENDAR_ID", "primary")


def get_allowed_origins() -> list[str]:
    """
    Get list of allowed CORS origins.

    Includes localhost variants for dev and the production host.
    """
    ports = [get_api_port(), get_frontend_port()]
    hosts = ["localhost", "127.0.0.1"]
    origins = [f"http://{host}:{port}" for host in hosts for port in ports]

    prod_host = get_prod_host()
    if prod_host:
        origins.append(f"https://{prod_host}")

    return origins


# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("DATABASE_URL", "PostgreSQL connection string", True),
    ("PROD_HOST", "Host of the app in production, used in RSVP links", False),
    (
        "GOOGLE_CALENDAR_CREDENTIALS_JSON",
        "Service account fallback when no Google credential is stored",
        False,
    ),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        if os.environ.get(name):
            continue
        if required_in_dev and not in_dev:
            errors.append(f"  ✗ {name}: Not set ({description})")
        else:
            warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        return False, errors + warnings

    return True, warnings
