"""Clock helpers shared by the registry and the HTTP API."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current UTC time."""

    return datetime.now(timezone.utc)


def format_uptime(seconds: float) -> str:
    """Render uptime as an HH:MM:SS-like string."""

    duration = timedelta(seconds=int(seconds))
    return str(duration)
