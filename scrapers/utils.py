from __future__ import annotations

"""Utility helpers for event scrapers."""

import os
from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from hashlib import sha1
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

DEFAULT_TIMEZONE = "America/New_York"


def get_timezone() -> ZoneInfo:
    """Return the zone events are generated in (``EVENTS_TIMEZONE``)."""
    return ZoneInfo(os.getenv("EVENTS_TIMEZONE") or DEFAULT_TIMEZONE)


def resolve_now(now: datetime | None = None) -> datetime:
    """Return an aware "current moment".

    Parameters
    ----------
    now:
        Explicit moment to use. Naive values are interpreted in the events
        timezone. ``None`` reads the wall clock.
    """
    zone = get_timezone()
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now


def to_iso_utc(value: datetime) -> str:
    """Return ``value`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def event_key(title: str, start: datetime, location: str | None) -> str:
    """Composite identity of an event: title, UTC start and location."""
    return f"{title}|{to_iso_utc(start)}|{location or ''}"


def make_external_id(page_url: str, title: str, start: str) -> str:
    """Create a stable external identifier from metadata."""
    host = urlparse(page_url).netloc
    raw = f"{host}|{title}|{start}"
    return f"{host}:{sha1(raw.encode()).hexdigest()[:16]}"
