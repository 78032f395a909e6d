"""Project weekly and one-off recurrence rules onto future timestamps.

Weekdays are Sunday based: ``0`` is Sunday and ``6`` is Saturday. All
arithmetic is wall-clock arithmetic in the timezone of ``now``, so an 08:00
event stays at 08:00 across a DST change.
"""
from __future__ import annotations

from datetime import datetime, timedelta

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


def sunday_based_weekday(moment: datetime) -> int:
    """Return the weekday of ``moment`` with Sunday as ``0``."""
    return (moment.weekday() + 1) % 7


def _at_hour(moment: datetime, hour: int) -> datetime:
    return moment.replace(hour=hour, minute=0, second=0, microsecond=0)


def project_occurrences(
    now: datetime,
    weekday: int,
    hour: int,
    weeks_ahead: int = 0,
    max_occurrences: int = 1,
) -> list[datetime]:
    """Return up to ``max_occurrences`` weekly occurrences strictly after ``now``.

    The anchor is the next ``weekday`` on or after ``now``'s date (today when
    the weekdays match), moved ``weeks_ahead`` weeks forward and set to
    ``hour:00``. Candidates are the anchor plus ``i`` weeks for ``i`` in
    ``range(max_occurrences)``; a candidate on today's date whose hour has
    already passed is dropped rather than replaced, so fewer than
    ``max_occurrences`` timestamps may come back.
    """
    days_until = (weekday - sunday_based_weekday(now) + 7) % 7
    anchor = _at_hour(now + timedelta(days=days_until, weeks=weeks_ahead), hour)

    occurrences = []
    for week in range(max_occurrences):
        candidate = anchor + timedelta(weeks=week)
        if candidate > now:
            occurrences.append(candidate)
    return occurrences


def offset_occurrence(now: datetime, offset_days: int, hour: int) -> datetime | None:
    """Return ``now`` moved ``offset_days`` days at ``hour:00``, if still ahead."""
    candidate = _at_hour(now + timedelta(days=offset_days), hour)
    return candidate if candidate > now else None
