"""One-off community listings: cleanups, yard sales, classes."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ingest.schemas import ScrapedEvent
from ingest.source_catalog import CommunityTemplate, load_catalog

from .base import SourceResult, run_generator
from .recurrence import offset_occurrence

SOURCE_NAME = "community_events"


def generate_community_events(
    now: datetime, templates: Iterable[CommunityTemplate]
) -> list[ScrapedEvent]:
    """Return at most one event per listing, skipping listings already past."""
    events: list[ScrapedEvent] = []
    for listing in templates:
        start = offset_occurrence(now, listing.offset_days, listing.hour)
        if start is None:
            continue
        events.append(
            ScrapedEvent(
                title=listing.title,
                description=listing.description,
                start_time=start,
                location=listing.location,
                category=listing.category,
                is_free=listing.is_free,
                source_url=listing.source_url,
                image_url=listing.image_url,
            )
        )
    return events


def scrape_community_events(
    now: Optional[datetime] = None,
    templates: Optional[Iterable[CommunityTemplate]] = None,
) -> SourceResult:
    """Run the community source; failures yield an empty :class:`SourceResult`."""

    def _generate(moment: datetime) -> list[ScrapedEvent]:
        chosen = templates if templates is not None else load_catalog().community
        return generate_community_events(moment, chosen)

    return run_generator(SOURCE_NAME, _generate, now)
