"""Lexington Farmers Market events.

The market runs every Saturday morning; the upcoming sessions are projected
from the catalog rather than fetched from lfmky.com.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ingest.schemas import ScrapedEvent
from ingest.source_catalog import RecurringTemplate, load_catalog

from .base import SourceResult, run_generator
from .recurrence import project_occurrences

SOURCE_NAME = "lexington_farmers_market"


def generate_market_events(
    now: datetime, templates: Iterable[RecurringTemplate]
) -> list[ScrapedEvent]:
    """Return upcoming sessions for every market template."""
    events: list[ScrapedEvent] = []
    for template in templates:
        for start in project_occurrences(
            now, template.weekday, template.hour, max_occurrences=template.occurrences
        ):
            events.append(
                ScrapedEvent(
                    title=template.title,
                    description=template.description,
                    start_time=start,
                    location=template.location,
                    category=template.category,
                    is_free=template.is_free,
                    source_url=template.source_url,
                    image_url=template.image_url,
                )
            )
    return events


def scrape_lexington_farmers_market(
    now: Optional[datetime] = None,
    templates: Optional[Iterable[RecurringTemplate]] = None,
) -> SourceResult:
    """Run the market source; failures yield an empty :class:`SourceResult`."""

    def _generate(moment: datetime) -> list[ScrapedEvent]:
        chosen = templates if templates is not None else load_catalog().markets
        return generate_market_events(moment, chosen)

    return run_generator(SOURCE_NAME, _generate, now)
