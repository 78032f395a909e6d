"""Weekly gatherings at Lexington area churches and similar institutions.

In a real implementation these would be scraped from each church website;
for now every institution in the catalog contributes its next eight weekly
meetings.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ingest.schemas import ScrapedEvent
from ingest.source_catalog import InstitutionTemplate, load_catalog

from .base import SourceResult, run_generator
from .recurrence import project_occurrences

SOURCE_NAME = "church_events"


def generate_institution_events(
    now: datetime, templates: Iterable[InstitutionTemplate]
) -> list[ScrapedEvent]:
    events: list[ScrapedEvent] = []
    for institution in templates:
        for start in project_occurrences(
            now,
            institution.weekday,
            institution.hour,
            max_occurrences=institution.occurrences,
        ):
            events.append(
                ScrapedEvent(
                    title=institution.title,
                    description=institution.description,
                    start_time=start,
                    location=institution.location,
                    category=institution.category,
                    is_free=institution.is_free,
                    source_url=institution.source_url,
                    image_url=institution.image_url,
                )
            )
    return events


def scrape_church_events(
    now: Optional[datetime] = None,
    templates: Optional[Iterable[InstitutionTemplate]] = None,
) -> SourceResult:
    """Run the institution source; failures yield an empty :class:`SourceResult`."""

    def _generate(moment: datetime) -> list[ScrapedEvent]:
        chosen = templates if templates is not None else load_catalog().institutions
        return generate_institution_events(moment, chosen)

    return run_generator(SOURCE_NAME, _generate, now)
