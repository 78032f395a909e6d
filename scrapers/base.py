"""Per-source result type and the failure boundary every generator runs behind."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ingest.schemas import ScrapedEvent

from .utils import resolve_now

logger = logging.getLogger(__name__)


@dataclass
class SourceResult:
    """Outcome of running one source: its events, or the reason it has none."""

    source: str
    events: list[ScrapedEvent] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_generator(
    source: str,
    generate: Callable[[datetime], list[ScrapedEvent]],
    now: Optional[datetime] = None,
) -> SourceResult:
    """Call ``generate`` for ``now`` and turn any exception into an empty result."""
    try:
        events = generate(resolve_now(now))
    except Exception as exc:
        logger.error("Error scraping %s: %s", source, exc)
        return SourceResult(source=source, error=f"{type(exc).__name__}: {exc}")

    logger.info("%s produced %d event(s)", source, len(events))
    return SourceResult(source=source, events=events)
