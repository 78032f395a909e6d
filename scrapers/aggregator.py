"""Aggregate events from every source into one canonical, ordered list."""
from __future__ import annotations

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from itertools import chain
from typing import Callable, Iterable, Optional, Sequence

from dotenv import load_dotenv

from ingest.schemas import ScrapedEvent

from . import community, farmers_market, institutions
from .base import SourceResult
from .utils import resolve_now

load_dotenv()

SOURCE_TIMEOUT = float(os.getenv("SOURCE_TIMEOUT", "10"))

logger = logging.getLogger(__name__)

Source = tuple[str, Callable[[datetime], SourceResult]]

# Registration order decides concatenation order, and therefore which
# duplicate keeps its position.
SOURCES: tuple[Source, ...] = (
    (farmers_market.SOURCE_NAME, farmers_market.scrape_lexington_farmers_market),
    (institutions.SOURCE_NAME, institutions.scrape_church_events),
    (community.SOURCE_NAME, community.scrape_community_events),
)

# Thread pool for running the synchronous generators concurrently
executor = ThreadPoolExecutor(max_workers=4)


def merge_events(events: Iterable[ScrapedEvent]) -> list[ScrapedEvent]:
    """Deduplicate by composite key, then sort by start time.

    A repeated key keeps the slot of its first occurrence but takes the
    content of its last one. ``dict`` assignment to an existing key does
    exactly that. The sort is stable, so events starting at the same moment
    stay in that order.
    """
    unique: dict[str, ScrapedEvent] = {}
    for event in events:
        unique[event.key()] = event
    return sorted(unique.values(), key=lambda event: event.start_time)


def merge_results(results: Sequence[SourceResult]) -> list[ScrapedEvent]:
    """Concatenate per-source results in order and merge them."""
    for result in results:
        if not result.ok:
            logger.warning("Source %s contributed no events: %s", result.source, result.error)
    merged = merge_events(chain.from_iterable(result.events for result in results))
    logger.info(
        "Merged %d event(s) from %d source(s) into %d",
        sum(len(result.events) for result in results),
        len(results),
        len(merged),
    )
    return merged


async def fetch_all_events(
    now: Optional[datetime] = None,
    *,
    sources: Sequence[Source] = SOURCES,
    timeout: Optional[float] = SOURCE_TIMEOUT,
) -> list[ScrapedEvent]:
    """Run every source concurrently and return the merged event list.

    Each source runs in the thread pool, bounded by ``timeout`` seconds. A
    source that raises or times out contributes nothing; any other failure
    results in an empty list.
    """
    try:
        moment = resolve_now(now)
        loop = asyncio.get_running_loop()
        outcomes = await asyncio.gather(
            *(
                asyncio.wait_for(loop.run_in_executor(executor, scrape, moment), timeout)
                for _, scrape in sources
            ),
            return_exceptions=True,
        )

        results: list[SourceResult] = []
        for (name, _), outcome in zip(sources, outcomes):
            if isinstance(outcome, asyncio.TimeoutError):
                logger.warning("Source %s timed out after %ss", name, timeout)
                results.append(SourceResult(source=name, error="timed out"))
            elif isinstance(outcome, Exception):
                logger.error("Source %s failed: %s", name, outcome)
                results.append(SourceResult(source=name, error=str(outcome)))
            elif isinstance(outcome, BaseException):
                raise outcome
            elif not isinstance(outcome, SourceResult):
                logger.error("Source %s returned %s instead of a SourceResult", name, type(outcome).__name__)
                results.append(SourceResult(source=name, error=f"unexpected result {outcome!r}"))
            else:
                results.append(outcome)

        return merge_results(results)
    except Exception as exc:
        logger.error("Error fetching all events: %s", exc)
        return []


def collect_events(now: Optional[datetime] = None) -> list[ScrapedEvent]:
    """Synchronous entry point for :func:`fetch_all_events`.

    Inside a running event loop ``asyncio.run`` is not allowed, so the
    pipeline gets its own loop on a pool thread and this call blocks on it.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(fetch_all_events(now))
    return executor.submit(asyncio.run, fetch_all_events(now)).result()
