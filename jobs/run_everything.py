"""Entrypoint script to aggregate local events and post them to the API."""
from __future__ import annotations

import argparse
import json
import logging
import os

from ingest.api_client import post_events
from ingest.schemas import ScrapedEvent
from scrapers.aggregator import collect_events

logger = logging.getLogger(__name__)
if os.getenv("SCRAPER_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def run(dry_run: bool = False) -> list[ScrapedEvent]:
    """Collect events from every source and upsert them into the backend."""
    events = collect_events()
    logger.info("Collected %d event(s)", len(events))

    if dry_run:
        print(json.dumps([event.to_payload() for event in events], indent=2))
        return events

    if not events:
        print("No upcoming events found")
        return events

    for outcome in post_events(events):
        if outcome.ok:
            print("✅ Posted:", outcome.response.get("title", outcome.event.title))
        else:
            print("❌ Failed to post event:", outcome.event.title, outcome.error)
    return events


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Aggregate local events and post them")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the aggregated events as JSON instead of posting them",
    )
    args = parser.parse_args(argv)
    run(dry_run=args.dry_run)


if __name__ == "__main__":
    main()
