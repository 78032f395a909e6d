"""Client for handing aggregated events to the storage backend.

Each :class:`ScrapedEvent` is posted as its camelCase payload; the backend
upserts on ``externalId`` so re-running the job does not duplicate rows.
"""
from __future__ import annotations

import os
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import requests
from dotenv import load_dotenv

from .schemas import ScrapedEvent

load_dotenv()

API_BASE_URL = os.getenv("API_URL", "http://localhost:8000/api/v1")
EVENTS_ENDPOINT = f"{API_BASE_URL}/events/"

logger = logging.getLogger(__name__)
if os.getenv("SCRAPER_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


@dataclass
class PostOutcome:
    """What happened to one event when it was handed to the backend."""

    event: ScrapedEvent
    response: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _make_headers() -> dict[str, str]:
    token = os.getenv("API_TOKEN")
    headers: dict[str, str] = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def post_event(
    event: ScrapedEvent, session: Optional[requests.Session] = None
) -> dict[str, Any]:
    """Upsert one event and return the backend's JSON response.

    Raises :class:`requests.RequestException` on transport or HTTP errors.
    """
    payload = event.to_payload()
    logger.info("POST %s %s", EVENTS_ENDPOINT, payload["externalId"])
    http = session or requests
    response = http.post(EVENTS_ENDPOINT, json=payload, headers=_make_headers(), timeout=30)
    response.raise_for_status()
    return response.json()


def post_events(events: Iterable[ScrapedEvent]) -> list[PostOutcome]:
    """Upsert every event over one session; a failed post does not stop the rest."""
    outcomes: list[PostOutcome] = []
    with requests.Session() as session:
        for event in events:
            try:
                outcomes.append(PostOutcome(event, response=post_event(event, session)))
            except requests.RequestException as exc:
                logger.warning("Failed to post %s: %s", event.title, exc)
                outcomes.append(PostOutcome(event, error=str(exc)))
    posted = sum(outcome.ok for outcome in outcomes)
    logger.info("Posted %d of %d event(s)", posted, len(outcomes))
    return outcomes
