from datetime import datetime, timezone
from zoneinfo import ZoneInfo
import dataclasses
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from ingest.schemas import ScrapedEvent

NY = ZoneInfo("America/New_York")


@pytest.fixture
def market_event():
    return ScrapedEvent(
        title="Downtown Farmers Market",
        description="Fresh local produce.",
        start_time=datetime(2025, 1, 11, 8, 0, tzinfo=NY),
        location="Tandy Centennial Park, Lexington, KY",
        source_url="https://www.lfmky.com/",
        category="food",
        is_free=True,
    )


def test_key_uses_utc_millisecond_timestamp(market_event):
    assert market_event.key() == (
        "Downtown Farmers Market|2025-01-11T13:00:00.000Z|Tandy Centennial Park, Lexington, KY"
    )


def test_key_without_location():
    event = ScrapedEvent(
        title="Swap",
        start_time=datetime(2025, 1, 11, 13, 0, tzinfo=timezone.utc),
        source_url="https://example.com/",
        category="community",
        is_free=True,
    )
    assert event.key() == "Swap|2025-01-11T13:00:00.000Z|"


def test_events_are_immutable(market_event):
    with pytest.raises(dataclasses.FrozenInstanceError):
        market_event.title = "Other"


def test_rejects_empty_title_and_naive_start():
    with pytest.raises(ValueError):
        ScrapedEvent(title="", start_time=datetime.now(timezone.utc), source_url="u", category="c", is_free=True)
    with pytest.raises(ValueError):
        ScrapedEvent(title="T", start_time=datetime(2025, 1, 1), source_url="u", category="c", is_free=True)


def test_to_payload(market_event):
    payload = market_event.to_payload()

    assert payload["title"] == "Downtown Farmers Market"
    assert payload["sourceUrl"] == "https://www.lfmky.com/"
    assert payload["isFree"] is True
    assert payload["category"] == "food"
    assert "imageUrl" not in payload
    assert payload["externalId"].startswith("www.lfmky.com:")
    start = datetime.fromisoformat(payload["startTime"].replace("Z", "+00:00"))
    assert start == market_event.start_time


def test_external_id_is_stable(market_event):
    assert market_event.to_payload()["externalId"] == market_event.to_payload()["externalId"]
