from datetime import datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo
import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from ingest.api_client import PostOutcome
from ingest.schemas import ScrapedEvent
from jobs import run_everything

NY = ZoneInfo("America/New_York")


@pytest.fixture
def events():
    return [
        ScrapedEvent(
            title=title,
            start_time=datetime(2025, 1, day, 8, 0, tzinfo=NY),
            location="Main St",
            source_url="https://example.com/",
            category="community",
            is_free=True,
        )
        for title, day in (("Cleanup", 11), ("Yard Sale", 18))
    ]


def test_run_posts_every_event(events, capsys):
    outcomes = [PostOutcome(event, response={"title": event.title}) for event in events]
    with patch("jobs.run_everything.collect_events", return_value=events), \
         patch("jobs.run_everything.post_events", return_value=outcomes) as mock_post:
        returned = run_everything.run()

    assert returned == events
    mock_post.assert_called_once_with(events)
    assert capsys.readouterr().out.count("✅ Posted:") == 2


def test_run_reports_failed_posts(events, capsys):
    outcomes = [
        PostOutcome(events[0], error="503 Server Error"),
        PostOutcome(events[1], response={"title": "Yard Sale"}),
    ]
    with patch("jobs.run_everything.collect_events", return_value=events), \
         patch("jobs.run_everything.post_events", return_value=outcomes):
        run_everything.run()

    out = capsys.readouterr().out
    assert "❌ Failed to post event: Cleanup 503 Server Error" in out
    assert "✅ Posted: Yard Sale" in out


def test_dry_run_prints_json(events, capsys):
    with patch("jobs.run_everything.collect_events", return_value=events), \
         patch("jobs.run_everything.post_events") as mock_post:
        run_everything.main(["--dry-run"])

    mock_post.assert_not_called()
    printed = json.loads(capsys.readouterr().out)
    assert [item["title"] for item in printed] == ["Cleanup", "Yard Sale"]
    assert printed[0]["location"] == "Main St"


def test_run_with_no_events(capsys):
    with patch("jobs.run_everything.collect_events", return_value=[]), \
         patch("jobs.run_everything.post_events") as mock_post:
        assert run_everything.run() == []

    mock_post.assert_not_called()
    assert "No upcoming events found" in capsys.readouterr().out
