"""Shared data models for the collector service."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from scrapers.utils import event_key, make_external_id


class EventModel(BaseModel):
    """Wire format handed to the storage backend and API consumers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    external_id: str
    title: str
    description: Optional[str] = None
    start_time: datetime  # ISO datetime
    location: Optional[str] = None
    image_url: Optional[str] = None
    source_url: str
    category: str
    is_free: bool


@dataclass(frozen=True)
class ScrapedEvent:
    """A single upcoming happening produced by one of the sources."""

    title: str
    start_time: datetime
    source_url: str
    category: str
    is_free: bool
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("event title must not be empty")
        if self.start_time.tzinfo is None:
            raise ValueError(f"start_time for {self.title!r} must be timezone-aware")

    def key(self) -> str:
        """Return the ``title|start|location`` identity used for dedup."""
        return event_key(self.title, self.start_time, self.location)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON payload; absent fields are omitted."""
        start = self.start_time.astimezone(timezone.utc)
        model = EventModel(
            external_id=make_external_id(self.source_url, self.title, start.isoformat()),
            title=self.title,
            description=self.description,
            start_time=start,
            location=self.location,
            image_url=self.image_url,
            source_url=self.source_url,
            category=self.category,
            is_free=self.is_free,
        )
        return model.model_dump(mode="json", by_alias=True, exclude_none=True)
