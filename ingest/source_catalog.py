"""Utilities for loading the static event template catalog."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

BASE_PATH = Path(__file__).resolve().parent.parent
DEFAULT_CATALOG = BASE_PATH / "sources" / "lexington_ky.json"


def _check_slot(label: str, weekday: int | None, hour: int) -> None:
    if weekday is not None and not 0 <= weekday <= 6:
        raise ValueError(f"{label}: weekday must be 0-6 (Sunday=0), got {weekday}")
    if not 0 <= hour <= 23:
        raise ValueError(f"{label}: hour must be 0-23, got {hour}")


@dataclass(frozen=True)
class RecurringTemplate:
    """A weekly event such as a farmers market."""

    title: str
    weekday: int
    hour: int
    source_url: str
    location: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: str = "food"
    is_free: bool = True
    occurrences: int = 4

    def __post_init__(self) -> None:
        _check_slot(self.title, self.weekday, self.hour)
        if self.occurrences < 1:
            raise ValueError(f"{self.title}: occurrences must be at least 1")


@dataclass(frozen=True)
class InstitutionTemplate:
    """A weekly gathering hosted by a named institution (church, club...)."""

    name: str
    event: str
    weekday: int
    hour: int
    source_url: str
    location: Optional[str] = None
    image_url: Optional[str] = None
    category: str = "community"
    is_free: bool = True
    occurrences: int = 8

    def __post_init__(self) -> None:
        _check_slot(self.name, self.weekday, self.hour)
        if self.occurrences < 1:
            raise ValueError(f"{self.name}: occurrences must be at least 1")

    @property
    def title(self) -> str:
        return f"{self.name}: {self.event}"

    @property
    def description(self) -> str:
        return f"Join us for {self.event} at {self.name}."


@dataclass(frozen=True)
class CommunityTemplate:
    """A one-off listing scheduled a fixed number of days from today."""

    title: str
    offset_days: int
    hour: int
    source_url: str
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    category: str = "community"
    is_free: bool = False

    def __post_init__(self) -> None:
        _check_slot(self.title, None, self.hour)
        if self.offset_days < 0:
            raise ValueError(f"{self.title}: offset_days must not be negative")


@dataclass(frozen=True)
class SourceCatalog:
    """All templates for one city, grouped by source."""

    markets: list[RecurringTemplate] = field(default_factory=list)
    institutions: list[InstitutionTemplate] = field(default_factory=list)
    community: list[CommunityTemplate] = field(default_factory=list)


def catalog_path() -> Path:
    """Return the catalog location, honouring ``EVENTS_CATALOG``."""
    return Path(os.getenv("EVENTS_CATALOG") or DEFAULT_CATALOG)


def parse_catalog(data: dict[str, Any]) -> SourceCatalog:
    """Build a :class:`SourceCatalog` from decoded JSON.

    Raises ``ValueError`` or ``TypeError`` when a template is malformed.
    """
    return SourceCatalog(
        markets=[RecurringTemplate(**item) for item in data.get("markets", [])],
        institutions=[InstitutionTemplate(**item) for item in data.get("institutions", [])],
        community=[CommunityTemplate(**item) for item in data.get("community", [])],
    )


def load_catalog(path: str | Path | None = None) -> SourceCatalog:
    """Load event templates from a JSON catalog file."""
    data = json.loads(Path(path or catalog_path()).read_text())
    return parse_catalog(data)
