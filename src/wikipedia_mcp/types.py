"""Type definitions for Wikipedia API responses and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# === Enums ===

class ErrorKind(str, Enum):
    """Failure categories raised by the fetcher."""

    NETWORK = "network"  # Timeout, connection failure, malformed body
    REMOTE = "remote"  # Non-2xx HTTP status
    API = "api"  # Decoded body carries an error descriptor


class PageStatus(str, Enum):
    """Shape of a `action=query` page lookup."""

    FOUND = "found"
    MISSING = "missing"
    ABSENT = "absent"  # No query.pages object at all


class SectionsStatus(str, Enum):
    """Shape of a `action=parse&prop=sections` lookup."""

    FOUND = "found"
    ERROR = "error"
    ABSENT = "absent"


class TopicKind(str, Enum):
    LINK = "link"
    CATEGORY = "category"


# === Search ===

@dataclass(frozen=True, slots=True)
class SearchHit:
    """Single full-text search hit."""

    title: str
    pageid: int | None = None
    snippet: str = ""
    wordcount: int | None = None
    size: int | None = None
    timestamp: str | None = None


@dataclass(frozen=True, slots=True)
class SearchResponse:
    query: str
    hits: list[SearchHit]


# === Pages ===

@dataclass(frozen=True, slots=True)
class Thumbnail:
    source: str


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class Page:
    """A page entry from `query.pages`, with whichever props were requested."""

    title: str
    pageid: int | None = None
    missing: bool = False
    extract: str | None = None
    thumbnail: Thumbnail | None = None
    coordinates: list[Coordinates] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PageQuery:
    """Decoded page lookup: found, missing, or no pages returned."""

    status: PageStatus
    page: Page | None = None

    @property
    def needs_fallback(self) -> bool:
        return self.status is not PageStatus.FOUND


# === Sections ===

@dataclass(frozen=True, slots=True)
class Section:
    level: int
    number: str
    line: str


@dataclass(frozen=True, slots=True)
class SectionsQuery:
    """Decoded outline lookup. Error bodies are kept as a status, not raised."""

    status: SectionsStatus
    sections: list[Section] = field(default_factory=list)
    error_info: str | None = None

    @property
    def needs_fallback(self) -> bool:
        return self.status is not SectionsStatus.FOUND


# === Related topics ===

@dataclass(frozen=True, slots=True)
class RelatedTopic:
    title: str
    kind: TopicKind
    summary: str | None = None
    url: str | None = None


# === Error Types ===

@dataclass(frozen=True, slots=True)
class WikipediaError:
    """Fetch failure details."""

    kind: ErrorKind
    message: str
    status_code: int | None = None
