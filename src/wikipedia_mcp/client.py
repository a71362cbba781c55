"""Wikipedia Action API client implementation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import WikipediaConfig
from .ratelimit import RateLimiter
from .result import Err, Ok, Result
from .types import (
    Coordinates,
    ErrorKind,
    Page,
    PageQuery,
    PageStatus,
    SearchHit,
    SearchResponse,
    Section,
    SectionsQuery,
    SectionsStatus,
    Thumbnail,
    WikipediaError,
)

logger = logging.getLogger(__name__)

THUMBNAIL_SIZE = 300
MAX_LINKS = 500
MAX_CATEGORIES = 500


# === Response parsing ===

def _to_int(value: Any, default: int | None = None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _error_info(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("info") or error.get("code") or "unknown error")
    return str(error)


def _parse_search_hit(data: dict[str, Any]) -> SearchHit:
    return SearchHit(
        title=data.get("title", ""),
        pageid=data.get("pageid"),
        snippet=data.get("snippet", ""),
        wordcount=data.get("wordcount"),
        size=data.get("size"),
        timestamp=data.get("timestamp"),
    )


def parse_search(query: str, data: dict[str, Any]) -> SearchResponse:
    """Decode a `list=search` response."""
    hits = (data.get("query") or {}).get("search") or []
    return SearchResponse(query=query, hits=[_parse_search_hit(h) for h in hits])


def _parse_page(data: dict[str, Any]) -> Page:
    thumbnail = None
    thumb = data.get("thumbnail")
    if isinstance(thumb, dict) and thumb.get("source"):
        thumbnail = Thumbnail(source=thumb["source"])

    coordinates = [
        Coordinates(lat=c["lat"], lon=c["lon"])
        for c in data.get("coordinates", [])
        if "lat" in c and "lon" in c
    ]

    return Page(
        title=data.get("title", ""),
        pageid=data.get("pageid"),
        # "invalid" marks titles the wiki rejects outright
        missing="missing" in data or "invalid" in data,
        extract=data.get("extract"),
        thumbnail=thumbnail,
        coordinates=coordinates,
        links=[link.get("title", "") for link in data.get("links", [])],
        categories=[cat.get("title", "") for cat in data.get("categories", [])],
    )


def parse_page_query(data: dict[str, Any]) -> PageQuery:
    """Decode the first entry of `query.pages` into a tagged lookup result."""
    pages = (data.get("query") or {}).get("pages")
    if not pages:
        return PageQuery(status=PageStatus.ABSENT)

    # Keyed by page id (formatversion=1) or a plain list (formatversion=2)
    entries = list(pages.values()) if isinstance(pages, dict) else list(pages)
    page = _parse_page(entries[0])
    status = PageStatus.MISSING if page.missing else PageStatus.FOUND
    return PageQuery(status=status, page=page)


def parse_sections(data: dict[str, Any]) -> SectionsQuery:
    """Decode an `action=parse&prop=sections` response, error bodies included."""
    if data.get("error"):
        return SectionsQuery(status=SectionsStatus.ERROR, error_info=_error_info(data["error"]))

    parse = data.get("parse")
    if not isinstance(parse, dict):
        return SectionsQuery(status=SectionsStatus.ABSENT)

    sections = [
        Section(
            level=_to_int(s.get("level"), 1),
            number=str(s.get("number", "")),
            line=s.get("line", ""),
        )
        for s in parse.get("sections") or []
    ]
    return SectionsQuery(status=SectionsStatus.FOUND, sections=sections)


# === Client Class ===

@dataclass
class WikipediaClient:
    """Paced client for the Wikipedia Action API.

    Every request goes through one shared RateLimiter. Failures come back as
    `Err(WikipediaError)`; nothing is raised for network or API problems.

    Usage:
        client = WikipediaClient(WikipediaConfig.from_env())

        result = await client.search("python programming", limit=5)
        if result.is_ok():
            for hit in result.value.hits:
                print(hit.title)
    """

    config: WikipediaConfig = field(default_factory=WikipediaConfig)
    limiter: RateLimiter | None = None
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.limiter is None:
            self.limiter = RateLimiter(delay_ms=self.config.request_delay_ms)

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
        }

    async def fetch_json(
        self,
        params: dict[str, str],
        *,
        allow_api_error: bool = False,
    ) -> Result[dict[str, Any], WikipediaError]:
        """Make one paced GET request and decode the JSON body.

        Args:
            params: Action API query parameters; `format=json` is added.
            allow_api_error: Return bodies carrying an `error` descriptor as-is
                instead of turning them into an API error.
        """
        await self.limiter.wait()
        try:
            return await self._get(params, allow_api_error)
        finally:
            self.limiter.mark()

    async def _get(
        self, params: dict[str, str], allow_api_error: bool
    ) -> Result[dict[str, Any], WikipediaError]:
        query = {**params, "format": "json"}
        timeout = self.config.timeout_seconds
        logger.debug(f"GET {self.config.api_url} {params}")

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await asyncio.wait_for(
                    client.get(self.config.api_url, params=query, headers=self._headers()),
                    timeout=timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            return Err(WikipediaError(ErrorKind.NETWORK, "Request timed out"))
        except httpx.RequestError as e:
            return Err(WikipediaError(ErrorKind.NETWORK, f"Request failed: {e}"))

        if not response.is_success:
            return Err(
                WikipediaError(
                    ErrorKind.REMOTE,
                    f"Wikipedia API error: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                )
            )

        try:
            data = response.json()
        except ValueError:
            return Err(WikipediaError(ErrorKind.NETWORK, "Invalid JSON response"))

        if not isinstance(data, dict):
            return Err(WikipediaError(ErrorKind.NETWORK, "Unexpected response shape"))

        if data.get("error") and not allow_api_error:
            return Err(
                WikipediaError(ErrorKind.API, f"Wikipedia API error: {_error_info(data['error'])}")
            )

        return Ok(data)

    # === Public Methods ===

    async def search(self, query: str, limit: int = 10) -> Result[SearchResponse, WikipediaError]:
        """Full-text search, one page of results."""
        result = await self.fetch_json(
            {
                "action": "query",
                "list": "search",
                "srsearch": query,
                "srlimit": str(limit),
            }
        )
        return result.map(lambda data: parse_search(query, data))

    async def find_correct_title(self, title: str) -> Result[str | None, WikipediaError]:
        """Resolve a possibly mis-cased or misspelled title to the top search hit."""
        result = await self.search(title, limit=1)
        if result.is_err():
            return result
        hits = result.value.hits
        return Ok(hits[0].title if hits else None)

    async def get_page_summary(self, title: str) -> Result[PageQuery, WikipediaError]:
        """Intro extract, thumbnail and coordinates."""
        result = await self.fetch_json(
            {
                "action": "query",
                "prop": "extracts|pageimages|coordinates",
                "titles": title,
                "exintro": "true",
                "explaintext": "true",
                "piprop": "thumbnail",
                "pithumbsize": str(THUMBNAIL_SIZE),
                "redirects": "true",
            }
        )
        return result.map(parse_page_query)

    async def get_page_content(self, title: str) -> Result[PageQuery, WikipediaError]:
        """Full plain-text extract."""
        result = await self.fetch_json(
            {
                "action": "query",
                "prop": "extracts",
                "titles": title,
                "explaintext": "true",
                "redirects": "true",
            }
        )
        return result.map(parse_page_query)

    async def get_page_sections(self, title: str) -> Result[SectionsQuery, WikipediaError]:
        """Section outline. API error bodies come back as a SectionsQuery, not an Err."""
        result = await self.fetch_json(
            {
                "action": "parse",
                "page": title,
                "prop": "sections",
            },
            allow_api_error=True,
        )
        return result.map(parse_sections)

    async def get_page_links(self, title: str) -> Result[PageQuery, WikipediaError]:
        result = await self.fetch_json(
            {
                "action": "query",
                "prop": "links",
                "titles": title,
                "pllimit": str(MAX_LINKS),
                "redirects": "true",
            }
        )
        return result.map(parse_page_query)

    async def get_page_links_and_categories(self, title: str) -> Result[PageQuery, WikipediaError]:
        result = await self.fetch_json(
            {
                "action": "query",
                "prop": "links|categories",
                "titles": title,
                "pllimit": str(MAX_LINKS),
                "cllimit": str(MAX_CATEGORIES),
                "redirects": "true",
            }
        )
        return result.map(parse_page_query)
