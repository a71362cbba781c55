"""Tool handlers: fetch, fall back to a corrected title once, render text.

Every handler returns a string. Fetch failures are reported inline as
"Error <doing X>: <message>" instead of propagating.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from .client import WikipediaClient
from .formatting import (
    article_url,
    format_article,
    format_links,
    format_related_topics,
    format_search_results,
    format_sections,
    format_summary,
    no_content,
    no_links,
    no_page_found,
    no_search_results,
    no_sections,
    page_does_not_exist,
    strip_category_prefix,
    truncate,
)
from .result import Ok, Result
from .types import Page, PageQuery, PageStatus, RelatedTopic, SectionsQuery, TopicKind, WikipediaError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
SUMMARY_PREVIEW_CHARS = 200

T = TypeVar("T")


def _error(doing: str, error: WikipediaError) -> str:
    return f"Error {doing}: {error.message}"


async def with_title_fallback(
    client: WikipediaClient,
    title: str,
    primary: Callable[[str], Awaitable[Result[T, WikipediaError]]],
    *,
    require_different_title: bool = False,
) -> Result[tuple[str, T], WikipediaError]:
    """Run `primary(title)`, retrying once with the search-resolved title.

    The retry happens only when the first outcome reports `needs_fallback` and
    the resolver finds a title (a different one, if `require_different_title`).
    The retry's outcome is used whatever its shape. Returns the title that
    produced the final outcome alongside it.
    """
    result = await primary(title)
    if result.is_err():
        return result

    outcome = result.value
    if not outcome.needs_fallback:
        return Ok((title, outcome))

    resolved = await client.find_correct_title(title)
    if resolved.is_err():
        return resolved

    correct = resolved.value
    if correct is None or (require_different_title and correct == title):
        return Ok((title, outcome))

    logger.info(f"No page for {title!r}, retrying as {correct!r}")
    retry = await primary(correct)
    return retry.map(lambda retried: (correct, retried))


def _lookup_problem(title: str, lookup: PageQuery) -> str | None:
    if lookup.status is PageStatus.ABSENT:
        return no_page_found(title)
    if lookup.status is PageStatus.MISSING:
        return page_does_not_exist(title)
    return None


async def search_wikipedia(client: WikipediaClient, query: str, limit: int = DEFAULT_LIMIT) -> str:
    result = await client.search(query, limit)
    if result.is_err():
        return _error("searching Wikipedia", result.error)

    response = result.value
    if not response.hits:
        return no_search_results(query)
    return format_search_results(response, client.config.language)


async def get_summary(client: WikipediaClient, title: str) -> str:
    result = await with_title_fallback(client, title, client.get_page_summary)
    if result.is_err():
        return _error("getting Wikipedia page summary", result.error)

    title, lookup = result.value
    problem = _lookup_problem(title, lookup)
    if problem:
        return problem
    return format_summary(lookup.page, client.config.language)


async def get_article(client: WikipediaClient, title: str) -> str:
    result = await with_title_fallback(client, title, client.get_page_content)
    if result.is_err():
        return _error("getting Wikipedia page content", result.error)

    title, lookup = result.value
    problem = _lookup_problem(title, lookup)
    if problem:
        return problem
    if not lookup.page.extract:
        return no_content(title)
    return format_article(lookup.page)


async def get_sections(client: WikipediaClient, title: str) -> str:
    # The parse API reports unknown pages as an error body, so the fallback
    # also fires on that shape.
    async def lookup(page_title: str) -> Result[SectionsQuery, WikipediaError]:
        result = await client.get_page_sections(page_title)
        if result.is_ok() and result.value.error_info:
            logger.debug(f"Sections lookup for {page_title!r} failed: {result.value.error_info}")
        return result

    result = await with_title_fallback(client, title, lookup, require_different_title=True)
    if result.is_err():
        return _error("getting Wikipedia page sections", result.error)

    title, outline = result.value
    if outline.needs_fallback or not outline.sections:
        return no_sections(title)
    return format_sections(title, outline.sections)


async def get_links(client: WikipediaClient, title: str) -> str:
    result = await with_title_fallback(client, title, client.get_page_links)
    if result.is_err():
        return _error("getting Wikipedia page links", result.error)

    title, lookup = result.value
    problem = _lookup_problem(title, lookup)
    if problem:
        return problem
    if not lookup.page.links:
        return no_links(title)
    return format_links(title, lookup.page.links, client.config.language)


async def collect_related_topics(
    client: WikipediaClient, page: Page, limit: int = DEFAULT_LIMIT
) -> list[RelatedTopic]:
    """Linked articles with a short summary first, then categories to fill up to `limit`.

    A link whose summary cannot be fetched, is missing, or has no extract is
    skipped and does not count toward the limit.
    """
    related: list[RelatedTopic] = []

    for link in page.links[:limit]:
        summary = await client.get_page_summary(link)
        if summary.is_err():
            logger.debug(f"Skipping related link {link!r}: {summary.error.message}")
            continue

        lookup = summary.value
        if lookup.status is PageStatus.FOUND and lookup.page.extract:
            related.append(
                RelatedTopic(
                    title=link,
                    kind=TopicKind.LINK,
                    summary=truncate(lookup.page.extract, SUMMARY_PREVIEW_CHARS),
                    url=article_url(client.config.language, link),
                )
            )

        if len(related) >= limit:
            break

    remaining = limit - len(related)
    if remaining > 0:
        for category in page.categories[:remaining]:
            related.append(RelatedTopic(title=strip_category_prefix(category), kind=TopicKind.CATEGORY))

    return related


async def get_related_topics(client: WikipediaClient, title: str, limit: int = DEFAULT_LIMIT) -> str:
    result = await with_title_fallback(client, title, client.get_page_links_and_categories)
    if result.is_err():
        return _error("getting related topics", result.error)

    title, lookup = result.value
    problem = _lookup_problem(title, lookup)
    if problem:
        return problem

    topics = await collect_related_topics(client, lookup.page, limit)
    return format_related_topics(title, topics)
