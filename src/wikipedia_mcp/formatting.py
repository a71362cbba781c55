"""Markdown-style text rendering for tool responses."""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone
from urllib.parse import quote

from .types import Page, RelatedTopic, SearchResponse, Section, TopicKind

INDENT_UNIT = "  "
CATEGORY_PREFIX = "Category:"

_TAG_RE = re.compile(r"<[^>]*>")

# Characters encodeURIComponent leaves alone besides the unreserved set
_URL_SAFE = "!~*'()"


def article_url(language: str, title: str) -> str:
    """Public article URL: spaces become underscores, the rest is percent-encoded."""
    return f"https://{language}.wikipedia.org/wiki/{quote(title.replace(' ', '_'), safe=_URL_SAFE)}"


def strip_html(text: str) -> str:
    """Drop tags (search snippets wrap matches in <span>) and unescape entities."""
    return html.unescape(_TAG_RE.sub("", text))


def format_date(timestamp: str | int | float | None) -> str:
    """Render an ISO-8601 or epoch-seconds timestamp as a locale date."""
    if timestamp is None or timestamp == "":
        return "Unknown"
    try:
        if isinstance(timestamp, (int, float)):
            dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
        else:
            dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (ValueError, OverflowError, OSError):
        return str(timestamp)
    return dt.strftime("%x")


def indent_section(section: Section) -> str:
    indent = INDENT_UNIT * max(section.level - 1, 0)
    return f"{indent}{section.number} {section.line}"


def strip_category_prefix(title: str) -> str:
    return title.replace(CATEGORY_PREFIX, "", 1)


def truncate(text: str, limit: int = 200) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


# === Empty outcomes ===

def no_search_results(query: str) -> str:
    return f'No Wikipedia articles found for "{query}". Try a different search term or check the spelling.'


def no_page_found(title: str) -> str:
    return f'No page found for "{title}".'


def page_does_not_exist(title: str) -> str:
    return f'Page "{title}" does not exist.'


def no_content(title: str) -> str:
    return f'No content available for "{title}".'


def no_sections(title: str) -> str:
    return f'No sections found for "{title}". The page may not exist or may not have sections.'


def no_links(title: str) -> str:
    return f'No links found on "{title}".'


# === Reports ===

def format_search_results(response: SearchResponse, language: str) -> str:
    text = f'# Wikipedia Search Results for "{response.query}"\n\n'
    text += f"Found {len(response.hits)} results:\n\n"

    for hit in response.hits:
        text += f"## {hit.title}\n"
        if hit.snippet:
            text += f"**Snippet:** {strip_html(hit.snippet)}\n"
        text += f"**Page ID:** {hit.pageid}\n"
        text += f"**Word Count:** {hit.wordcount}\n"
        text += f"**Size:** {hit.size} bytes\n"
        text += f"**Last Modified:** {format_date(hit.timestamp)}\n"
        text += f"**URL:** {article_url(language, hit.title)}\n\n"

    return text


def format_summary(page: Page, language: str) -> str:
    text = f"# {page.title}\n\n"

    if page.thumbnail:
        text += f"![{page.title}]({page.thumbnail.source})\n\n"

    text += "## Summary\n"
    if page.extract:
        text += f"{page.extract}\n\n"

    text += f"**Page ID:** {page.pageid}\n"
    text += f"**URL:** {article_url(language, page.title)}\n\n"

    if page.coordinates:
        coord = page.coordinates[0]
        text += f"**Coordinates:** {coord.lat}, {coord.lon}\n"

    return text


def format_article(page: Page) -> str:
    text = f"# {page.title}\n\n"
    text += f"**Page ID:** {page.pageid}\n\n"
    text += f"## Full Article Content\n\n{page.extract}"
    return text


def format_sections(title: str, sections: list[Section]) -> str:
    text = f'# Sections for "{title}"\n\n'
    text += f"Found {len(sections)} sections:\n\n"
    for section in sections:
        text += indent_section(section) + "\n"
    return text


def format_links(title: str, links: list[str], language: str) -> str:
    text = f'# Links from "{title}"\n\n'
    text += f"Found {len(links)} links:\n\n"
    for link in links:
        text += f"- [{link}]({article_url(language, link)})\n"
    return text


def format_related_topics(title: str, topics: list[RelatedTopic]) -> str:
    text = f'# Related Topics for "{title}"\n\n'
    text += f"Found {len(topics)} related topics:\n\n"

    for topic in topics:
        text += f"## {topic.title}\n"
        text += f"**Type:** {topic.kind.value}\n"
        if topic.kind is TopicKind.LINK:
            if topic.summary:
                text += f"**Summary:** {topic.summary}\n"
            if topic.url:
                text += f"**URL:** {topic.url}\n"
        text += "\n"

    return text
