"""Unit tests for text rendering."""
from datetime import datetime
from urllib.parse import unquote

from wikipedia_mcp.formatting import (
    article_url,
    format_date,
    format_related_topics,
    format_sections,
    format_summary,
    indent_section,
    strip_category_prefix,
    strip_html,
    truncate,
)
from wikipedia_mcp.types import Coordinates, Page, RelatedTopic, Section, Thumbnail, TopicKind


class TestArticleUrl:
    def test_space_becomes_underscore_and_round_trips(self):
        url = article_url("en", "Anwar Ibrahim")
        assert url == "https://en.wikipedia.org/wiki/Anwar_Ibrahim"
        assert unquote(url.rsplit("/", 1)[1]) == "Anwar_Ibrahim"

    def test_reserved_characters_are_encoded(self):
        url = article_url("en", "AC/DC & Friends?")
        segment = url.rsplit("/wiki/", 1)[1]
        assert segment == "AC%2FDC_%26_Friends%3F"
        assert unquote(segment) == "AC/DC_&_Friends?"

    def test_parentheses_kept(self):
        assert article_url("en", "Python (programming language)").endswith(
            "/wiki/Python_(programming_language)"
        )

    def test_non_ascii_title(self):
        url = article_url("de", "Zürich")
        assert url == "https://de.wikipedia.org/wiki/Z%C3%BCrich"


class TestSectionIndentation:
    def test_levels_map_to_indent_units(self):
        sections = [
            Section(level=1, number="1", line="Intro"),
            Section(level=2, number="1.1", line="Early"),
            Section(level=2, number="1.2", line="Late"),
            Section(level=3, number="1.2.1", line="Detail"),
        ]
        lines = [indent_section(s) for s in sections]
        assert lines == ["1 Intro", "  1.1 Early", "  1.2 Late", "    1.2.1 Detail"]

    def test_format_sections_preserves_order(self):
        sections = [Section(2, "1", "History"), Section(2, "2", "Design"), Section(3, "2.1", "Syntax")]
        text = format_sections("Python", sections)
        assert text.startswith('# Sections for "Python"\n\nFound 3 sections:\n\n')
        assert text.endswith("  1 History\n  2 Design\n    2.1 Syntax\n")


class TestHelpers:
    def test_strip_html_removes_tags_and_entities(self):
        snippet = '<span class="searchmatch">Python</span> is a &quot;language&quot;'
        assert strip_html(snippet) == 'Python is a "language"'

    def test_truncate(self):
        assert truncate("short") == "short"
        assert truncate("x" * 200) == "x" * 200
        assert truncate("x" * 201) == "x" * 200 + "..."

    def test_strip_category_prefix(self):
        assert strip_category_prefix("Category:Living people") == "Living people"
        assert strip_category_prefix("Living people") == "Living people"

    def test_format_date_iso(self):
        assert format_date("2024-03-14T12:00:00Z") == datetime(2024, 3, 14).strftime("%x")

    def test_format_date_epoch(self):
        assert format_date(1710417600) == datetime(2024, 3, 14).strftime("%x")

    def test_format_date_unparseable_passthrough(self):
        assert format_date("yesterday") == "yesterday"
        assert format_date(None) == "Unknown"


class TestReports:
    def test_summary_with_thumbnail_and_coordinates(self):
        page = Page(
            title="Eiffel Tower",
            pageid=9232,
            extract="Wrought-iron lattice tower.",
            thumbnail=Thumbnail(source="https://upload.example/eiffel.jpg"),
            coordinates=[Coordinates(lat=48.8583, lon=2.2944)],
        )
        text = format_summary(page, "en")
        assert text.startswith("# Eiffel Tower\n\n![Eiffel Tower](https://upload.example/eiffel.jpg)\n\n")
        assert "## Summary\nWrought-iron lattice tower.\n\n" in text
        assert "**Page ID:** 9232\n" in text
        assert "**URL:** https://en.wikipedia.org/wiki/Eiffel_Tower\n" in text
        assert text.endswith("**Coordinates:** 48.8583, 2.2944\n")

    def test_summary_without_optional_parts(self):
        text = format_summary(Page(title="Plain", pageid=1, extract="Text."), "en")
        assert "![" not in text
        assert "Coordinates" not in text

    def test_related_category_omits_summary_and_url(self):
        topics = [
            RelatedTopic("Linked", TopicKind.LINK, summary="About it.", url="https://en.wikipedia.org/wiki/Linked"),
            RelatedTopic("Living people", TopicKind.CATEGORY),
        ]
        text = format_related_topics("X", topics)
        assert "## Linked\n**Type:** link\n**Summary:** About it.\n**URL:** https://en.wikipedia.org/wiki/Linked\n\n" in text
        assert text.endswith("## Living people\n**Type:** category\n\n")
