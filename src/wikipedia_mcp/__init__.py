"""
wikipedia-mcp - Wikipedia search and article lookup as MCP tools

Usage:
    from wikipedia_mcp import WikipediaClient, WikipediaConfig

    client = WikipediaClient(WikipediaConfig.from_env())

    result = await client.get_page_summary("Python (programming language)")
    if result.is_ok() and result.value.page:
        print(result.value.page.extract)
    else:
        print(f"Error: {result.error.message}")

    # Rendered text, as returned to MCP clients
    from wikipedia_mcp import tools
    print(await tools.get_sections(client, "Python (programming language)"))

MCP Server:
    from wikipedia_mcp import run_stdio_server
    await run_stdio_server(config=WikipediaConfig.from_env())
"""

from .client import WikipediaClient
from .config import WikipediaConfig
from .ratelimit import RateLimiter
from .types import (
    ErrorKind,
    Page,
    PageQuery,
    PageStatus,
    RelatedTopic,
    SearchHit,
    SearchResponse,
    Section,
    SectionsQuery,
    SectionsStatus,
    TopicKind,
    WikipediaError,
)
from .result import Result, Ok, Err
from .server import build_server, run_stdio_server

__all__ = [
    # Client
    "WikipediaClient",
    "WikipediaConfig",
    "RateLimiter",
    "build_server",
    "run_stdio_server",
    # Types
    "SearchHit",
    "SearchResponse",
    "Page",
    "PageQuery",
    "PageStatus",
    "Section",
    "SectionsQuery",
    "SectionsStatus",
    "RelatedTopic",
    "TopicKind",
    "WikipediaError",
    "ErrorKind",
    # Result
    "Result",
    "Ok",
    "Err",
]

__version__ = "1.0.0"
