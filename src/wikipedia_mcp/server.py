import logging
from typing import Any, Awaitable, Callable

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from . import tools
from .client import WikipediaClient
from .config import SERVER_NAME, SERVER_VERSION, WikipediaConfig

logger = logging.getLogger(__name__)

_TITLE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "The title of the Wikipedia page"},
    },
    "required": ["title"],
}

TOOLS = [
    types.Tool(
        name="search_wikipedia",
        description="Search Wikipedia articles and return a list of matching pages",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "The search query"},
                "limit": {
                    "type": "number",
                    "default": tools.DEFAULT_LIMIT,
                    "description": "Maximum number of results (default: 10)",
                },
            },
            "required": ["query"],
        },
    ),
    types.Tool(
        name="get_summary",
        description="Get a summary of a specific Wikipedia page",
        inputSchema=_TITLE_SCHEMA,
    ),
    types.Tool(
        name="get_article",
        description="Get the full article content of a specific Wikipedia page",
        inputSchema=_TITLE_SCHEMA,
    ),
    types.Tool(
        name="get_sections",
        description="Get the section outline/table of contents for a Wikipedia page",
        inputSchema=_TITLE_SCHEMA,
    ),
    types.Tool(
        name="get_links",
        description="Get links from a Wikipedia page to other Wikipedia articles",
        inputSchema=_TITLE_SCHEMA,
    ),
    types.Tool(
        name="get_related_topics",
        description="Get related links and categories from a Wikipedia page",
        inputSchema={
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "The title of the Wikipedia page"},
                "limit": {
                    "type": "number",
                    "default": tools.DEFAULT_LIMIT,
                    "description": "Maximum number of related topics (default: 10)",
                },
            },
            "required": ["title"],
        },
    ),
]


def _text(text: str) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=text)]


async def dispatch(client: WikipediaClient, name: str, arguments: dict[str, Any] | None) -> str:
    """Validate arguments for tool `name` and run its handler."""
    handlers: dict[str, tuple[str, Callable[..., Awaitable[str]]]] = {
        "search_wikipedia": ("query", tools.search_wikipedia),
        "get_summary": ("title", tools.get_summary),
        "get_article": ("title", tools.get_article),
        "get_sections": ("title", tools.get_sections),
        "get_links": ("title", tools.get_links),
        "get_related_topics": ("title", tools.get_related_topics),
    }
    if name not in handlers:
        return f"Error: unknown tool: {name}"
    if not arguments:
        return "Error: no arguments provided"

    required, handler = handlers[name]
    if required not in arguments:
        return f"Error: missing required argument: {required}"
    value = str(arguments[required])

    if name in ("search_wikipedia", "get_related_topics"):
        try:
            limit = int(arguments.get("limit", tools.DEFAULT_LIMIT))
        except (TypeError, ValueError):
            return "Error: invalid numeric argument: limit"
        return await handler(client, value, limit)

    return await handler(client, value)


def build_server(*, config: WikipediaConfig, client: WikipediaClient | None = None) -> Server:
    server = Server(SERVER_NAME)
    if client is None:
        client = WikipediaClient(config=config)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return TOOLS

    @server.call_tool()
    async def handle_tool_call(name: str, arguments: dict | None) -> list[types.TextContent]:
        logger.debug(f"Tool call: {name} {arguments}")
        return _text(await dispatch(client, name, arguments))

    return server


async def run_stdio_server(*, config: WikipediaConfig) -> None:
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        server = build_server(config=config)
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=SERVER_NAME,
                server_version=SERVER_VERSION,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
