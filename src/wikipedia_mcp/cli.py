"""Wikipedia MCP command line: run the stdio server or a single tool."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Awaitable, Callable

import click
from pydantic import ValidationError

from . import tools
from .client import WikipediaClient
from .config import SERVER_VERSION, WikipediaConfig
from .server import run_stdio_server

logger = logging.getLogger("wikipedia_mcp")


def _setup_logging(verbose: bool) -> None:
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config() -> WikipediaConfig:
    try:
        return WikipediaConfig.from_env()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}")


def _run_tool(call: Callable[[WikipediaClient], Awaitable[str]]) -> None:
    client = WikipediaClient(config=_load_config())
    click.echo(asyncio.run(call(client)))


@click.group(invoke_without_command=True)
@click.version_option(version=SERVER_VERSION, prog_name="wikipedia-mcp")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Wikipedia MCP server and command line lookups.

    Without a command, serves the MCP tools over stdio. Configure with
    WIKIPEDIA_USER_AGENT, WIKIPEDIA_LANGUAGE, WIKIPEDIA_REQUEST_DELAY (ms)
    and WIKIPEDIA_TIMEOUT (ms).
    """
    _setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
def serve() -> None:
    """Run the MCP server on stdio."""
    config = _load_config()
    click.echo("Wikipedia MCP Server running on stdio", err=True)
    try:
        asyncio.run(run_stdio_server(config=config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception("Server failed")
        click.echo(f"Failed to start server: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("query")
@click.option("-l", "--limit", type=int, default=tools.DEFAULT_LIMIT, help="Maximum number of results.")
def search(query: str, limit: int) -> None:
    """Search Wikipedia articles."""
    _run_tool(lambda client: tools.search_wikipedia(client, query, limit))


@cli.command()
@click.argument("title")
def summary(title: str) -> None:
    """Show the summary of a page."""
    _run_tool(lambda client: tools.get_summary(client, title))


@cli.command()
@click.argument("title")
def article(title: str) -> None:
    """Show the full plain-text content of a page."""
    _run_tool(lambda client: tools.get_article(client, title))


@cli.command()
@click.argument("title")
def sections(title: str) -> None:
    """Show the section outline of a page."""
    _run_tool(lambda client: tools.get_sections(client, title))


@cli.command()
@click.argument("title")
def links(title: str) -> None:
    """List links from a page to other articles."""
    _run_tool(lambda client: tools.get_links(client, title))


@cli.command()
@click.argument("title")
@click.option("-l", "--limit", type=int, default=tools.DEFAULT_LIMIT, help="Maximum number of topics.")
def related(title: str, limit: int) -> None:
    """Show related articles and categories for a page."""
    _run_tool(lambda client: tools.get_related_topics(client, title, limit))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
