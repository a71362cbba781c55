"""Unit tests for the command line."""
import httpx
from click.testing import CliRunner

from tests.helpers import FakeClock, FakeWiki, search_response
from wikipedia_mcp import cli as cli_module
from wikipedia_mcp.client import WikipediaClient
from wikipedia_mcp.ratelimit import RateLimiter


def _patch_client(monkeypatch, respond):
    clock = FakeClock()
    wiki = FakeWiki(respond, clock)

    def make(config):
        limiter = RateLimiter(delay_ms=config.request_delay_ms, clock=clock, sleep=clock.sleep)
        return WikipediaClient(config=config, limiter=limiter, transport=httpx.MockTransport(wiki))

    monkeypatch.setattr(cli_module, "WikipediaClient", make)
    return wiki


class TestCli:
    def test_search_prints_report(self, monkeypatch):
        wiki = _patch_client(monkeypatch, lambda params: search_response("Python"))

        result = CliRunner().invoke(cli_module.cli, ["search", "python", "--limit", "2"])

        assert result.exit_code == 0
        assert '# Wikipedia Search Results for "python"' in result.output
        assert wiki.params[0]["srlimit"] == "2"

    def test_language_from_env(self, monkeypatch):
        wiki = _patch_client(monkeypatch, lambda params: search_response())

        result = CliRunner().invoke(cli_module.cli, ["search", "x"], env={"WIKIPEDIA_LANGUAGE": "de"})

        assert result.exit_code == 0
        assert "No Wikipedia articles found" in result.output
        assert wiki.requests[0].url.host == "de.wikipedia.org"

    def test_invalid_config_exits_nonzero(self, monkeypatch):
        _patch_client(monkeypatch, lambda params: {})

        result = CliRunner().invoke(cli_module.cli, ["summary", "x"], env={"WIKIPEDIA_TIMEOUT": "0"})

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_non_ascii_user_agent_exits_nonzero(self, monkeypatch):
        wiki = _patch_client(monkeypatch, lambda params: search_response("A"))

        result = CliRunner().invoke(cli_module.cli, ["search", "a"], env={"WIKIPEDIA_USER_AGENT": "Büt/1.0"})

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert wiki.requests == []
