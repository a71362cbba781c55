"""Pytest fixtures for all test modules."""
import httpx
import pytest

from tests.helpers import FakeClock, FakeWiki
from wikipedia_mcp.client import WikipediaClient
from wikipedia_mcp.config import WikipediaConfig
from wikipedia_mcp.ratelimit import RateLimiter


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_client(clock):
    """
    Build a WikipediaClient wired to a FakeWiki and the fake clock.

    Returns:
        callable: make(respond, **config_overrides) -> (client, wiki)
    """

    def _make(respond, latency_ms: float = 50, **overrides):
        wiki = FakeWiki(respond, clock, latency_ms=latency_ms)
        config = WikipediaConfig(**overrides)
        limiter = RateLimiter(delay_ms=config.request_delay_ms, clock=clock, sleep=clock.sleep)
        client = WikipediaClient(config=config, limiter=limiter, transport=httpx.MockTransport(wiki))
        return client, wiki

    return _make
