"""Fakes and payload builders shared by the unit tests."""
from typing import Any, Callable

import httpx


class FakeClock:
    """Millisecond clock whose sleep advances time instead of waiting."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds * 1000)
        self.now += seconds * 1000


class FakeWiki:
    """MockTransport handler answering Action API requests from a responder.

    The responder receives the query parameters and returns either a JSON
    payload or a ready httpx.Response. Each request advances the clock by
    `latency_ms`.
    """

    def __init__(self, respond: Callable[[dict[str, str]], Any], clock: FakeClock, latency_ms: float = 50):
        self.respond = respond
        self.clock = clock
        self.latency_ms = latency_ms
        self.requests: list[httpx.Request] = []
        self.started_at: list[float] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.started_at.append(self.clock.now)
        self.clock.now += self.latency_ms
        reply = self.respond(dict(request.url.params))
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    @property
    def params(self) -> list[dict[str, str]]:
        return [dict(r.url.params) for r in self.requests]


def page_response(title: str, pageid: int = 1, **fields: Any) -> dict:
    return {"query": {"pages": {str(pageid): {"pageid": pageid, "ns": 0, "title": title, **fields}}}}


def missing_response(title: str) -> dict:
    return {"query": {"pages": {"-1": {"ns": 0, "title": title, "missing": ""}}}}


def search_response(*titles: str) -> dict:
    return {
        "query": {
            "searchinfo": {"totalhits": len(titles)},
            "search": [
                {
                    "ns": 0,
                    "title": title,
                    "pageid": 100 + i,
                    "size": 5000,
                    "wordcount": 800,
                    "snippet": f"<span class=\"searchmatch\">{title}</span> snippet",
                    "timestamp": "2024-03-14T12:00:00Z",
                }
                for i, title in enumerate(titles)
            ],
        }
    }
