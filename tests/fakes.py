from __future__ import annotations

from collections.abc import Callable

import httpx

from shortlinks import LinkShortener

SHORTLINK_BASE_URL = "https://short.test/api"
SHORTLINK_TOKEN = "test-token"


class FakeShortlinkProvider:
    """httpx.MockTransport handler that mimics the shortening provider."""

    def __init__(self, fail_urls: tuple[str, ...] = (), bad_body_urls: tuple[str, ...] = ()):
        self.fail_urls = fail_urls
        self.bad_body_urls = bad_body_urls
        self.calls: list[dict[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.calls.append(params)
        url = params.get("url", "")
        if url in self.fail_urls:
            raise httpx.ConnectError("provider unreachable", request=request)
        if url in self.bad_body_urls:
            return httpx.Response(200, text="<html>rate limited</html>")
        slug = url.rstrip("/").rsplit("/", 1)[-1]
        return httpx.Response(200, json={"shortenedUrl": f"https://s/{slug}"})

    @property
    def requested_urls(self) -> list[str]:
        return [call["url"] for call in self.calls]


def build_shortener(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    concurrency: int = 1,
) -> LinkShortener:
    return LinkShortener(
        SHORTLINK_BASE_URL,
        SHORTLINK_TOKEN,
        timeout=5.0,
        concurrency=concurrency,
        transport=httpx.MockTransport(handler),
    )
