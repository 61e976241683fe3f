"""
Short link generation for download links.

Every download link gets one short link, in the same order. The provider is a
black box reached with one GET per link:

    GET <base_url>?api=<token>&url=<link url>  ->  {"shortenedUrl": "..."}

Fallback policy: if the call fails for any reason (network error, timeout,
non-JSON body, missing ``shortenedUrl``) the short link keeps the original
url. The failure is logged and processing continues; nothing is retried and
nothing is raised to the caller.

Concurrency policy: ``concurrency=1`` (the default) shortens links one at a
time in input order. Larger values run up to that many provider calls at once;
results are still returned in input order.
"""
import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from errors import ShorteningProviderError
from models import DownloadLink, ShortLink

logger = logging.getLogger("filmycosmo.shortlinks")


class LinkShortener:
    def __init__(
        self,
        base_url: str,
        api_token: str,
        *,
        timeout: float = 10.0,
        concurrency: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.api_token = api_token
        self.timeout = timeout
        self.concurrency = max(1, concurrency)
        self._transport = transport

    async def request_short_url(self, client: httpx.AsyncClient, long_url: str) -> str:
        """Single provider call. Raises ShorteningProviderError on any failure."""
        try:
            response = await client.get(
                self.base_url,
                params={"api": self.api_token, "url": long_url},
            )
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ShorteningProviderError(f"request failed: {exc!r}") from exc
        except ValueError as exc:
            raise ShorteningProviderError("response is not JSON") from exc

        short_url = data.get("shortenedUrl") if isinstance(data, dict) else None
        if not isinstance(short_url, str) or not short_url.strip():
            raise ShorteningProviderError(
                f"response has no shortenedUrl (HTTP {response.status_code})"
            )
        return short_url.strip()

    async def shorten_link(self, client: httpx.AsyncClient, link: DownloadLink) -> ShortLink:
        original_url = link.url.strip()
        try:
            short_url = await self.request_short_url(client, original_url)
        except ShorteningProviderError as exc:
            logger.warning(
                "short link generation failed, keeping original url=%s reason=%s",
                original_url,
                exc.message,
            )
            short_url = original_url

        return ShortLink(
            label=link.label,
            url=short_url,
            original_url=original_url,
            size=link.size,
            click_count=0,
        )

    async def shorten(self, links: Sequence[DownloadLink]) -> List[ShortLink]:
        pending = [link for link in links if link.url and link.url.strip()]
        if not pending:
            return []

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            if self.concurrency == 1:
                results = []
                for link in pending:
                    results.append(await self.shorten_link(client, link))
                return results

            semaphore = asyncio.Semaphore(self.concurrency)

            async def bounded(link: DownloadLink) -> ShortLink:
                async with semaphore:
                    return await self.shorten_link(client, link)

            # gather keeps input order
            return list(await asyncio.gather(*(bounded(link) for link in pending)))
