"""Download pages over HTTP.

Responses are cached on disk and requests are rate limited, so re-running
a fetch over the same URLs does not hit the network again until the cache
expires.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterator

import httpx

from .base import BaseSource
from ..settings import FetchSettings
from ..utils.cache import HttpCache
from ..utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def _is_retryable(error: Exception) -> bool:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.TransportError)


class WebSource(BaseSource):
    """Pages at the given URLs. A URL that keeps failing is skipped.

    Transport errors and 5xx responses are retried with exponential backoff;
    other HTTP errors fail the URL straight away.
    """

    read_errors = (httpx.HTTPError, OSError)

    def __init__(
        self,
        urls: list[str],
        cache_dir: Path | None = None,
        settings: FetchSettings | None = None,
        sleep=time.sleep,
    ):
        super().__init__()
        self.urls = list(urls)
        self.settings = settings if settings is not None else FetchSettings()
        self.http_cache = HttpCache(
            cache_dir=(cache_dir or Path("cache")) / "http",
            ttl=self.settings.ttl,
            rate_limiter=RateLimiter(
                requests_per_second=self.settings.requests_per_second,
                burst=self.settings.burst,
            ),
            user_agent=self.settings.user_agent,
            timeout=self.settings.timeout,
        )
        self._sleep = sleep

    def _fetch_with_retry(self, url: str) -> str:
        """Fetch URL with exponential backoff retry."""
        attempts = max(1, self.settings.max_retries)
        last_error = None
        for attempt in range(attempts):
            try:
                return self.http_cache.fetch(url)
            except httpx.HTTPError as e:
                if not _is_retryable(e):
                    raise
                last_error = e
                if attempt < attempts - 1:
                    delay = self.settings.retry_delay * (2 ** attempt)
                    logger.info("Retry %d for %s in %ss: %s", attempt + 1, url, delay, e)
                    self._sleep(delay)
        raise last_error

    def entries(self) -> Iterator[tuple[str, str]]:
        for url in self.urls:
            yield url, url

    def read(self, source: str) -> str:
        return self._fetch_with_retry(source)
