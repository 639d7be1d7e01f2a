"""Disk cache for downloaded pages."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from pathlib import Path

import httpx

from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_TTL = 7 * 24 * 3600  # 7 days
DEFAULT_USER_AGENT = "detag/1.0"


class HttpCache:
    """Fetch pages over HTTP, keeping each response on disk for ``ttl`` seconds.

    Args:
        cache_dir: Directory for cached responses.
        ttl: Time-to-live in seconds for cached responses.
        rate_limiter: Limiter consulted before every network request.
        user_agent: Value of the User-Agent header.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        cache_dir: Path,
        ttl: int = DEFAULT_TTL,
        rate_limiter: RateLimiter | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 60,
    ):
        self.cache_dir = cache_dir
        self.ttl = ttl
        self.rate_limiter = rate_limiter or RateLimiter()
        self.user_agent = user_agent
        self.timeout = timeout
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _entry_path(self, url: str) -> Path:
        key = hashlib.sha256(url.encode()).hexdigest()
        return self.cache_dir / f"{key}.json"

    def get_cached(self, url: str) -> str | None:
        """Return the cached body if present and fresh, else None."""
        path = self._entry_path(url)
        if not path.exists():
            return None

        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
            body, timestamp = entry["body"], entry.get("timestamp", 0)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring corrupt cache entry for %s: %s", url, e)
            return None

        if time.time() - timestamp > self.ttl:
            logger.debug("Cache expired for %s", url)
            return None

        logger.debug("Cache hit for %s", url)
        return body

    def put(self, url: str, body: str, status_code: int = 200) -> None:
        """Store a response body."""
        entry = {
            "url": url,
            "timestamp": time.time(),
            "status_code": status_code,
            "body": body,
        }
        self._entry_path(url).write_text(json.dumps(entry), encoding="utf-8")

    def fetch(self, url: str) -> str:
        """Return the body of ``url``, from cache when possible.

        Raises:
            httpx.HTTPStatusError: On non-2xx response.
            httpx.HTTPError: On transport failures.
        """
        cached = self.get_cached(url)
        if cached is not None:
            return cached

        self.rate_limiter.wait()
        logger.info("Fetching %s", url)

        response = httpx.get(
            url,
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        )
        response.raise_for_status()

        body = response.text
        self.put(url, body, response.status_code)
        return body
