"""Jikan v4 client.

Thin ``requests`` wrapper: every call is a GET that is retried a bounded
number of times with a fixed delay when the API rate limits us (HTTP 429)
or the request fails outright.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from animeweek.config import DEFAULT_BASE_URL
from animeweek.errors import UpstreamError, UpstreamExhaustedError

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20
POPULAR_LIMIT = 24


class JikanClient:
    HEADERS = {
        "User-Agent": "animeweek/0.1 (+https://api.jikan.moe)",
        "Accept": "application/json",
    }

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: Optional[requests.Session] = None,
        max_retries: int = 3,
        retry_delay_ms: int = 500,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(self.HEADERS)
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self.timeout = timeout

    def fetch_with_retry(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        max_retries: Optional[int] = None,
        delay_ms: Optional[int] = None,
    ) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Each loop iteration is one attempt, whatever made it fail. A 429 waits
        and moves on; any other failure is logged and retried after the same
        wait unless it was the last attempt, in which case it is raised.
        """
        retries = self.max_retries if max_retries is None else max_retries
        delay_ms = self.retry_delay_ms if delay_ms is None else delay_ms
        delay = delay_ms / 1000

        for attempt in range(1, retries + 1):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)

                if response.status_code == 429:
                    logger.warning("Rate limited on %s, waiting %dms before retry", url, delay_ms)
                    time.sleep(delay)
                    continue

                if not 200 <= response.status_code < 300:
                    raise UpstreamError(
                        f"API returned {response.status_code}: {response.reason}",
                        status_code=response.status_code,
                    )

                return response.json()
            except (requests.RequestException, ValueError, UpstreamError) as exc:
                logger.warning("Attempt %d of %d for %s failed: %s", attempt, retries, url, exc)
                if attempt == retries:
                    logger.error("Giving up on %s after %d attempts", url, retries)
                    if isinstance(exc, UpstreamError):
                        raise
                    raise UpstreamError(f"Request to {url} failed: {exc}") from exc
                time.sleep(delay)

        raise UpstreamExhaustedError(f"Failed after {retries} retries", status_code=429)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.fetch_with_retry(f"{self.base_url}{path}", params=params)

    def season(self, year: int, season: str, **extra: Any) -> Any:
        params: Dict[str, Any] = {"sfw": "true"}
        params.update(extra)
        logger.info("Fetching %s %s from Jikan", season, year)
        return self._get(f"/seasons/{year}/{season}", params=params)

    def season_popular(self, year: int, season: str, limit: int = POPULAR_LIMIT) -> Any:
        return self.season(year, season, order_by="score", sort="desc", limit=limit)

    def anime(self, mal_id: int) -> Any:
        return self._get(f"/anime/{mal_id}")

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> Any:
        logger.info("Searching Jikan for %r", query)
        return self._get("/anime", params={"q": query, "sfw": "true", "limit": limit})

    def top(self, limit: int = POPULAR_LIMIT) -> Any:
        return self._get("/top/anime", params={"sfw": "true", "limit": limit})
