"""Exception hierarchy for animeweek.

Validation problems are caught before any network call; upstream problems
come out of the Jikan client once its retries are spent.
"""

from __future__ import annotations

from typing import Optional


class AnimeWeekError(Exception):
    """Base exception for all animeweek errors."""


class ValidationError(AnimeWeekError):
    """Raised when a caller passes a bad day, season, year, query or id."""


class UpstreamError(AnimeWeekError):
    """Raised when the upstream API answers non-2xx or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamExhaustedError(UpstreamError):
    """Raised when every attempt was spent without a usable response."""
