"""Query façade over the Jikan client, the aggregator and the schedule cache.

Schedule and detail lookups let upstream failures propagate. Search and
popular listings are discovery features: an upstream failure there turns
into an empty ``{"data": []}`` result instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from animeweek.client import JikanClient
from animeweek.errors import UpstreamError, ValidationError
from animeweek.models import (
    DAYS_OF_WEEK,
    MAX_YEAR,
    MIN_YEAR,
    SEASONS,
    AnimeRecord,
    SeasonDay,
    SeasonRef,
    SeasonSchedule,
    WeeklySchedule,
)
from animeweek.repository import ScheduleCache
from animeweek.schedule import aggregate_response, is_empty

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

INVALID_DAY = f"Invalid day. Must be one of: {', '.join(DAYS_OF_WEEK)}"
INVALID_YEAR = f"Invalid year. Must be between {MIN_YEAR} and {MAX_YEAR}"
INVALID_SEASON = f"Invalid season. Must be one of: {', '.join(SEASONS)}"
INVALID_QUERY = f"Search query must be at least {MIN_QUERY_LENGTH} characters long"
INVALID_ANIME_ID = "Invalid anime ID"


def season_for(today: date) -> SeasonRef:
    # Jan-Mar winter, Apr-Jun spring, Jul-Sep summer, Oct-Dec fall
    return SeasonRef(season=SEASONS[(today.month - 1) // 3], year=today.year)


def validate_day(day: str) -> str:
    value = day.lower() if isinstance(day, str) else ""
    if value not in DAYS_OF_WEEK:
        raise ValidationError(INVALID_DAY)
    return value


def validate_season(season: str) -> str:
    value = season.lower() if isinstance(season, str) else ""
    if value not in SEASONS:
        raise ValidationError(INVALID_SEASON)
    return value


def validate_year(year: Union[int, str]) -> int:
    if isinstance(year, bool):
        raise ValidationError(INVALID_YEAR)
    if isinstance(year, int):
        value = year
    else:
        text = year.strip() if isinstance(year, str) else ""
        if not (text.isascii() and text.isdigit()):
            raise ValidationError(INVALID_YEAR)
        value = int(text)
    if not MIN_YEAR <= value <= MAX_YEAR:
        raise ValidationError(INVALID_YEAR)
    return value


def validate_anime_id(anime_id: Union[int, str]) -> int:
    if isinstance(anime_id, bool):
        raise ValidationError(INVALID_ANIME_ID)
    if isinstance(anime_id, int):
        value = anime_id
    else:
        text = anime_id.strip() if isinstance(anime_id, str) else ""
        if not (text.isascii() and text.isdigit()):
            raise ValidationError(INVALID_ANIME_ID)
        value = int(text)
    if value <= 0:
        raise ValidationError(INVALID_ANIME_ID)
    return value


def validate_query(query: Optional[str]) -> str:
    text = query.strip() if isinstance(query, str) else ""
    if len(text) < MIN_QUERY_LENGTH:
        raise ValidationError(INVALID_QUERY)
    return text


@dataclass(frozen=True, slots=True)
class Envelope:
    """Upstream already answered ``{"data": [...]}``."""

    payload: Mapping[str, Any]

    def to_response(self) -> Dict[str, Any]:
        return dict(self.payload)


@dataclass(frozen=True, slots=True)
class BareList:
    """Upstream answered with a bare JSON array."""

    items: List[Any] = field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        return {"data": list(self.items)}


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """Anything else; callers get an empty listing."""

    def to_response(self) -> Dict[str, Any]:
        return {"data": []}


Listing = Union[Envelope, BareList, Unrecognized]


def decode_listing(payload: Any) -> Listing:
    if isinstance(payload, Mapping) and isinstance(payload.get("data"), list):
        return Envelope(payload)
    if isinstance(payload, list):
        return BareList(payload)
    return Unrecognized()


class ScheduleService:
    def __init__(
        self,
        client: JikanClient,
        cache: Optional[ScheduleCache] = None,
        today: Callable[[], date] = date.today,
    ):
        self.client = client
        self.cache = cache if cache is not None else ScheduleCache()
        self.today = today

    def current_season(self) -> SeasonRef:
        return season_for(self.today())

    def get_current_schedule(self) -> WeeklySchedule:
        schedule = self.cache.read()
        if is_empty(schedule):
            current = self.current_season()
            logger.info("Schedule cache empty, fetching %s %s", current.season, current.year)
            schedule = self._fetch_season(current.year, current.season)
            self.cache.write(schedule)
        return schedule

    def get_current_day(self, day: str) -> List[AnimeRecord]:
        day = validate_day(day)
        return self.get_current_schedule().get(day, [])

    def get_season_schedule(self, year: Union[int, str], season: str) -> SeasonSchedule:
        year = validate_year(year)
        season = validate_season(season)
        return SeasonSchedule(season=season, year=year, schedule=self._fetch_season(year, season))

    def get_season_day(self, year: Union[int, str], season: str, day: str) -> SeasonDay:
        year = validate_year(year)
        season = validate_season(season)
        day = validate_day(day)
        schedule = self._fetch_season(year, season)
        return SeasonDay(season=season, year=year, day=day, animes=schedule.get(day, []))

    def get_anime_by_id(self, anime_id: Union[int, str]) -> Any:
        return self.client.anime(validate_anime_id(anime_id))

    def search(self, query: Optional[str]) -> Dict[str, Any]:
        query = validate_query(query)
        try:
            payload = self.client.search(query)
        except UpstreamError as exc:
            logger.error("Error searching anime with query %r: %s", query, exc)
            return Unrecognized().to_response()
        return decode_listing(payload).to_response()

    def get_popular(
        self,
        season: Optional[str] = None,
        year: Optional[Union[int, str]] = None,
    ) -> Dict[str, Any]:
        if year is not None and year != "":
            year = validate_year(year)
        else:
            year = None
        if season:
            season = validate_season(season)
        else:
            season = None

        try:
            if season and year:
                logger.info("Fetching popular anime for %s %s", season, year)
                payload = self.client.season_popular(year, season)
            else:
                logger.info("Fetching overall top anime")
                payload = self.client.top()
        except UpstreamError as exc:
            logger.error("Error fetching popular anime: %s", exc)
            payload = None

        response = decode_listing(payload).to_response()
        if season and year:
            response["season"] = season
            response["year"] = year
        return response

    def _fetch_season(self, year: int, season: str) -> WeeklySchedule:
        return aggregate_response(self.client.season(year, season))
