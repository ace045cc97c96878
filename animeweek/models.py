from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

DAYS_OF_WEEK = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
    "other",
]
WEEKDAYS = DAYS_OF_WEEK[:7]
SEASONS = ["winter", "spring", "summer", "fall"]

MIN_YEAR = 1990
MAX_YEAR = 2030


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    return value if isinstance(value, (int, float)) else None


@dataclass(frozen=True, slots=True)
class Broadcast:
    day: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None
    string: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> Optional[Broadcast]:
        if not isinstance(payload, Mapping):
            return None
        return cls(
            day=_str_or_none(payload.get("day")),
            time=_str_or_none(payload.get("time")),
            timezone=_str_or_none(payload.get("timezone")),
            string=_str_or_none(payload.get("string")),
        )


@dataclass(frozen=True, slots=True)
class AnimeRecord:
    """One anime as reported by the upstream API.

    ``raw`` keeps the untouched upstream object; that is what goes back out
    over the wire, the typed fields are for the code in between.
    """

    mal_id: Optional[int]
    title: str
    title_english: Optional[str] = None
    title_japanese: Optional[str] = None
    images: Dict[str, Any] = field(default_factory=dict)
    synopsis: Optional[str] = None
    type: Optional[str] = None
    source: Optional[str] = None
    rating: Optional[str] = None
    status: Optional[str] = None
    episodes: Optional[int] = None
    score: Optional[float] = None
    season: Optional[str] = None
    year: Optional[int] = None
    broadcast: Optional[Broadcast] = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> AnimeRecord:
        mal_id = payload.get("mal_id")
        episodes = payload.get("episodes")
        year = payload.get("year")
        images = payload.get("images")
        return cls(
            mal_id=mal_id if isinstance(mal_id, int) and not isinstance(mal_id, bool) else None,
            title=_str_or_none(payload.get("title")) or "",
            title_english=_str_or_none(payload.get("title_english")),
            title_japanese=_str_or_none(payload.get("title_japanese")),
            images=dict(images) if isinstance(images, Mapping) else {},
            synopsis=_str_or_none(payload.get("synopsis")),
            type=_str_or_none(payload.get("type")),
            source=_str_or_none(payload.get("source")),
            rating=_str_or_none(payload.get("rating")),
            status=_str_or_none(payload.get("status")),
            episodes=episodes if isinstance(episodes, int) and not isinstance(episodes, bool) else None,
            score=_number_or_none(payload.get("score")),
            season=_str_or_none(payload.get("season")),
            year=year if isinstance(year, int) and not isinstance(year, bool) else None,
            broadcast=Broadcast.from_dict(payload.get("broadcast")),
            raw=payload,
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


WeeklySchedule = Dict[str, List[AnimeRecord]]


def schedule_to_dict(schedule: WeeklySchedule) -> Dict[str, List[Dict[str, Any]]]:
    return {day: [record.to_dict() for record in records] for day, records in schedule.items()}


@dataclass(frozen=True, slots=True)
class SeasonRef:
    season: str
    year: int


@dataclass(slots=True)
class SeasonSchedule:
    season: str
    year: int
    schedule: WeeklySchedule

    def to_dict(self) -> Dict[str, Any]:
        return {"schedule": schedule_to_dict(self.schedule), "season": self.season, "year": self.year}


@dataclass(slots=True)
class SeasonDay:
    season: str
    year: int
    day: str
    animes: List[AnimeRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "animes": [record.to_dict() for record in self.animes],
            "season": self.season,
            "year": self.year,
            "day": self.day,
        }
