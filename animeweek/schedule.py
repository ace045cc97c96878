from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Union

from animeweek.models import DAYS_OF_WEEK, WEEKDAYS, AnimeRecord, WeeklySchedule

logger = logging.getLogger(__name__)


def empty_schedule() -> WeeklySchedule:
    return {day: [] for day in DAYS_OF_WEEK}


def is_empty(schedule: WeeklySchedule) -> bool:
    return all(len(records) == 0 for records in schedule.values())


def normalize_day(value: str) -> str:
    day = value.lower()
    # "Mondays" -> "monday"
    if day.endswith("s"):
        day = day[:-1]
    return day


def day_bucket(record: AnimeRecord) -> str:
    broadcast = record.broadcast
    if broadcast is None or not broadcast.day:
        return "other"
    day = normalize_day(broadcast.day)
    return day if day in WEEKDAYS else "other"


def aggregate(anime_list: Iterable[Union[AnimeRecord, Mapping[str, Any]]]) -> WeeklySchedule:
    """Group anime into the eight day buckets, keeping input order per bucket."""
    schedule = empty_schedule()
    for item in anime_list:
        if isinstance(item, AnimeRecord):
            record = item
        elif isinstance(item, Mapping):
            record = AnimeRecord.from_dict(item)
        else:
            logger.debug("Skipping non-object entry in anime list: %r", item)
            continue
        schedule[day_bucket(record)].append(record)

    logger.debug(
        "Processed schedule: %s",
        ", ".join(f"{day}: {len(records)}" for day, records in schedule.items()),
    )
    return schedule


def aggregate_response(payload: Any) -> WeeklySchedule:
    anime_list = payload.get("data") if isinstance(payload, Mapping) else None
    if not isinstance(anime_list, list):
        anime_list = []
    logger.info("Retrieved %d anime from season listing", len(anime_list))
    return aggregate(anime_list)
