from __future__ import annotations

from typing import List

from animeweek.models import AnimeRecord, WeeklySchedule
from animeweek.schedule import empty_schedule


class ScheduleCache:
    """Single slot holding the current season's schedule.

    Only the current season is ever stored here. There is no expiry and no
    merge: ``write`` replaces whatever was there.
    """

    def __init__(self):
        self._schedule: WeeklySchedule = empty_schedule()

    def read(self) -> WeeklySchedule:
        return self._schedule

    def read_day(self, day: str) -> List[AnimeRecord]:
        return self._schedule.get(day, [])

    def write(self, schedule: WeeklySchedule) -> None:
        self._schedule = schedule
