"""
Shared fixtures for the animeweek test suite.

Payloads mimic the shape of Jikan v4 responses closely enough for the code
under test; only the fields it reads are filled in.
"""
from datetime import date
from unittest.mock import MagicMock

import pytest

from animeweek.client import JikanClient
from animeweek.repository import ScheduleCache
from animeweek.service import ScheduleService


def make_anime(mal_id, title, day=None, **extra):
    anime = {
        "mal_id": mal_id,
        "url": f"https://myanimelist.net/anime/{mal_id}",
        "images": {"jpg": {"image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}.jpg"}},
        "title": title,
        "title_english": None,
        "title_japanese": None,
        "type": "TV",
        "source": "Manga",
        "episodes": 12,
        "status": "Currently Airing",
        "airing": True,
        "rating": "PG-13 - Teens 13 or older",
        "score": 7.5,
        "synopsis": f"Synopsis of {title}.",
        "season": "fall",
        "year": 2024,
        "broadcast": {"day": day, "time": "23:30", "timezone": "Asia/Tokyo", "string": None},
    }
    anime.update(extra)
    return anime


@pytest.fixture
def fall_2024_payload():
    return {
        "pagination": {"last_visible_page": 1, "has_next_page": False},
        "data": [
            make_anime(1, "Saturday Show", day="Saturdays"),
            make_anime(2, "Mystery Show", broadcast=None),
        ],
    }


@pytest.fixture
def client():
    return MagicMock(spec=JikanClient)


@pytest.fixture
def cache():
    return ScheduleCache()


@pytest.fixture
def service(client, cache):
    return ScheduleService(client, cache=cache, today=lambda: date(2024, 10, 5))
