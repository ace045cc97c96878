import pytest
import requests
import requests_mock

from animeweek.client import JikanClient
from animeweek.errors import UpstreamError, UpstreamExhaustedError

BASE = "https://api.jikan.moe/v4"
SEASON_URL = f"{BASE}/seasons/2024/fall"


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr("animeweek.client.time.sleep", calls.append)
    return calls


def test_rate_limited_twice_then_succeeds(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(
            SEASON_URL,
            [
                {"status_code": 429},
                {"status_code": 429},
                {"status_code": 200, "json": {"data": []}},
            ],
        )
        client = JikanClient()
        assert client.fetch_with_retry(SEASON_URL) == {"data": []}
        assert mocker.call_count == 3
    assert sleeps == [0.5, 0.5]


def test_always_rate_limited_gives_up_after_max_retries(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(SEASON_URL, status_code=429)
        client = JikanClient(max_retries=3, retry_delay_ms=100)
        with pytest.raises(UpstreamExhaustedError):
            client.fetch_with_retry(SEASON_URL)
        assert mocker.call_count == 3
    assert sleeps == [0.1, 0.1, 0.1]


def test_server_error_is_retried_then_raised(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(SEASON_URL, status_code=500, reason="Internal Server Error")
        client = JikanClient()
        with pytest.raises(UpstreamError) as excinfo:
            client.fetch_with_retry(SEASON_URL)
        assert mocker.call_count == 3
    assert excinfo.value.status_code == 500
    assert "500" in str(excinfo.value)
    # no wait after the final attempt
    assert len(sleeps) == 2


def test_network_failure_recovers(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(
            SEASON_URL,
            [
                {"exc": requests.exceptions.ConnectionError},
                {"status_code": 200, "json": {"data": [{"mal_id": 1}]}},
            ],
        )
        client = JikanClient()
        assert client.fetch_with_retry(SEASON_URL) == {"data": [{"mal_id": 1}]}
    assert sleeps == [0.5]


def test_network_failure_on_last_attempt_is_wrapped(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(SEASON_URL, exc=requests.exceptions.ConnectTimeout)
        client = JikanClient(max_retries=2)
        with pytest.raises(UpstreamError) as excinfo:
            client.fetch_with_retry(SEASON_URL)
        assert mocker.call_count == 2
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectTimeout)
    assert excinfo.value.status_code is None


def test_invalid_json_counts_as_failure(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(SEASON_URL, status_code=200, text="<html>not json</html>")
        client = JikanClient(max_retries=2)
        with pytest.raises(UpstreamError):
            client.fetch_with_retry(SEASON_URL)
        assert mocker.call_count == 2


def test_per_call_overrides(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(SEASON_URL, status_code=429)
        client = JikanClient()
        with pytest.raises(UpstreamExhaustedError):
            client.fetch_with_retry(SEASON_URL, max_retries=1, delay_ms=250)
        assert mocker.call_count == 1
    assert sleeps == [0.25]


def test_endpoint_urls(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get(requests_mock.ANY, json={"data": []})
        client = JikanClient()
        client.season(2024, "fall")
        client.season_popular(2023, "spring")
        client.anime(5114)
        client.search("frieren")
        client.top()
        history = mocker.request_history

    assert history[0].path == "/v4/seasons/2024/fall"
    assert history[0].qs == {"sfw": ["true"]}
    assert history[1].path == "/v4/seasons/2023/spring"
    assert history[1].qs["order_by"] == ["score"]
    assert history[1].qs["sort"] == ["desc"]
    assert history[1].qs["limit"] == ["24"]
    assert history[2].path == "/v4/anime/5114"
    assert history[3].path == "/v4/anime"
    assert history[3].qs["q"] == ["frieren"]
    assert history[3].qs["limit"] == ["20"]
    assert history[4].path == "/v4/top/anime"
    assert history[4].qs["limit"] == ["24"]


def test_custom_base_url_and_headers(sleeps):
    with requests_mock.Mocker() as mocker:
        mocker.get("http://localhost:8080/v4/anime/1", json={"data": {"mal_id": 1}})
        client = JikanClient("http://localhost:8080/v4/")
        assert client.anime(1) == {"data": {"mal_id": 1}}
        assert mocker.last_request.headers["Accept"] == "application/json"
