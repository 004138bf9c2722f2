from __future__ import annotations

import httpx
import pytest

from gridiron_roster.core.cache import ExpiringCache
from gridiron_roster.ingestion.providers.base.client import BaseHttpClient
from gridiron_roster.ingestion.providers.base.errors import StatsFetchError
from gridiron_roster.ingestion.providers.sportsdata.client import SportsDataClient


def _client(handler, cache: ExpiringCache | None = None) -> SportsDataClient:
    http = BaseHttpClient(
        base_url="https://api.sportsdata.io/api/nfl/fantasy/json",
        transport=httpx.MockTransport(handler),
    )
    return SportsDataClient(http=http, api_key="secret", cache=cache or ExpiringCache())


def test_fetch_season_stats_sends_key_and_caches() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        assert request.url.path.endswith("/PlayerSeasonStats/2025REG")
        assert request.headers["Ocp-Apim-Subscription-Key"] == "secret"
        return httpx.Response(200, json=[{"PlayerID": 1}, "junk", {"PlayerID": 2}])

    client = _client(handler)

    first = client.fetch_season_stats("2025REG")
    second = client.fetch_season_stats("2025REG")

    assert first == [{"PlayerID": 1}, {"PlayerID": 2}]
    assert second == first
    assert len(calls) == 1


def test_non_list_payload_is_an_empty_result() -> None:
    client = _client(lambda request: httpx.Response(200, json={"message": "nope"}))
    assert client.fetch_season_stats("2025REG") == []


def test_http_error_raises_and_is_not_cached() -> None:
    statuses = [503, 200]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(statuses.pop(0), json=[{"PlayerID": 5}])

    cache = ExpiringCache()
    client = _client(handler, cache)

    with pytest.raises(StatsFetchError):
        client.fetch_season_stats("2025REG")
    assert len(cache) == 0

    assert client.fetch_season_stats("2025REG") == [{"PlayerID": 5}]


def test_transport_failure_raises_stats_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(StatsFetchError):
        _client(handler).fetch_season_stats("2025REG")


def test_cache_key_is_scoped_by_season() -> None:
    seasons: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seasons.append(request.url.path.rsplit("/", 1)[-1])
        return httpx.Response(200, json=[])

    client = _client(handler)
    client.fetch_season_stats("2024REG")
    client.fetch_season_stats("2025REG")
    client.fetch_season_stats("2024REG")

    assert seasons == ["2024REG", "2025REG"]


@pytest.mark.parametrize(
    "error",
    [httpx.RemoteProtocolError, httpx.ProxyError, httpx.UnsupportedProtocol, httpx.ReadError],
)
def test_any_transport_error_raises_stats_fetch_error(error: type[httpx.RequestError]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error("Server disconnected without sending a response.", request=request)

    cache = ExpiringCache()
    with pytest.raises(StatsFetchError):
        _client(handler, cache).fetch_season_stats("2025REG")
    assert len(cache) == 0
