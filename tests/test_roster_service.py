from __future__ import annotations

import httpx
import pytest

from gridiron_roster.core.cache import ExpiringCache
from gridiron_roster.core.config import ConfigError, Settings
from gridiron_roster.ingestion.providers.base.client import BaseHttpClient
from gridiron_roster.ingestion.providers.base.errors import UpstreamFetchError
from gridiron_roster.ingestion.providers.sportsdata.client import SportsDataClient
from gridiron_roster.ingestion.providers.sportsdb.client import TheSportsDbClient
from gridiron_roster.ingestion.providers.sportsdb.resolver import MatchResolver
from gridiron_roster.roster.service import RosterService, build_service, roster_cache_key

STATS = [
    {"PlayerID": 1, "Name": "Joe Smith", "Position": "QB", "Team": "CIN"},
    {"PlayerID": 1, "Name": "Joe Smith", "Position": "QB", "Team": "CIN"},
    {"PlayerID": 2, "FirstName": "Sam", "LastName": "Runner", "Position": "RB"},
    {"PlayerId": 3, "Name": "Already Complete", "BirthDate": "1995-01-01", "PhotoUrl": "https://p/3"},
]


class Upstream:
    def __init__(self) -> None:
        self.stats_calls = 0
        self.search_calls: list[str] = []
        self.stats_status = 200

    def stats(self, request: httpx.Request) -> httpx.Response:
        self.stats_calls += 1
        return httpx.Response(self.stats_status, json=STATS)

    def search(self, request: httpx.Request) -> httpx.Response:
        name = request.url.params["p"]
        self.search_calls.append(name)
        return httpx.Response(
            200,
            json={
                "player": [
                    {
                        "strPlayer": name,
                        "strSport": "American Football",
                        "strLeague": "NFL",
                        "dateBorn": "1991-03-04",
                        "strCutout": f"https://cutout/{name}",
                    }
                ]
            },
        )


def _service(upstream: Upstream, *, enrich_limit: int = 3000, search: bool = True) -> RosterService:
    cache = ExpiringCache()
    stats = SportsDataClient(
        http=BaseHttpClient(base_url="https://stats.test", transport=httpx.MockTransport(upstream.stats)),
        api_key="k",
        cache=cache,
    )
    client = None
    if search:
        client = TheSportsDbClient(
            http=BaseHttpClient(base_url="https://sdb.test", transport=httpx.MockTransport(upstream.search)),
            api_key="3",
        )
    return RosterService(
        stats=stats,
        resolver=MatchResolver(search=client, cache=cache),
        cache=cache,
        season="2025REG",
        enrich_limit=enrich_limit,
        concurrency=4,
    )


def test_roster_is_deduplicated_enriched_and_cached() -> None:
    upstream = Upstream()
    svc = _service(upstream)

    roster = svc.roster()

    assert [p.player_id for p in roster] == [1, 2, 3]
    assert roster[0].birth_date == "1991-03-04"
    assert roster[0].photo_url == "https://cutout/Joe Smith"
    assert roster[2].photo_url == "https://p/3"
    assert sorted(upstream.search_calls) == ["Joe Smith", "Sam Runner"]

    assert svc.roster() is roster
    assert upstream.stats_calls == 1
    assert svc.cache.get(roster_cache_key("2025REG", 3000)) is roster


def test_enrichment_cap_applies_to_a_prefix() -> None:
    upstream = Upstream()
    roster = _service(upstream, enrich_limit=1).roster()

    assert len(roster) == 3
    assert roster[0].birth_date == "1991-03-04"
    assert roster[1].birth_date is None
    assert upstream.search_calls == ["Joe Smith"]


def test_zero_cap_skips_enrichment() -> None:
    upstream = Upstream()
    roster = _service(upstream, enrich_limit=0).roster()

    assert [p.birth_date for p in roster] == [None, None, "1995-01-01"]
    assert upstream.search_calls == []


def test_missing_secondary_key_skips_enrichment() -> None:
    upstream = Upstream()
    roster = _service(upstream, search=False).roster()

    assert [p.photo_url for p in roster] == [None, None, "https://p/3"]
    assert upstream.search_calls == []


def test_stats_failure_propagates_and_nothing_is_cached() -> None:
    upstream = Upstream()
    upstream.stats_status = 500
    svc = _service(upstream)

    with pytest.raises(UpstreamFetchError):
        svc.roster()
    assert len(svc.cache) == 0


def test_build_service_requires_primary_key() -> None:
    with pytest.raises(ConfigError):
        build_service(Settings(_env_file=None, sportsdata_api_key=None))


def test_build_service_without_secondary_key_disables_resolver() -> None:
    cfg = Settings(_env_file=None, sportsdata_api_key="k", sportsdb_api_key=None, enrich_limit=10)
    svc = build_service(cfg)
    try:
        assert not svc.resolver.enabled
        assert svc.enrich_limit == 10
        assert svc.stats.cache is svc.cache
    finally:
        svc.close()
