"""Roster assembly: stats fetch -> dedup -> capped enrichment -> cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from gridiron_roster.core.cache import ExpiringCache
from gridiron_roster.core.config import Settings
from gridiron_roster.ingestion.providers.base.client import BaseHttpClient
from gridiron_roster.ingestion.providers.sportsdata.client import SportsDataClient
from gridiron_roster.ingestion.providers.sportsdb.client import TheSportsDbClient
from gridiron_roster.ingestion.providers.sportsdb.resolver import MatchResolver
from gridiron_roster.roster.builder import build_roster
from gridiron_roster.roster.enrichment import DEFAULT_CONCURRENCY, EnrichmentOrchestrator
from gridiron_roster.roster.models import PlayerRecord

logger = logging.getLogger(__name__)

ROSTER_TTL_S = 10 * 60
DEFAULT_ENRICH_LIMIT = 3000


def roster_cache_key(season: str, limit: int) -> str:
    return f"players_from_stats_{season}_limit_{limit}"


@dataclass
class RosterService:
    stats: SportsDataClient
    resolver: MatchResolver
    cache: ExpiringCache
    season: str
    enrich_limit: int = DEFAULT_ENRICH_LIMIT
    concurrency: int = DEFAULT_CONCURRENCY

    def season_stats(self) -> list[dict[str, Any]]:
        return self.stats.fetch_season_stats(self.season)

    def roster(self) -> list[PlayerRecord]:
        """
        Cached roster for the configured season.

        Only the first `enrich_limit` players are enriched; the rest are
        returned as built. A limit of 0 skips enrichment entirely.
        Raises UpstreamFetchError when the stats provider fails.
        """

        limit = max(0, self.enrich_limit)
        key = roster_cache_key(self.season, limit)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        players = build_roster(self.stats.fetch_season_stats(self.season))

        if limit > 0 and self.resolver.enabled:
            EnrichmentOrchestrator(resolver=self.resolver, concurrency=self.concurrency).run(
                players[:limit]
            )

        self.cache.set(key, players, ROSTER_TTL_S)
        logger.info(
            "built roster of %d players for %s (cache entries=%d)",
            len(players),
            self.season,
            len(self.cache),
        )
        return players

    def close(self) -> None:
        self.stats.http.close()
        search = self.resolver.search
        if isinstance(search, TheSportsDbClient):
            search.http.close()


def build_service(cfg: Settings, *, cache: ExpiringCache | None = None) -> RosterService:
    """Wire clients from settings. Raises ConfigError without a primary key."""

    api_key = cfg.require_sportsdata_key()
    cache = cache or ExpiringCache()

    stats = SportsDataClient(
        http=BaseHttpClient(base_url=cfg.sportsdata_base_url, timeout_s=cfg.stats_timeout_s),
        api_key=api_key,
        cache=cache,
        timeout_s=cfg.stats_timeout_s,
    )

    search: TheSportsDbClient | None = None
    if cfg.sportsdb_api_key:
        search = TheSportsDbClient(
            http=BaseHttpClient(base_url=cfg.sportsdb_base_url, timeout_s=cfg.lookup_timeout_s),
            api_key=cfg.sportsdb_api_key,
            timeout_s=cfg.lookup_timeout_s,
        )
    else:
        logger.warning("SPORTSDB_API_KEY is not set; player enrichment is disabled")

    resolver = MatchResolver(
        search=search,
        cache=cache,
        sport=cfg.target_sport,
        league=cfg.target_league,
    )

    logger.info(
        "roster service ready: season=%s enrich_limit=%d concurrency=%d sportsdb_key=%s",
        cfg.season,
        cfg.enrich_limit,
        cfg.enrich_concurrency,
        "set" if search else "missing",
    )

    return RosterService(
        stats=stats,
        resolver=resolver,
        cache=cache,
        season=cfg.season,
        enrich_limit=cfg.enrich_limit,
        concurrency=cfg.enrich_concurrency,
    )
