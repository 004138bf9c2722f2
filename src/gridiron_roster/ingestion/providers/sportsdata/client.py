from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from gridiron_roster.core.cache import ExpiringCache
from gridiron_roster.ingestion.providers.base.client import BaseHttpClient
from gridiron_roster.ingestion.providers.base.errors import (
    ProviderRequestError,
    StatsFetchError,
)

logger = logging.getLogger(__name__)

ApiItem = dict[str, Any]

SEASON_STATS_TTL_S = 10 * 60


def season_stats_cache_key(season: str) -> str:
    return f"player_season_stats_{season}"


@dataclass
class SportsDataClient:
    """Primary provider: full-season player stat rows, memoized in the cache.

    Failures are not cached; the next call goes back to the provider.
    """

    http: BaseHttpClient
    api_key: str
    cache: ExpiringCache
    timeout_s: float = 20.0

    def _headers(self) -> dict[str, str]:
        return {"Ocp-Apim-Subscription-Key": self.api_key}

    def fetch_season_stats(self, season: str) -> list[ApiItem]:
        key = season_stats_cache_key(season)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("season stats cache hit for %s", season)
            return cached

        try:
            value = self.http.get_json_value(
                f"/PlayerSeasonStats/{season}",
                headers=self._headers(),
                timeout_s=self.timeout_s,
            )
        except ProviderRequestError as e:
            raise StatsFetchError(f"Failed to fetch season stats for {season}: {e}") from e

        if not isinstance(value, list):
            logger.warning(
                "season stats for %s was %s, not a list; treating as empty",
                season,
                type(value).__name__,
            )
            value = []

        items: list[ApiItem] = [v for v in value if isinstance(v, dict)]
        self.cache.set(key, items, SEASON_STATS_TTL_S)
        logger.info("fetched %d season stat rows for %s", len(items), season)
        return items
