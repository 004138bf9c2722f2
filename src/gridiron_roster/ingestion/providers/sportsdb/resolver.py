"""Name -> best TheSportsDB candidate, with positive and negative caching."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from gridiron_roster.core.cache import ExpiringCache
from gridiron_roster.core.text import normalize_name
from gridiron_roster.ingestion.providers.base.errors import EnrichmentLookupFailure
from gridiron_roster.ingestion.providers.sportsdb.client import SecondaryCandidate
from gridiron_roster.ingestion.providers.sportsdb.matching import pick_best_match

logger = logging.getLogger(__name__)

LOOKUP_TTL_S = 24 * 60 * 60
FAILED_LOOKUP_TTL_S = 5 * 60

_MISSING = object()


class PlayerSearch(Protocol):
    def search_players(self, name: str) -> list[SecondaryCandidate]: ...


class MatchStatus(enum.Enum):
    MATCHED = "matched"
    NO_CANDIDATES = "no_candidates"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class MatchResult:
    status: MatchStatus
    candidate: SecondaryCandidate | None = None

    @property
    def matched(self) -> bool:
        return self.candidate is not None


NO_CANDIDATES = MatchResult(MatchStatus.NO_CANDIDATES)
LOOKUP_FAILED = MatchResult(MatchStatus.LOOKUP_FAILED)


def lookup_cache_key(full_name: str) -> str:
    return f"sportsdb_player_{normalize_name(full_name)}"


@dataclass
class MatchResolver:
    """
    Resolve a player's name to a single secondary-provider candidate.

    Never raises. A failed lookup is remembered (as None in the cache) for
    FAILED_LOOKUP_TTL_S so an outage is not hammered once per player name;
    successful lookups, empty ones included, are kept for LOOKUP_TTL_S.

    `search` is None when no secondary key is configured; every call then
    reports NO_CANDIDATES without touching the network.
    """

    search: PlayerSearch | None
    cache: ExpiringCache
    sport: str = "American Football"
    league: str = "NFL"

    @property
    def enabled(self) -> bool:
        return self.search is not None

    def _lookup(self, full_name: str) -> list[SecondaryCandidate] | None:
        assert self.search is not None
        key = lookup_cache_key(full_name)

        cached = self.cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cached

        try:
            candidates = self.search.search_players(full_name)
        except EnrichmentLookupFailure as e:
            logger.warning("%s; suppressing retries for %ds", e, FAILED_LOOKUP_TTL_S)
            self.cache.set(key, None, FAILED_LOOKUP_TTL_S)
            return None

        self.cache.set(key, candidates, LOOKUP_TTL_S)
        return candidates

    def resolve_by_name(self, full_name: str) -> MatchResult:
        full_name = full_name.strip()
        if not full_name or self.search is None:
            return NO_CANDIDATES

        candidates = self._lookup(full_name)
        if candidates is None:
            return LOOKUP_FAILED

        best = pick_best_match(
            candidates, full_name=full_name, sport=self.sport, league=self.league
        )
        if best is None:
            return NO_CANDIDATES
        return MatchResult(MatchStatus.MATCHED, best)
