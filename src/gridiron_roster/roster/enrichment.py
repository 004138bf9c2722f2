"""Fill missing birth dates and photos from the secondary provider.

A fixed pool of worker threads shares one cursor over the player list. A
worker claims an index (atomic read-and-increment under a lock), so every
player is written by exactly one worker. `enrich` returns only after every
worker has been joined.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from gridiron_roster.ingestion.providers.sportsdb.resolver import MatchResult, MatchStatus
from gridiron_roster.roster.models import PlayerRecord

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


class NameResolver(Protocol):
    def resolve_by_name(self, full_name: str) -> MatchResult: ...


class _Cursor:
    def __init__(self, size: int) -> None:
        self._size = size
        self._next = 0
        self._lock = threading.Lock()

    def claim(self) -> int | None:
        with self._lock:
            if self._next >= self._size:
                return None
            i = self._next
            self._next += 1
            return i


@dataclass
class EnrichmentSummary:
    claimed: int = 0
    skipped: int = 0
    matched: int = 0
    missed: int = 0
    failed: int = 0

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_claimed(self) -> None:
        with self._lock:
            self.claimed += 1

    def add_skipped(self) -> None:
        with self._lock:
            self.skipped += 1

    def add_matched(self) -> None:
        with self._lock:
            self.matched += 1

    def add_missed(self) -> None:
        with self._lock:
            self.missed += 1

    def add_failed(self) -> None:
        with self._lock:
            self.failed += 1


def apply_match(player: PlayerRecord, result: MatchResult) -> bool:
    """Copy fields from a matched candidate onto empty player fields only."""

    candidate = result.candidate
    if candidate is None:
        return False

    if not player.birth_date and candidate.birth_date:
        player.birth_date = candidate.birth_date

    if not player.photo_url:
        player.photo_url = candidate.photo_url

    return True


@dataclass
class EnrichmentOrchestrator:
    resolver: NameResolver
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be a positive integer, got {self.concurrency}")

    def _enrich_one(self, player: PlayerRecord, summary: EnrichmentSummary) -> None:
        if not player.needs_enrichment:
            summary.add_skipped()
            return

        full_name = player.full_name
        if not full_name:
            summary.add_missed()
            return

        result = self.resolver.resolve_by_name(full_name)
        if apply_match(player, result):
            summary.add_matched()
        elif result.status is MatchStatus.LOOKUP_FAILED:
            summary.add_failed()
        else:
            summary.add_missed()

    def _worker(
        self, players: Sequence[PlayerRecord], cursor: _Cursor, summary: EnrichmentSummary
    ) -> None:
        while (i := cursor.claim()) is not None:
            summary.add_claimed()
            try:
                self._enrich_one(players[i], summary)
            except Exception:
                # One bad player must not take the worker (and its remaining claims) down.
                logger.exception("enrichment failed for player index %d", i)
                summary.add_failed()

    def run(self, players: Sequence[PlayerRecord]) -> EnrichmentSummary:
        summary = EnrichmentSummary()
        if not players:
            return summary

        cursor = _Cursor(len(players))
        workers = [
            threading.Thread(
                target=self._worker,
                args=(players, cursor, summary),
                name=f"enrich-{n}",
                daemon=True,
            )
            for n in range(min(self.concurrency, len(players)))
        ]
        for t in workers:
            t.start()
        for t in workers:
            t.join()

        logger.info(
            "enriched %d players with %d workers: matched=%d missed=%d failed=%d skipped=%d",
            summary.claimed,
            len(workers),
            summary.matched,
            summary.missed,
            summary.failed,
            summary.skipped,
        )
        return summary


def enrich(
    players: Sequence[PlayerRecord],
    resolver: NameResolver,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Sequence[PlayerRecord]:
    """Enrich `players` in place and return the same sequence."""

    EnrichmentOrchestrator(resolver=resolver, concurrency=concurrency).run(players)
    return players
