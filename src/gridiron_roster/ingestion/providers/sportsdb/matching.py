from __future__ import annotations

from collections.abc import Sequence

from gridiron_roster.core.text import normalize_name
from gridiron_roster.ingestion.providers.sportsdb.client import SecondaryCandidate


def filter_candidates(
    candidates: Sequence[SecondaryCandidate], *, sport: str, league: str
) -> list[SecondaryCandidate]:
    """Keep candidates playing `sport` (exact) in a league containing `league`, case-insensitive."""

    sport_l = sport.strip().lower()
    league_l = league.strip().lower()
    return [
        c
        for c in candidates
        if c.sport.lower() == sport_l and league_l in c.league.lower()
    ]


def pick_best_match(
    candidates: Sequence[SecondaryCandidate],
    *,
    full_name: str,
    sport: str,
    league: str,
) -> SecondaryCandidate | None:
    """
    Exact (case-insensitive) name match among the filtered candidates, else
    the first filtered candidate in provider order.

    The fallback is deliberately simple: there is no scoring by team, position
    or jersey number.
    """

    filtered = filter_candidates(candidates, sport=sport, league=league)
    if not filtered:
        return None

    target = normalize_name(full_name)
    for c in filtered:
        if normalize_name(c.name) == target:
            return c

    return filtered[0]
