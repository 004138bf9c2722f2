"""Turn raw season-stat rows into a deduplicated list of PlayerRecord.

This is the only place that knows about the primary provider's loose field
spellings; everything downstream works with PlayerRecord.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from gridiron_roster.core.text import first_non_empty
from gridiron_roster.roster.models import PlayerId, PlayerRecord

RawStatRow = Mapping[str, Any]

# Tried in order; first present value wins.
PLAYER_ID_KEYS: tuple[str, ...] = ("PlayerID", "PlayerId", "playerId")
PHOTO_URL_KEYS: tuple[str, ...] = ("PhotoUrl", "PhotoUrlLarge", "PhotoUrlSmall")


def _resolve_player_id(row: RawStatRow) -> PlayerId | None:
    for key in PLAYER_ID_KEYS:
        value = row.get(key)
        if value is None or isinstance(value, bool):
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if isinstance(value, float):
            # JSON numbers may decode as 1.0; keep integral ids equal to their int form.
            return int(value) if value.is_integer() else value
        if isinstance(value, (int, str)):
            return value
    return None


def _text(row: RawStatRow, key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _resolve_names(row: RawStatRow) -> tuple[str, str]:
    first = _text(row, "FirstName")
    last = _text(row, "LastName")

    full_name = _text(row, "Name") or f"{first} {last}".strip()
    parts = full_name.split()

    first = first or (parts[0] if parts else "")
    last = last or " ".join(parts[1:])
    return first, last


def normalize_row(row: RawStatRow, player_id: PlayerId) -> PlayerRecord:
    first, last = _resolve_names(row)
    return PlayerRecord(
        player_id=player_id,
        first_name=first,
        last_name=last,
        team=_text(row, "Team"),
        position=_text(row, "Position"),
        status=_text(row, "Status"),
        jersey=_text(row, "Jersey"),
        birth_date=_text(row, "BirthDate") or None,
        photo_url=first_non_empty(*(row.get(k) for k in PHOTO_URL_KEYS)) or None,
    )


def build_roster(rows: Iterable[RawStatRow]) -> list[PlayerRecord]:
    """Deduplicate rows by player id, keeping the first occurrence and input order."""

    seen: set[PlayerId] = set()
    players: list[PlayerRecord] = []

    for row in rows:
        if not isinstance(row, Mapping):
            continue
        player_id = _resolve_player_id(row)
        if player_id is None or player_id in seen:
            continue
        seen.add(player_id)
        players.append(normalize_row(row, player_id))

    return players
