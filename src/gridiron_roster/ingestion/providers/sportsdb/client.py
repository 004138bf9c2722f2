from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from gridiron_roster.core.text import first_non_empty
from gridiron_roster.ingestion.providers.base.client import BaseHttpClient
from gridiron_roster.ingestion.providers.base.errors import (
    EnrichmentLookupFailure,
    ProviderRequestError,
)

# Priority order for the photo a candidate contributes.
PHOTO_URL_KEYS: tuple[str, ...] = ("strCutout", "strThumb", "strRender", "strFanart1")


@dataclass(frozen=True)
class SecondaryCandidate:
    name: str
    sport: str
    league: str
    birth_date: str | None
    photo_urls: tuple[str, ...]

    @property
    def photo_url(self) -> str | None:
        return first_non_empty(*self.photo_urls) or None

    @classmethod
    def from_payload(cls, item: dict[str, Any]) -> SecondaryCandidate:
        def text(key: str) -> str:
            v = item.get(key)
            return v.strip() if isinstance(v, str) else ""

        return cls(
            name=text("strPlayer"),
            sport=text("strSport"),
            league=text("strLeague"),
            birth_date=text("dateBorn") or None,
            photo_urls=tuple(text(k) for k in PHOTO_URL_KEYS),
        )


class TheSportsDbClient:
    """Secondary provider: player search by name.

    The API key is part of the URL path, not a header.
    """

    def __init__(self, *, http: BaseHttpClient, api_key: str, timeout_s: float = 10.0) -> None:
        self.http = http
        self.api_key = api_key
        self.timeout_s = timeout_s

    def search_players(self, name: str) -> list[SecondaryCandidate]:
        """Endpoint: GET /{key}/searchplayers.php?p=NAME

        Response: object whose `player` field is a list of players, or null when
        nothing matched. Raises EnrichmentLookupFailure on any transport or
        payload problem.
        """

        try:
            payload = self.http.get_json(
                f"/{self.api_key}/searchplayers.php",
                params={"p": name},
                timeout_s=self.timeout_s,
            )
        except ProviderRequestError as e:
            raise EnrichmentLookupFailure(name, str(e)) from e

        players = payload.get("player")
        if players is None:
            return []
        if not isinstance(players, list):
            raise EnrichmentLookupFailure(name, f"expected 'player' list, got {type(players)}")

        return [SecondaryCandidate.from_payload(p) for p in players if isinstance(p, dict)]
