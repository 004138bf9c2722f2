"""Canonical roster records shared by the builder, the enrichment pool and the API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PlayerId = int | float | str


@dataclass
class PlayerRecord:
    player_id: PlayerId
    first_name: str = ""
    last_name: str = ""
    team: str = ""
    position: str = ""
    status: str = ""
    jersey: str = ""
    birth_date: str | None = None
    photo_url: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def needs_enrichment(self) -> bool:
        return not self.birth_date or not self.photo_url

    def to_payload(self) -> dict[str, Any]:
        return {
            "PlayerID": self.player_id,
            "FirstName": self.first_name,
            "LastName": self.last_name,
            "Team": self.team,
            "Position": self.position,
            "Status": self.status,
            "Jersey": self.jersey,
            "BirthDate": self.birth_date,
            "PhotoURL": self.photo_url,
        }
