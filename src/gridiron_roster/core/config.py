from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(RuntimeError):
    """A mandatory setting is missing; the process must not start."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )

    # sportsdata.io (primary stats provider)
    sportsdata_api_key: str | None = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices("SPORTSDATA_API_KEY", "DISCOVERYLAB_API_KEY"),
    )
    sportsdata_base_url: str = "https://api.sportsdata.io/api/nfl/fantasy/json"
    stats_timeout_s: float = Field(default=20.0, gt=0)

    # thesportsdb (secondary lookup provider)
    sportsdb_api_key: str | None = Field(default=None, repr=False)
    sportsdb_base_url: str = "https://www.thesportsdb.com/api/v1/json"
    lookup_timeout_s: float = Field(default=10.0, gt=0)
    target_sport: str = "American Football"
    target_league: str = "NFL"

    # roster
    season: str = "2025REG"
    enrich_concurrency: int = Field(default=8, ge=1)
    enrich_limit: int = Field(default=3000, ge=0)

    # http
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    log_level: str = "INFO"

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_sportsdata_key(self) -> str:
        if not self.sportsdata_api_key:
            raise ConfigError(
                "SPORTSDATA_API_KEY is not set. Set it in the environment or .env file."
            )
        return self.sportsdata_api_key


settings = Settings()
