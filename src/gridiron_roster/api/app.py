"""HTTP surface for the roster service."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from gridiron_roster.core.config import Settings, settings as default_settings
from gridiron_roster.ingestion.providers.base.errors import UpstreamFetchError
from gridiron_roster.roster.service import RosterService, build_service

logger = logging.getLogger(__name__)


def create_app(
    service: RosterService | None = None,
    *,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the app. Without an explicit service one is wired from settings,
    which raises ConfigError when the primary provider key is missing."""

    cfg = settings or default_settings
    svc = service or build_service(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        svc.close()

    app = FastAPI(title="gridiron-roster", lifespan=lifespan)
    app.state.service = svc
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Backend is running"

    @app.get("/api/player-season-stats")
    def player_season_stats():
        try:
            return svc.season_stats()
        except UpstreamFetchError as e:
            logger.error("Failed to fetch season stats: %s", e)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch season stats"})

    @app.get("/api/players")
    def players():
        try:
            roster = svc.roster()
        except UpstreamFetchError as e:
            logger.error("Players route failed: %s", e)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch players"})
        return [p.to_payload() for p in roster]

    return app
