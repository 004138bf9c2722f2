from __future__ import annotations

import json

import typer

from gridiron_roster.core.config import ConfigError, settings
from gridiron_roster.core.logs import configure_logging
from gridiron_roster.ingestion.providers.base.errors import UpstreamFetchError
from gridiron_roster.roster.service import RosterService, build_service

app = typer.Typer(no_args_is_help=True, help="NFL roster aggregation service.")


@app.callback()
def main(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    configure_logging(log_level)


def _service() -> RosterService:
    try:
        return build_service(settings)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e


@app.command("serve")
def serve_cmd(
    host: str = typer.Option(settings.host, "--host", help="Interface to bind."),
    port: int = typer.Option(settings.port, "--port", help="Port to listen on."),
) -> None:
    """Run the HTTP API with uvicorn."""

    import uvicorn

    from gridiron_roster.api.app import create_app

    api = create_app(_service(), settings=settings)
    uvicorn.run(api, host=host, port=port, log_level=settings.log_level.lower())


@app.command("players")
def players_cmd(
    limit: int | None = typer.Option(
        None, "--limit", min=0, help="Enrichment cap (0 disables enrichment)."
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", min=1, help="Number of enrichment workers."
    ),
) -> None:
    """Build the roster once and print it as JSON."""

    svc = _service()
    if limit is not None:
        svc.enrich_limit = limit
    if concurrency is not None:
        svc.concurrency = concurrency

    try:
        roster = svc.roster()
    except UpstreamFetchError as e:
        typer.echo(f"Failed to fetch players: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        svc.close()

    typer.echo(json.dumps([p.to_payload() for p in roster], indent=2))


@app.command("season-stats")
def season_stats_cmd(
    as_json: bool = typer.Option(False, "--json", help="Print the raw rows instead of a count."),
) -> None:
    """Fetch the configured season's raw stat rows."""

    svc = _service()
    try:
        rows = svc.season_stats()
    except UpstreamFetchError as e:
        typer.echo(f"Failed to fetch season stats: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        svc.close()

    if as_json:
        typer.echo(json.dumps(rows, indent=2))
    else:
        typer.echo(f"Fetched {len(rows)} season stat rows for {svc.season}")
