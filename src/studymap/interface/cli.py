"""studymap CLI — heatmap, stats, streak, config and server commands."""

import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer

from studymap.application.config import resolve_config
from studymap.domain.activity.models import HeatmapReport
from studymap.domain.exceptions import ActivitySourceError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="studymap: study history heatmaps, stats and streaks for flashcard learners.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage studymap configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

PathArg = Annotated[
    Path | None,
    typer.Argument(help="YAML/JSON activity export. Defaults to 'activity_file' in config."),
]
TodayOpt = Annotated[
    str | None, typer.Option("--today", help="Last day of the window (YYYY-MM-DD).")
]
SourceOpt = Annotated[str | None, typer.Option(help="Activity source: file or http.")]
UrlOpt = Annotated[str | None, typer.Option("--url", help="Activity endpoint for --source http.")]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for studymap."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose
    if verbose > 1:
        logging.getLogger().setLevel(logging.DEBUG)


def _parse_today(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid date '{value}', expected YYYY-MM-DD.") from e


def _to_jsonable(obj: Any) -> Any:
    return json.loads(json.dumps(asdict(obj), default=str))


async def _build_report(config, today: date | None) -> HeatmapReport:
    from studymap.application.factory import get_activity_repository
    from studymap.application.heatmap.service import HeatmapService

    async with get_activity_repository(config) as repo:
        service = HeatmapService(repo, thresholds=config.level_thresholds)
        return await service.build_report(today)


def _load_report(
    path: Path | None,
    today: str | None,
    source: str | None,
    url: str | None,
) -> HeatmapReport:
    import asyncio

    pinned = _parse_today(today)
    config = resolve_config(
        {
            "activity_file": path,
            "source": source,
            "activity_url": url,
        }
    )

    try:
        return asyncio.run(_build_report(config, pinned))
    except ActivitySourceError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def heatmap(
    path: PathArg = None,
    today: TodayOpt = None,
    source: SourceOpt = None,
    url: UrlOpt = None,
    json_output: JsonOpt = False,
):
    """[bold green]Draw[/bold green] the 365-day study heatmap with its summary."""
    from studymap.interface.render import render_grid, render_stats

    report = _load_report(path, today, source, url)

    if json_output:
        typer.echo(json.dumps(_to_jsonable(report), indent=2))
        return

    typer.echo(render_grid(report.grid))
    typer.echo("")
    typer.echo(render_stats(report.stats))


@app.command()
def stats(
    path: PathArg = None,
    today: TodayOpt = None,
    source: SourceOpt = None,
    url: UrlOpt = None,
    json_output: JsonOpt = False,
):
    """Show summary statistics for the heatmap window."""
    from studymap.interface.render import render_stats

    report = _load_report(path, today, source, url)

    if json_output:
        typer.echo(json.dumps(_to_jsonable(report.stats), indent=2))
    else:
        typer.echo(render_stats(report.stats))


@app.command()
def streak(
    path: PathArg = None,
    today: TodayOpt = None,
    source: SourceOpt = None,
    url: UrlOpt = None,
    json_output: JsonOpt = False,
):
    """Show current and longest study streaks."""
    from studymap.interface.render import render_streak

    report = _load_report(path, today, source, url)

    if json_output:
        typer.echo(json.dumps(_to_jsonable(report.streak), indent=2))
    else:
        typer.echo(render_streak(report.streak))


@app.command()
def server(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8777,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes.")] = False,
):
    """Run the studymap HTTP server."""
    import uvicorn

    uvicorn.run("studymap.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
