from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer

from store_analytics.artifacts import persist_json
from store_analytics.config import get_settings
from store_analytics.errors import ReportError
from store_analytics.feed import FeedSnapshot, RealtimeFeed
from store_analytics.pipeline import AnalyticsPipeline, PipelineOutcome
from store_analytics.reporter import print_feed_snapshot, print_report_summary, print_state
from store_analytics.reports import available_reports, persist_report, prepare_report
from store_analytics.scoring.registry import available_strategies
from store_analytics.utils.logging import configure_logging
from store_analytics.utils.randomness import SystemRandomSource

app = typer.Typer(help="Alura Store Analytics CLI.")


def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _finish(outcome: PipelineOutcome, as_json: bool, persist: bool) -> None:
    if not outcome.ok:
        typer.secho(f"Analysis failed ({outcome.source}): {outcome.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    payload = outcome.state.to_payload()
    if persist:
        latest, archive = persist_json(payload, get_settings().results_dir, "analysis")
        typer.echo(f"Saved {latest} and {archive}", err=True)
    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        print_state(outcome.state)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | delimiter={settings.csv_delimiter!r} "
        f"max_upload={settings.max_upload_bytes} sample_size={settings.sample_size} | "
        f"strategies={','.join(settings.ai_strategy_names)} "
        f"(available: {', '.join(available_strategies())}) | "
        f"entanglement={settings.entanglement} coherence={settings.coherence}"
    )


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="CSV file with a header line."),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Field delimiter."),
    as_json: bool = typer.Option(False, "--json", help="Print the analysis as JSON."),
    persist: bool = typer.Option(False, "--persist", help="Write the analysis to RESULTS_DIR."),
) -> None:
    """
    Ingest a CSV file and print KPIs, ranking and insights.
    """
    _setup()
    outcome = AnalyticsPipeline().ingest_file(path, delimiter)
    _finish(outcome, as_json, persist)


@app.command()
def sample(
    size: Optional[int] = typer.Option(None, "--size", "-n", help="Number of stores (default from settings)."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible samples."),
    as_json: bool = typer.Option(False, "--json", help="Print the analysis as JSON."),
    persist: bool = typer.Option(False, "--persist", help="Write the analysis to RESULTS_DIR."),
) -> None:
    """
    Analyze a synthetic store sample.
    """
    _setup()
    rng = SystemRandomSource(seed) if seed is not None else None
    outcome = AnalyticsPipeline().generate_sample(size, rng)
    _finish(outcome, as_json, persist)


@app.command()
def report(
    report_type: str = typer.Argument(..., help=f"One of: {', '.join(available_reports())}."),
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", help="CSV file; a sample is used if omitted."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Defaults to RESULTS_DIR."),
    as_json: bool = typer.Option(False, "--json", help="Print the report payload as JSON."),
) -> None:
    """
    Build one report payload and persist it as JSON.
    """
    _setup()
    pipeline = AnalyticsPipeline()
    outcome = pipeline.ingest_file(input_path) if input_path else pipeline.generate_sample()
    if not outcome.ok:
        typer.secho(f"Analysis failed ({outcome.source}): {outcome.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    state = outcome.state
    try:
        payload = prepare_report(
            report_type, state.snapshot, state.records, pipeline.scorer.quantum.metrics()
        )
    except ReportError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    latest, archive = persist_report(payload, output_dir or get_settings().results_dir)
    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        print_report_summary(payload)
    typer.echo(f"Saved {latest} and {archive}", err=True)


@app.command()
def feed(
    ticks: int = typer.Option(3, "--ticks", "-t", min=0, help="Snapshots to produce."),
    interval: Optional[float] = typer.Option(None, "--interval", min=0.0, help="Seconds between snapshots."),
) -> None:
    """
    Stream simulated realtime snapshots to the console.
    """
    _setup()
    realtime = RealtimeFeed(interval=interval)

    async def _consume() -> None:
        queue: asyncio.Queue[FeedSnapshot] = asyncio.Queue()
        producer = asyncio.create_task(realtime.run(queue, ticks))
        for _ in range(ticks):
            print_feed_snapshot(await queue.get())
        await producer

    asyncio.run(_consume())


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
