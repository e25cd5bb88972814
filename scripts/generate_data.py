"""
Sample data script for Alura Store Analytics.

Writes a deterministic store CSV (header + one row per store) that the
`analyze` and `report` commands can ingest.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from pathlib import Path

import typer

from store_analytics.ingestion import SAMPLE_CATEGORIES, SAMPLE_STORE_NAMES

app = typer.Typer(help="Generate a synthetic store CSV.")

HEADER = ["store", "category", "revenue", "sales", "growth", "efficiency"]


def _generate_rows_csv(csv_path: Path, rows: int, seed: int) -> None:
    rng = random.Random(seed)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for i in range(rows):
            base = SAMPLE_STORE_NAMES[i % len(SAMPLE_STORE_NAMES)]
            cycle = i // len(SAMPLE_STORE_NAMES)
            revenue = round(rng.uniform(50_000, 250_000), 2)
            writer.writerow(
                [
                    base if cycle == 0 else f"{base}-{cycle + 1}",
                    rng.choice(SAMPLE_CATEGORIES),
                    f"{revenue:.2f}",
                    int(revenue // rng.uniform(100, 300)),
                    f"{rng.uniform(-10, 20):.2f}",
                    f"{rng.uniform(60, 100):.2f}",
                ]
            )


@app.command()
def main(
    rows: int = typer.Option(
        24,
        "--rows",
        "-r",
        help="Number of stores to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path = typer.Option(
        Path("data/stores.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
) -> None:
    """
    Generate a synthetic store CSV.
    """
    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)
    typer.echo(f"Generating {rows:,} stores -> {output} (seed={seed})")
    _generate_rows_csv(output, rows=rows, seed=seed)
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
