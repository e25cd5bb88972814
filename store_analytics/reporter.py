from __future__ import annotations

from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from store_analytics.aggregator import performance_tier
from store_analytics.feed import FeedSnapshot
from store_analytics.pipeline import PipelineState


def _money(value: Optional[float]) -> str:
    return f"{value:,.2f}" if value is not None else "N/A"


def _score(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else "N/A"


def print_state(state: PipelineState, console: Optional[Console] = None) -> None:
    """
    Render KPIs, the quantum-score ranking and the insights as rich tables.

    An empty state prints a single notice instead of empty tables.
    """
    console = console or Console()
    snapshot = state.snapshot

    if snapshot.is_empty:
        console.print("[yellow]No records loaded.[/yellow]")
        for insight in state.insights:
            console.print(f"[dim]{insight.text}[/dim]")
        return

    kpis = Table(title=f"Alura Store Analytics [dim]({state.source})[/dim]", box=box.ROUNDED)
    kpis.add_column("Metric", style="cyan", no_wrap=True)
    kpis.add_column("Value", justify="right", style="bold green")
    kpis.add_row("Total revenue", _money(snapshot.total_revenue))
    kpis.add_row("Stores", str(snapshot.record_count))
    kpis.add_row("Average ticket", _money(snapshot.average_ticket))
    kpis.add_row("Top category", snapshot.top_category or "N/A")
    kpis.add_row("Average growth %", _score(snapshot.average_growth))
    kpis.add_row("Average quantum score", _score(snapshot.average_quantum_score))
    kpis.add_row("Average AI score", _score(snapshot.average_ai_score))
    console.print(kpis)

    ranking = Table(
        title="Performance Ranking",
        box=box.ROUNDED,
        caption="Sorted by quantum score (descending)",
    )
    ranking.add_column("#", justify="right", style="dim")
    ranking.add_column("Store", style="cyan", no_wrap=True)
    ranking.add_column("Category", style="magenta")
    ranking.add_column("Revenue", justify="right", style="green")
    ranking.add_column("AI", justify="right", style="yellow")
    ranking.add_column("Quantum", justify="right", style="bold green")
    ranking.add_column("Tier", style="blue")
    ranking.add_column("Trend", style="red")

    for position, record in enumerate(snapshot.ranking, start=1):
        trend = "N/A"
        if record.prediction is not None:
            trend = f"{record.prediction.trend} ({record.prediction.confidence:.0f}%)"
        ranking.add_row(
            str(position),
            record.name,
            record.category,
            _money(record.revenue),
            _score(record.ai_score),
            _score(record.quantum_score),
            performance_tier(record.quantum_score),
            trend,
        )
    console.print(ranking)

    insights = Table(title="Insights", box=box.ROUNDED, show_header=False)
    insights.add_column("Tag", style="cyan", no_wrap=True)
    insights.add_column("Insight")
    for insight in state.insights:
        insights.add_row(insight.tag, insight.text)
    console.print(insights)


def print_report_summary(payload: Dict[str, Any], console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title=payload.get("title", "Report"), box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")
    table.add_row("Stores", str(payload.get("total_stores", 0)))
    table.add_row("Total revenue", _money(payload.get("total_revenue")))
    table.add_row("Average growth %", _score(payload.get("average_growth")))
    top = payload.get("top_store") or {}
    bottom = payload.get("bottom_store") or {}
    table.add_row("Top store (revenue)", str(top.get("store", "N/A")))
    table.add_row("Bottom store (revenue)", str(bottom.get("store", "N/A")))
    for key, label in (("recommendations", "Recommendations"), ("quantum_recommendations", "Quantum recommendations")):
        if key in payload:
            table.add_row(label, str(len(payload[key])))
    if "anomalies" in payload:
        table.add_row("Anomalies", str(len(payload["anomalies"])))
    console.print(table)


def print_feed_snapshot(snapshot: FeedSnapshot, console: Optional[Console] = None) -> None:
    console = console or Console()
    sales = snapshot.sales_update
    market = snapshot.market_data
    system = snapshot.system_metrics
    console.print(
        f"[cyan]#{snapshot.sequence}[/cyan] {snapshot.timestamp:%H:%M:%S} | "
        f"sales +{sales.new_sales} ({sales.revenue_change:+,.2f}) "
        f"customers={sales.active_customers} | "
        f"market={market.trend_indicator} vol={market.volatility:.3f} "
        f"sentiment={market.sentiment_score:.2f} | "
        f"cpu={system.cpu_usage:.1f}% mem={system.memory_usage:.1f}% "
        f"rt={system.response_time_ms:.0f}ms"
    )


__all__ = ["print_feed_snapshot", "print_report_summary", "print_state"]
