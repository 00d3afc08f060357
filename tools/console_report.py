"""
KENOBRAIN — Console Report

Renders a GameReport as rich tables: one table per pick level, then a
summary-by-picks table and the glossary notes.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keno_engine.report import GameReport, PickSummary


def format_multiplier(mult: Fraction) -> str:
    if mult <= 0:
        return "-"
    return f"{float(mult):g}x"


def format_pct(value: Fraction, places: int = 2) -> str:
    return f"{float(value) * 100:.{places}f}%"


def pick_table(summary: PickSummary) -> Table:
    label = "NUMBER" if summary.picks == 1 else "NUMBERS"
    table = Table(title=f"PICK {summary.picks} {label}", title_style="bold cyan",
                  header_style="bold")
    table.add_column("Hits", justify="right")
    table.add_column("Probability", justify="right")
    table.add_column("Odds")
    table.add_column("Payout", justify="right")
    table.add_column("EV Contribution", justify="right")

    for o in summary.outcomes:
        table.add_row(
            str(o.hits),
            format_pct(o.probability, 6),
            o.odds_description,
            format_multiplier(o.payout_multiplier),
            f"{float(o.ev_contribution):.6f}" if o.pays else "-",
        )
    return table


def summary_table(report: GameReport) -> Table:
    table = Table(title="SUMMARY BY PICKS", title_style="bold cyan", header_style="bold")
    table.add_column("Picks", justify="right")
    table.add_column("Expected Value", justify="right")
    table.add_column("House Edge", justify="right")
    table.add_column("RTP", justify="right")
    table.add_column("Max Payout", justify="right")
    table.add_column("Best Odds to Win")

    for s in report.pick_summaries:
        table.add_row(
            str(s.picks),
            f"{float(s.total_ev):.6f}",
            format_pct(s.house_edge),
            format_pct(s.rtp),
            format_multiplier(s.max_payout) if s.has_payout else "0x",
            s.best_odds_to_win,
        )
    return table


def render_report(report: GameReport, console: Optional[Console] = None,
                  picks: Optional[int] = None, source: str = "") -> Console:
    """Print the analysis. `picks` limits the per-level tables to one level."""
    console = console or Console()
    c = report.constants

    header = (f"Game Rules: {c.pool_size} numbers in pool, "
              f"{c.drawn_count} drawn at random\n"
              f"Players can pick between 1 and {c.max_picks} numbers")
    if source:
        header = f"Payouts: {source}\n" + header
    console.print(Panel(header, title="[bold]KENO ODDS & PAYOUT ANALYSIS[/bold]",
                        border_style="cyan"))

    levels = report.pick_summaries
    if picks is not None:
        levels = [s for s in levels if s.picks == picks]

    for s in levels:
        console.print()
        console.print(pick_table(s))
        console.print(f"  Expected Value: {float(s.total_ev):.6f} per $1 bet")
        console.print(f"  House Edge: {format_pct(s.house_edge)}")
        console.print(f"  Return to Player (RTP): {format_pct(s.rtp)}")

    console.print()
    console.print(summary_table(report))
    console.print(Panel(
        "EV = Expected Value (how much you get back per $1 wagered on average)\n"
        "House Edge = How much the house keeps on average\n"
        "RTP = Return to Player percentage",
        title="Notes", border_style="dim",
    ))
    return console
