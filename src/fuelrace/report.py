"""Console rendering of race results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fuelrace.core.state import RaceResult


def standings_lines(results: Sequence[RaceResult]) -> list[str]:
    """1-indexed rank list, best distance first."""
    ordered = sorted(results, key=lambda r: r.rank)
    return [f"{r.rank} -> {r.vehicle.name} ({r.distance:.2f} km)" for r in ordered]


def standings_table(results: Sequence[RaceResult], title: str = "Standings") -> Table:
    table = Table(title=title)
    table.add_column("Rank", justify="right")
    table.add_column("Vehicle")
    table.add_column("Kind")
    table.add_column("Distance (km)", justify="right")
    table.add_column("Refuel stops", justify="right")
    for r in sorted(results, key=lambda r: r.rank):
        table.add_row(
            str(r.rank),
            r.vehicle.name,
            r.vehicle.kind,
            f"{r.distance:.2f}",
            str(r.refuel_stops),
        )
    return table


def render_report(
    results: Sequence[RaceResult],
    console: Console | None = None,
    *,
    show_history: bool = True,
) -> None:
    """Print the standings and, per ranked vehicle, its history in order."""
    console = console or Console()
    console.print(standings_table(results))

    if not show_history:
        return

    for r in sorted(results, key=lambda r: r.rank):
        console.rule(f"{r.rank}. {r.vehicle.name}")
        if not r.history:
            console.print("[grey50](no actions)[/grey50]")
        for i, line in enumerate(r.history, start=1):
            console.print(f"{i:>4}  {line}", highlight=False)
