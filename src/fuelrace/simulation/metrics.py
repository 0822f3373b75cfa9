"""
Aggregate metrics over many simulated races.
Uses Polars for the group-by so batches of thousands of races stay cheap.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

import polars as pl

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fuelrace.simulation.runner import SimulationResult

SUMMARY_COLUMNS = [
    "vehicle_name",
    "kind",
    "races",
    "wins",
    "win_rate",
    "mean_rank",
    "mean_refuel_stops",
    "mean_distance",
]


def results_frame(results: Sequence[SimulationResult]) -> pl.DataFrame:
    """One row per vehicle per race, plus the race's step count."""
    rows = [
        {**asdict(v), "step_count": r.step_count}
        for r in results
        for v in r.vehicles
    ]
    return pl.DataFrame(rows)


def compute_batch_summary(results: Sequence[SimulationResult]) -> pl.DataFrame:
    """
    Per-vehicle summary across a batch.

    Returns:
        DataFrame with SUMMARY_COLUMNS, sorted by wins (desc) then name.
    """
    if not results:
        return pl.DataFrame(
            schema={
                "vehicle_name": pl.String,
                "kind": pl.String,
                "races": pl.UInt32,
                "wins": pl.UInt32,
                "win_rate": pl.Float64,
                "mean_rank": pl.Float64,
                "mean_refuel_stops": pl.Float64,
                "mean_distance": pl.Float64,
            },
        )

    df = results_frame(results)
    return (
        df.group_by(["vehicle_name", "kind"])
        .agg(
            pl.len().alias("races"),
            pl.col("won").sum().alias("wins"),
            pl.col("rank").mean().alias("mean_rank"),
            pl.col("refuel_stops").mean().alias("mean_refuel_stops"),
            pl.col("distance").mean().alias("mean_distance"),
        )
        .with_columns((pl.col("wins") / pl.col("races")).alias("win_rate"))
        .select(SUMMARY_COLUMNS)
        .sort(["wins", "vehicle_name"], descending=[True, False])
    )


def mean_step_count(results: Sequence[SimulationResult]) -> float:
    if not results:
        return 0.0
    return pl.Series([r.step_count for r in results]).mean()  # pyright: ignore[reportReturnType]
