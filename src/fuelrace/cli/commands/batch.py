from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa
import msgspec
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from fuelrace.engine.logging import LOGGER_NAME
from fuelrace.simulation.config import BatchConfig, merge_config
from fuelrace.simulation.metrics import compute_batch_summary, mean_step_count
from fuelrace.simulation.runner import SimulationResult, run_single_simulation


def summary_table(results: list[SimulationResult]) -> Table:
    summary = compute_batch_summary(results)
    table = Table(title=f"{len(results)} races, {mean_step_count(results):.1f} steps on average")
    table.add_column("Vehicle")
    table.add_column("Kind")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("Mean rank", justify="right")
    table.add_column("Mean refuel stops", justify="right")
    for row in summary.iter_rows(named=True):
        table.add_row(
            row["vehicle_name"],
            row["kind"],
            str(row["wins"]),
            f"{row['win_rate']:.1%}",
            f"{row['mean_rank']:.2f}",
            f"{row['mean_refuel_stops']:.2f}",
        )
    return table


@cappa.command(name="batch", help="Run many seeded races of one setup and summarise the winners.")
@dataclass
class BatchCommand:
    config: Annotated[
        Path | None,
        cappa.Arg(short="-c", long="--config", help="Path to TOML batch config file."),
    ] = None

    runs: Annotated[
        int | None,
        cappa.Arg(long="--runs", help="Override number of races."),
    ] = None

    seed_offset: Annotated[
        int | None,
        cappa.Arg(long="--seed-offset", help="Offset for RNG seeds."),
    ] = None

    def load_config(self) -> BatchConfig:
        if self.config is None:
            return BatchConfig()
        if not self.config.exists():
            msg = f"Config file not found: {self.config}"
            raise cappa.Exit(msg, code=1)
        try:
            return BatchConfig.from_toml(self.config)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            msg = f"Invalid config file: {e}"
            raise cappa.Exit(msg, code=1) from e

    def __call__(self) -> None:
        logging.getLogger(LOGGER_NAME).setLevel(logging.CRITICAL)

        batch = self.load_config()
        runs = self.runs if self.runs is not None else batch.runs
        seed_offset = self.seed_offset if self.seed_offset is not None else batch.seed_offset
        if runs <= 0:
            msg = f"Number of runs must be positive, got {runs}."
            raise cappa.Exit(msg, code=1)

        base = merge_config(batch.race, seed=seed_offset)
        tqdm.write(f"Setup: {base.repr}")
        tqdm.write(f"Runs: {runs}")
        tqdm.write("-" * 30)

        results: list[SimulationResult] = []
        with tqdm(total=runs, unit="race", desc="Simulating") as pbar:
            for i in range(runs):
                config = base.with_seed(seed_offset + i)
                try:
                    results.append(run_single_simulation(config))
                except ValueError as e:
                    msg = f"Invalid race setup: {e}"
                    raise cappa.Exit(msg, code=1) from e
                pbar.update(1)

        Console().print(summary_table(results))
