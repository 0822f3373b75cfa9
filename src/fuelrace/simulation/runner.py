"""Core simulation execution logic."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tqdm import tqdm

from fuelrace.engine.scenario import RaceScenario

if TYPE_CHECKING:
    from fuelrace.simulation.config import RaceConfig


@dataclass(slots=True, frozen=True)
class VehicleResult:
    """Flat per-vehicle row of a finished race."""

    config_hash: str
    seed: int
    vehicle_name: str
    kind: str
    rank: int
    distance: float
    refuel_stops: int
    won: bool


@dataclass(slots=True)
class SimulationResult:
    """Result of a single race simulation."""

    config_hash: str
    seed: int
    timestamp: float
    execution_time_ms: float
    step_count: int
    winner: str
    vehicles: list[VehicleResult]


def run_single_simulation(
    config: RaceConfig,
    *,
    verbose: bool = False,
    announce: bool = False,
) -> SimulationResult:
    """
    Execute one race from its config and return flat results.
    Every run gets its own name registry, so the same roster can be replayed.
    """
    if announce:
        tqdm.write(f"▶ Simulating: {config.repr}")

    start_time = time.perf_counter()
    timestamp = time.time()
    config_hash = config.compute_hash()

    scenario = RaceScenario.from_config(config, verbose=verbose)
    engine = scenario.engine
    results = scenario.run_race()

    execution_time_ms = (time.perf_counter() - start_time) * 1000
    winner = engine.winner
    assert winner is not None, "race loop returned without a winner"

    if announce:
        tqdm.write(
            f"🏁 Done in {execution_time_ms:.2f}ms | {engine.log_context.step} steps | 1st: {winner.name}",
        )

    return SimulationResult(
        config_hash=config_hash,
        seed=config.seed,
        timestamp=timestamp,
        execution_time_ms=execution_time_ms,
        step_count=engine.log_context.step,
        winner=winner.name,
        vehicles=[
            VehicleResult(
                config_hash=config_hash,
                seed=config.seed,
                vehicle_name=r.vehicle.name,
                kind=r.vehicle.kind,
                rank=r.rank,
                distance=r.distance,
                refuel_stops=r.refuel_stops,
                won=r.vehicle is winner,
            )
            for r in results
        ],
    )
