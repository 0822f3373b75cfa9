"""CLI command for running a single race."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa
import msgspec
from rich.console import Console

from fuelrace.cli.converters import parse_vehicle_specs
from fuelrace.engine.logging import LOGGER_NAME, configure_logging
from fuelrace.engine.scenario import RaceScenario
from fuelrace.report import render_report
from fuelrace.simulation.config import (
    DEFAULT_RACE_NAME,
    DEFAULT_TARGET_DISTANCE,
    PartialRaceConfig,
    RaceConfig,
    VehicleConfig,
    default_roster,
)

logger = logging.getLogger(__name__)


def run_console_race(
    config: RaceConfig,
    *,
    show_history: bool = True,
    console: Console | None = None,
) -> None:
    """
    Execute the race and print results to stdout.

    Args:
        config: The race configuration.
        show_history: Also print every vehicle's action history.
        console: Where to render the report; defaults to stdout.
    """
    logger.info(config.repr)
    logger.info("-" * 20)

    try:
        scenario = RaceScenario.from_config(config)
    except ValueError as e:
        msg = f"Invalid race setup: {e}"
        raise cappa.Exit(msg, code=1) from e

    try:
        results = scenario.run_race()
    except ValueError as e:
        msg = f"Invalid race setup: {e}"
        raise cappa.Exit(msg, code=1) from e
    except Exception:
        logger.exception("Race Error")
        raise

    logger.info("-" * 20)
    logger.info(f"Replay with: --encoding {config.encoded}")
    render_report(results, console, show_history=show_history)


@cappa.command(
    name="race",
    help="Run a single race. Uses a car and a motorcycle with half-full tanks if no vehicles are given.",
)
@dataclass
class RaceCommand:
    vehicles: Annotated[
        list[VehicleConfig] | None,
        cappa.Arg(
            short="-v",
            long="--vehicles",
            parse=parse_vehicle_specs,
            num_args=-1,
            help="Space separated vehicles as Kind:Name[:key=value,...].",
        ),
    ] = None
    target: Annotated[
        float | None,
        cappa.Arg(short="-t", long="--target", help="Target distance in km (min 1000)."),
    ] = None
    name: Annotated[
        str | None,
        cappa.Arg(short="-n", long="--name", help="Race name."),
    ] = None
    seed: Annotated[
        int | None,
        cappa.Arg(short="-s", long="--seed", help="RNG seed."),
    ] = None

    config_file: Annotated[
        Path | None,
        cappa.Arg(short="-c", long="--config", help="Path to TOML config file."),
    ] = None
    encoding: Annotated[
        str | None,
        cappa.Arg(short="-e", long="--encoding", help="Base64 encoded configuration."),
    ] = None

    no_history: Annotated[
        bool,
        cappa.Arg(long="--no-history", help="Only print the standings."),
    ] = False
    quiet: Annotated[
        bool,
        cappa.Arg(short="-q", long="--quiet", help="Suppress step-by-step engine logs."),
    ] = False

    def resolve_config(self) -> RaceConfig:
        # Default State
        final_vehicles: list[VehicleConfig] = list(default_roster())
        final_name: str = DEFAULT_RACE_NAME
        final_target: float = DEFAULT_TARGET_DISTANCE
        final_seed: int = random.randint(0, 1000000)

        # 1. Load File (Middle Priority)
        if self.config_file:
            if not self.config_file.exists():
                msg = f"Config file not found: {self.config_file}"
                raise cappa.Exit(msg, code=1)
            try:
                file_conf = PartialRaceConfig.from_toml(self.config_file)
            except msgspec.DecodeError as e:
                msg = f"Invalid TOML config: {e}"
                raise cappa.Exit(msg, code=1)  # noqa: B904

            if file_conf.vehicles:
                final_vehicles = file_conf.vehicles
            if file_conf.name:
                final_name = file_conf.name
            if file_conf.target_distance is not None:
                final_target = file_conf.target_distance
            if file_conf.seed is not None:
                final_seed = file_conf.seed

        # 2. Load Encoding (High Priority - Overrides File)
        if self.encoding:
            try:
                decoded = RaceConfig.from_encoded(self.encoding)
            except Exception as e:  # noqa: BLE001
                msg = f"Invalid encoding: {e}"
                raise cappa.Exit(msg, code=1)  # noqa: B904
            final_vehicles = list(decoded.vehicles)
            final_name = decoded.name
            final_target = decoded.target_distance
            final_seed = decoded.seed

        # 3. CLI Args (Highest Priority - Overrides Everything)
        if self.vehicles:
            final_vehicles = self.vehicles
        if self.name:
            final_name = self.name
        if self.target is not None:
            final_target = self.target
        if self.seed is not None:
            final_seed = self.seed

        return RaceConfig(
            vehicles=tuple(final_vehicles),
            seed=final_seed,
            name=final_name,
            target_distance=final_target,
        )

    def __call__(self):
        configure_logging()
        if self.quiet:
            logging.getLogger(LOGGER_NAME).setLevel(logging.WARNING)

        run_console_race(self.resolve_config(), show_history=not self.no_history)
