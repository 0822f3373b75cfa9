from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from fuelrace.core.rounding import round2
from fuelrace.core.state import ActionLog, RaceAction, RaceResult, Standings
from fuelrace.core.types import RaceStatus
from fuelrace.engine import ENGINE_ID_COUNTER
from fuelrace.engine.flow import check_race_over_condition
from fuelrace.engine.logging import LOGGER_NAME, ContextFilter, LogContext
from fuelrace.engine.movement import advance_vehicle

if TYPE_CHECKING:
    from fuelrace.core.protocols import RandomSource
    from fuelrace.vehicles import Vehicle

MIN_TARGET_DISTANCE: float = 1000.0
MIN_QUOTA: float = 10.0
MAX_QUOTA: float = 200.0


@dataclass
class RaceEngine:
    name: str
    target_distance: float
    participants: list[Vehicle]
    rng: RandomSource
    log_context: LogContext = field(default_factory=LogContext)
    status: RaceStatus = RaceStatus.NOT_STARTED
    winner: Vehicle | None = None
    action_log: ActionLog = field(default_factory=ActionLog)
    standings: Standings = field(init=False)

    # Callback for external observers
    on_action: Callable[[RaceEngine, RaceAction], None] | None = None
    verbose: bool = True
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validates the setup and opens a standings and log entry per vehicle."""
        if not self.name.strip():
            msg = "Race name must not be empty."
            raise ValueError(msg)
        if self.target_distance < MIN_TARGET_DISTANCE:
            msg = (
                f"Target distance must be at least {MIN_TARGET_DISTANCE:.0f} km, "
                f"got {self.target_distance}."
            )
            raise ValueError(msg)

        seen: set[str] = set()
        for vehicle in self.participants:
            if vehicle.name in seen:
                msg = f"Vehicle name {vehicle.name!r} appears twice in race {self.name!r}."
                raise ValueError(msg)
            seen.add(vehicle.name)

        self.participants = list(self.participants)
        self.log_context.engine_id = next(ENGINE_ID_COUNTER)

        base = logging.getLogger(LOGGER_NAME)
        self._logger = base.getChild(f"engine.{self.log_context.engine_id}")
        if self.verbose:
            self._logger.addFilter(ContextFilter(self))

        self.standings = Standings.from_vehicles(self.participants)
        for vehicle in self.participants:
            self.action_log.open(vehicle.name)

    @property
    def running(self) -> bool:
        return self.status is RaceStatus.RUNNING

    @property
    def finished(self) -> bool:
        return self.status is RaceStatus.FINISHED

    # --- Main Loop ---
    def start(self) -> None:
        """Run the race until a vehicle reaches the target distance."""
        self.begin()
        while self.running:
            _ = self.step()

    def begin(self) -> None:
        """Move from NOT_STARTED to RUNNING without driving anyone yet."""
        if not self.participants:
            msg = f"Race {self.name!r} has no participants and would never end."
            raise ValueError(msg)
        if self.status is not RaceStatus.NOT_STARTED:
            msg = f"Race {self.name!r} was already started ({self.status.name})."
            raise RuntimeError(msg)

        self.status = RaceStatus.RUNNING
        self.log_info(
            f"=== START: {self.name} | {self.target_distance:.2f} km | {len(self.participants)} vehicles ===",
        )

        # A vehicle may already sit on the line before the first step
        _ = check_race_over_condition(self)

    def step(self) -> Vehicle:
        """One iteration: pick a vehicle, drive its quota, update standings."""
        if self.status is RaceStatus.NOT_STARTED:
            self.begin()
        if self.finished:
            msg = f"Race {self.name!r} is finished; no further steps allowed."
            raise RuntimeError(msg)

        vehicle = self.participants[self.rng.choose_index(len(self.participants))]
        self.log_context.start_step(vehicle.repr)

        quota = self.next_quota(vehicle)
        self.log_info(f"=== STEP {self.log_context.step}: {vehicle.repr} drives {quota:.2f} km ===")
        advance_vehicle(self, vehicle, quota)

        self.standings.update(vehicle.name, vehicle.distance)
        _ = check_race_over_condition(self)
        return vehicle

    def next_quota(self, vehicle: Vehicle) -> float:
        draw = self.rng.travel_quota(MIN_QUOTA, MAX_QUOTA)
        return round2(max(0.0, min(draw, self.target_distance - vehicle.distance)))

    def record(self, action: RaceAction) -> None:
        self.action_log.record(action)
        if self.on_action:
            self.on_action(self, action)

    # --- Results ---
    def results(self) -> list[RaceResult]:
        ranked = sorted(self.participants, key=lambda v: v.distance, reverse=True)
        return [
            RaceResult(
                vehicle=vehicle,
                rank=rank,
                distance=vehicle.distance,
                refuel_stops=vehicle.refuel_stops,
                history=self.action_log.history(vehicle.name),
            )
            for rank, vehicle in enumerate(ranked, start=1)
        ]

    # -- Getters for convenience --
    def get_vehicle(self, name: str) -> Vehicle:
        for vehicle in self.participants:
            if vehicle.name == name:
                return vehicle
        msg = f"No vehicle named {name!r} in race {self.name!r}."
        raise KeyError(msg)

    # -- Logging --
    def _log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        """Core logging helper; respects engine verbosity."""
        if not self.verbose:
            return
        self._logger.log(level, msg, *args, **kwargs)

    def log_debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def log_info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)
