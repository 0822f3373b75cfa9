from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from fuelrace.core.registry import NameRegistry
from fuelrace.engine.race_engine import RaceEngine
from fuelrace.engine.randomness import ScriptedRandomSource, SeededRandomSource
from fuelrace.simulation.config import DEFAULT_RACE_NAME, DEFAULT_TARGET_DISTANCE
from fuelrace.vehicles import Car, Motorcycle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fuelrace.core.protocols import RandomSource
    from fuelrace.core.state import RaceResult
    from fuelrace.simulation.config import RaceConfig, VehicleConfig
    from fuelrace.vehicles import Vehicle


def build_vehicle(config: VehicleConfig, registry: NameRegistry) -> Vehicle:
    match config.kind:
        case "Car":
            return Car(
                config.name,
                config.brand,
                config.model,
                config.fuel_capacity,
                config.fuel,
                config.distance,
                registry=registry,
                hybrid=config.hybrid,
            )
        case "Motorcycle":
            return Motorcycle(
                config.name,
                config.brand,
                config.model,
                config.fuel_capacity,
                config.fuel,
                config.distance,
                registry=registry,
                displacement=config.displacement,
            )
        case _:
            assert_never(config.kind)


class RaceScenario:
    """
    A reusable harness that assembles vehicles and wraps the RaceEngine.

    Owns the name registry for the vehicles it builds. Pass ``picks`` and
    ``quotas`` to script the random draws, or a ``seed`` for a real PRNG.
    """

    def __init__(
        self,
        vehicles_config: Sequence[VehicleConfig],
        *,
        target_distance: float = DEFAULT_TARGET_DISTANCE,
        name: str = DEFAULT_RACE_NAME,
        seed: int | None = None,
        picks: Sequence[int] | None = None,
        quotas: Sequence[float] | None = None,
        registry: NameRegistry | None = None,
        verbose: bool = True,
    ) -> None:
        self.registry: NameRegistry = registry if registry is not None else NameRegistry()

        # 1. Build vehicles, each claiming its name
        self.vehicles: list[Vehicle] = [
            build_vehicle(cfg, self.registry) for cfg in vehicles_config
        ]

        # 2. Pick the random source
        if picks is not None or quotas is not None:
            rng: RandomSource = ScriptedRandomSource.from_script(picks or (), quotas or ())
        else:
            rng = SeededRandomSource.from_seed(seed)

        # 3. Initialize Engine
        self.engine: RaceEngine = RaceEngine(
            name=name,
            target_distance=target_distance,
            participants=self.vehicles,
            rng=rng,
            verbose=verbose,
        )

    @classmethod
    def from_config(
        cls,
        config: RaceConfig,
        registry: NameRegistry | None = None,
        *,
        verbose: bool = True,
    ) -> RaceScenario:
        return cls(
            config.vehicles,
            target_distance=config.target_distance,
            name=config.name,
            seed=config.seed,
            registry=registry,
            verbose=verbose,
        )

    def run_race(self) -> list[RaceResult]:
        self.engine.start()
        return self.engine.results()

    def run_steps(self, n: int) -> None:
        for _ in range(n):
            if self.engine.finished:
                return
            _ = self.engine.step()

    def get_vehicle(self, idx: int) -> Vehicle:
        return self.vehicles[idx]
