"""Race configuration schema using msgspec."""

from __future__ import annotations

import base64
import hashlib
import json
from pathlib import Path

import msgspec

from fuelrace.core.types import VehicleKind  # noqa: TC001 # msgspec resolves it at runtime

DEFAULT_RACE_NAME = "Grand Prix"
DEFAULT_TARGET_DISTANCE = 1000.0


class VehicleConfig(msgspec.Struct, frozen=True):
    """Everything needed to build one vehicle. Kind-specific fields are ignored by the other kind."""

    kind: VehicleKind
    name: str
    brand: str = "Generic"
    model: str = "Standard"
    fuel_capacity: float = 50.0
    fuel: float = 25.0
    distance: float = 0.0
    hybrid: bool = False
    displacement: int = 1000


class RaceConfig(msgspec.Struct, frozen=True):
    """
    Immutable representation of a single race setup.
    Serves as both the execution config and the deduplication key.
    """

    vehicles: tuple[VehicleConfig, ...]
    seed: int
    name: str = DEFAULT_RACE_NAME
    target_distance: float = DEFAULT_TARGET_DISTANCE

    def _canonical(self) -> str:
        return json.dumps(
            msgspec.to_builtins(self),
            sort_keys=True,
            separators=(",", ":"),
        )

    def compute_hash(self) -> str:
        """Compute stable SHA-256 hash of this configuration."""
        return hashlib.sha256(self._canonical().encode("utf-8")).hexdigest()

    @property
    def encoded(self) -> str:
        """Shareable config string (Base64)."""
        return base64.urlsafe_b64encode(self._canonical().encode("utf-8")).decode("ascii")

    @classmethod
    def from_encoded(cls, encoded: str) -> RaceConfig:
        """Decode from shareable string."""
        json_str = base64.urlsafe_b64decode(encoded).decode("utf-8")
        return msgspec.json.decode(json_str, type=cls)

    @classmethod
    def from_toml(cls, path: str | Path) -> RaceConfig:
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)

    def with_seed(self, seed: int) -> RaceConfig:
        return msgspec.structs.replace(self, seed=seed)

    @property
    def repr(self) -> str:
        """String representation for logging."""
        names = ", ".join(f"{v.kind}:{v.name}" for v in self.vehicles)
        return f"{self.name} ({self.target_distance:.0f} km): {names} (Seed: {self.seed})"


class PartialRaceConfig(msgspec.Struct):
    """
    Partial configuration for loading from TOML files.
    """

    vehicles: list[VehicleConfig] | None = None
    seed: int | None = None
    name: str | None = None
    target_distance: float | None = None

    @classmethod
    def from_toml(cls, path: str | Path) -> PartialRaceConfig:
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)


class BatchConfig(msgspec.Struct):
    """TOML-backed configuration for repeated runs of one race setup."""

    runs: int = 100
    seed_offset: int = 0
    race: PartialRaceConfig = msgspec.field(default_factory=PartialRaceConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> BatchConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)


def default_roster() -> tuple[VehicleConfig, ...]:
    """A car and a motorcycle, both starting with half a tank."""
    return (
        VehicleConfig(
            kind="Car",
            name="Aurora",
            brand="Seat",
            model="Leon",
            fuel_capacity=50.0,
            fuel=25.0,
        ),
        VehicleConfig(
            kind="Motorcycle",
            name="Vortex",
            brand="Yamaha",
            model="MT-07",
            fuel_capacity=14.0,
            fuel=7.0,
            displacement=689,
        ),
    )


def merge_config(
    partial: PartialRaceConfig,
    *,
    seed: int,
) -> RaceConfig:
    """Fill the gaps of a partial config with defaults."""
    return RaceConfig(
        vehicles=tuple(partial.vehicles) if partial.vehicles else default_roster(),
        seed=partial.seed if partial.seed is not None else seed,
        name=partial.name or DEFAULT_RACE_NAME,
        target_distance=(
            partial.target_distance
            if partial.target_distance is not None
            else DEFAULT_TARGET_DISTANCE
        ),
    )
