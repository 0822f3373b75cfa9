from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar
from typing_extensions import override

from fuelrace.core.rounding import round2

if TYPE_CHECKING:
    from fuelrace.core.registry import NameRegistry
    from fuelrace.core.types import ManeuverName, VehicleKind

# Kilometres per litre of a plain combustion engine.
KM_PER_LITRE: float = 10.0


@dataclass(eq=False)
class VehicleBase(ABC):
    """Fuel and distance bookkeeping shared by every vehicle kind.

    Subclasses only decide how many kilometres a litre is worth and what
    their maneuver costs. Vehicles compare by identity.
    """

    kind: ClassVar[VehicleKind]
    maneuver: ClassVar[ManeuverName]

    name: str
    brand: str
    model: str
    fuel_capacity: float
    fuel: float
    distance: float = 0.0
    registry: NameRegistry | None = field(default=None, repr=False, kw_only=True)
    refuel_stops: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        # Validate the stored (rounded) values, not the raw input
        self.fuel_capacity = round2(self.fuel_capacity)
        self.fuel = round2(self.fuel)
        self.distance = round2(self.distance)

        if self.fuel_capacity <= 0:
            msg = "Fuel capacity must be greater than zero."
            raise ValueError(msg)
        if self.fuel < 0:
            msg = "Fuel cannot be negative."
            raise ValueError(msg)
        if self.distance < 0:
            msg = "Distance cannot be negative."
            raise ValueError(msg)
        if self.fuel > self.fuel_capacity:
            msg = f"Fuel ({self.fuel}) cannot exceed capacity ({self.fuel_capacity})."
            raise ValueError(msg)

        # Claim the name last so a rejected vehicle doesn't burn it
        if self.registry is not None:
            _ = self.registry.claim(self.name)

    @property
    def repr(self) -> str:
        return f"{self.kind}:{self.name}"

    @abstractmethod
    def efficiency(self) -> float:
        """Kilometres per litre at the current configuration."""

    @abstractmethod
    def maneuver_cost(self) -> float:
        """Fuel drained by one maneuver, before clamping at an empty tank."""

    def autonomy(self) -> float:
        return round2(self.fuel * self.efficiency())

    def travel(self, distance: float) -> float:
        """
        Drive ``distance`` km and return what could not be covered.

        Runs the tank dry when the distance is out of reach; the caller is
        responsible for refuelling and sending the rest again.
        """
        if distance < 0:
            msg = f"Cannot travel a negative distance ({distance})."
            raise ValueError(msg)

        reach = self.autonomy()
        if distance >= reach:
            self.fuel = 0.0
            self.distance = round2(self.distance + reach)
            unconsumed = round2(distance - reach)
        else:
            self.fuel = round2(self.fuel - distance / self.efficiency())
            self.distance = round2(self.distance + distance)
            unconsumed = 0.0

        self._check_tank()
        return unconsumed

    def refuel(self, amount: float | None = None) -> float:
        """Add fuel and return the litres that actually went in.

        No amount (or a non-positive one) fills the tank.
        """
        previous = self.fuel
        if amount is None or amount <= 0 or previous + amount >= self.fuel_capacity:
            self.fuel = self.fuel_capacity
        else:
            self.fuel = round2(previous + amount)

        self._check_tank()
        return round2(self.fuel - previous)

    def perform_maneuver(self) -> float:
        self.fuel = max(0.0, round2(self.fuel - self.maneuver_cost()))
        self._check_tank()
        return self.fuel

    def describe(self) -> str:
        return f"The {self.brand} {self.model} can travel {self.autonomy():.2f} km."

    def _check_tank(self) -> None:
        assert 0.0 <= self.fuel <= self.fuel_capacity, (
            f"{self.repr} fuel {self.fuel} outside [0, {self.fuel_capacity}]"
        )

    @override
    def __str__(self) -> str:
        return (
            f"{self.kind}: {self.name}, Brand: {self.brand}, Model: {self.model}, "
            f"Distance: {self.distance:.2f} km, Fuel: {self.fuel:.2f} L"
        )
