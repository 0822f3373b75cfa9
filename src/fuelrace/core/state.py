from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from fuelrace.core.types import ActionKind, ManeuverName
    from fuelrace.vehicles import Vehicle


@dataclass(frozen=True, slots=True)
class RaceAction:
    """One entry of a vehicle's history. ``amount`` is km for travel, litres otherwise."""

    step: int
    vehicle_name: str
    kind: ActionKind
    amount: float
    fuel_after: float
    maneuver: ManeuverName | None = None

    @property
    def text(self) -> str:
        match self.kind:
            case "Travel":
                return f"{self.vehicle_name} traveled {self.amount:.2f} km."
            case "Refuel":
                return f"{self.vehicle_name} refueled {self.amount:.2f} L."
            case "Maneuver":
                return f"{self.maneuver}: {self.fuel_after:.2f} L of fuel left."
            case _:
                assert_never(self.kind)


@dataclass(slots=True)
class ActionLog:
    """Append-only, per-vehicle history of everything the engine did."""

    _entries: dict[str, list[RaceAction]] = field(default_factory=dict)

    def open(self, vehicle_name: str) -> None:
        _ = self._entries.setdefault(vehicle_name, [])

    def record(self, action: RaceAction) -> None:
        self._entries[action.vehicle_name].append(action)

    def actions(self, vehicle_name: str) -> list[RaceAction]:
        return list(self._entries[vehicle_name])

    def history(self, vehicle_name: str) -> list[str]:
        return [a.text for a in self._entries[vehicle_name]]

    def __contains__(self, vehicle_name: object) -> bool:
        return vehicle_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(slots=True)
class Standings:
    """Latest cumulative distance per vehicle name, in participant order."""

    _distances: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_vehicles(cls, vehicles: Iterable[Vehicle]) -> Standings:
        return cls({v.name: v.distance for v in vehicles})

    def update(self, vehicle_name: str, distance: float) -> None:
        if vehicle_name not in self._distances:
            msg = f"{vehicle_name!r} is not part of these standings."
            raise KeyError(msg)
        self._distances[vehicle_name] = distance

    def distance_of(self, vehicle_name: str) -> float:
        return self._distances[vehicle_name]

    def ranked(self) -> list[tuple[str, float]]:
        # sorted() is stable, so ties keep participant order
        return sorted(self._distances.items(), key=lambda item: item[1], reverse=True)

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(self._distances.items())

    def __len__(self) -> int:
        return len(self._distances)


@dataclass(frozen=True, slots=True)
class RaceResult:
    vehicle: Vehicle
    rank: int
    distance: float
    refuel_stops: int
    history: list[str]
