from __future__ import annotations

import difflib
from typing import TYPE_CHECKING, get_args

from fuelrace.core.types import VehicleKind
from fuelrace.vehicles.car import Car
from fuelrace.vehicles.motorcycle import Motorcycle

if TYPE_CHECKING:
    from fuelrace.core.vehicle import VehicleBase

Vehicle = Car | Motorcycle

VEHICLE_CLASSES: dict[VehicleKind, type[VehicleBase]] = {
    "Car": Car,
    "Motorcycle": Motorcycle,
}


def _normalize(s: str) -> str:
    return s.strip().replace(" ", "").replace("-", "").lower()


def resolve_vehicle_kind(value: str) -> VehicleKind:
    """
    Resolve a user supplied kind to its canonical name.
    "motor cycle" matches "Motorcycle"; unknown kinds raise with suggestions.
    """
    lookup_map: dict[str, VehicleKind] = {_normalize(k): k for k in get_args(VehicleKind)}
    if (kind := lookup_map.get(_normalize(value))) is not None:
        return kind

    matches = difflib.get_close_matches(value, get_args(VehicleKind), n=2, cutoff=0.5)
    msg = f"Vehicle kind '{value}' not found."
    if matches:
        msg += f" Did you mean: {', '.join(matches)}?"
    raise ValueError(msg)


__all__ = ["VEHICLE_CLASSES", "Car", "Motorcycle", "Vehicle", "resolve_vehicle_kind"]
