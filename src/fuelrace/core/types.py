from __future__ import annotations

from enum import Enum, auto
from typing import Literal

VehicleKind = Literal["Car", "Motorcycle"]

ManeuverName = Literal["Skid", "Wheelie"]

ActionKind = Literal["Travel", "Refuel", "Maneuver"]


class RaceStatus(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    FINISHED = auto()
