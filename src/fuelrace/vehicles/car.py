from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar
from typing_extensions import override

from fuelrace.core.vehicle import KM_PER_LITRE, VehicleBase

if TYPE_CHECKING:
    from fuelrace.core.types import ManeuverName, VehicleKind

KM_PER_LITRE_HYBRID: float = 5.0
SKID_COST: float = 7.5
SKID_COST_HYBRID: float = 6.25


@dataclass(eq=False)
class Car(VehicleBase):
    kind: ClassVar[VehicleKind] = "Car"
    maneuver: ClassVar[ManeuverName] = "Skid"

    hybrid: bool = False

    @override
    def efficiency(self) -> float:
        return KM_PER_LITRE_HYBRID if self.hybrid else KM_PER_LITRE

    @override
    def maneuver_cost(self) -> float:
        # A skid costs less the more range is left in the tank.
        reach = self.autonomy()
        if reach == 0:
            return 0.0
        cost = SKID_COST_HYBRID if self.hybrid else SKID_COST
        return cost / reach

    def skid(self) -> float:
        return self.perform_maneuver()
