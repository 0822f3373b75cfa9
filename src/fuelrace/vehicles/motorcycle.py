from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar
from typing_extensions import override

from fuelrace.core.vehicle import VehicleBase

if TYPE_CHECKING:
    from fuelrace.core.types import ManeuverName, VehicleKind

KM_PER_LITRE_MOTORCYCLE: float = 20.0
REFERENCE_DISPLACEMENT: int = 1000
WHEELIE_COST: float = 6.5


@dataclass(eq=False)
class Motorcycle(VehicleBase):
    kind: ClassVar[VehicleKind] = "Motorcycle"
    maneuver: ClassVar[ManeuverName] = "Wheelie"

    displacement: int = REFERENCE_DISPLACEMENT

    @override
    def __post_init__(self) -> None:
        if self.displacement <= 0:
            msg = f"Displacement must be greater than zero, got {self.displacement}."
            raise ValueError(msg)
        super().__post_init__()

    @override
    def efficiency(self) -> float:
        """
        Kilometres per litre for this engine size.
        Baseline at the reference displacement, one km/l less per 1000 cc below it.
        """
        shortfall = max(0, REFERENCE_DISPLACEMENT - self.displacement)
        return KM_PER_LITRE_MOTORCYCLE - shortfall / REFERENCE_DISPLACEMENT

    @override
    def maneuver_cost(self) -> float:
        return WHEELIE_COST / self.efficiency()

    def wheelie(self) -> float:
        return self.perform_maneuver()
