from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from fuelrace.core.rounding import round2
from fuelrace.core.state import RaceAction
from fuelrace.vehicles import Car, Motorcycle

if TYPE_CHECKING:
    from fuelrace.engine.race_engine import RaceEngine
    from fuelrace.vehicles import Vehicle

# Length of one whole segment; a maneuver follows each of them.
SEGMENT_LENGTH: float = 20.0


def split_quota(quota: float) -> tuple[int, float]:
    """Split a travel quota into whole segments and the remaining partial one."""
    whole = int(quota // SEGMENT_LENGTH)
    remainder = round2(quota - whole * SEGMENT_LENGTH)
    return whole, remainder


def advance_vehicle(engine: RaceEngine, vehicle: Vehicle, quota: float) -> None:
    """Drive one travel quota: whole segments with a maneuver after each, then the rest."""
    whole, remainder = split_quota(quota)
    engine.log_debug(
        f"{vehicle.repr} quota {quota:.2f} km -> {whole} x {SEGMENT_LENGTH:.0f} km + {remainder:.2f} km",
    )

    for _ in range(whole):
        advance_segment(engine, vehicle, SEGMENT_LENGTH)
        perform_maneuver(engine, vehicle)

    advance_segment(engine, vehicle, remainder)


def advance_segment(engine: RaceEngine, vehicle: Vehicle, distance: float) -> None:
    """
    Cover one segment, refuelling as often as the tank runs dry.

    A zero-length segment is a no-op: the travel call still happens but
    nothing is refuelled or logged.
    """
    if distance > 0 and vehicle.fuel == 0:
        refuel_vehicle(engine, vehicle)

    unconsumed = vehicle.travel(distance)
    _log_travel(engine, vehicle, round2(distance - unconsumed))

    while unconsumed > 0:
        refuel_vehicle(engine, vehicle)
        remaining = unconsumed
        unconsumed = vehicle.travel(remaining)
        _log_travel(engine, vehicle, round2(remaining - unconsumed))


def refuel_vehicle(engine: RaceEngine, vehicle: Vehicle) -> float:
    added = vehicle.refuel()
    vehicle.refuel_stops += 1
    engine.record(
        RaceAction(
            step=engine.log_context.step,
            vehicle_name=vehicle.name,
            kind="Refuel",
            amount=added,
            fuel_after=vehicle.fuel,
        ),
    )
    engine.log_info(f"Refuel: {vehicle.repr} refueled {added:.2f} L (stop #{vehicle.refuel_stops})")
    return added


def perform_maneuver(engine: RaceEngine, vehicle: Vehicle) -> float:
    match vehicle:
        case Car():
            remaining = vehicle.skid()
        case Motorcycle():
            remaining = vehicle.wheelie()
        case _:
            assert_never(vehicle)

    engine.record(
        RaceAction(
            step=engine.log_context.step,
            vehicle_name=vehicle.name,
            kind="Maneuver",
            amount=0.0,
            fuel_after=remaining,
            maneuver=vehicle.maneuver,
        ),
    )
    engine.log_info(f"{vehicle.maneuver}: {vehicle.repr} has {remaining:.2f} L left")
    return remaining


def _log_travel(engine: RaceEngine, vehicle: Vehicle, covered: float) -> None:
    if covered <= 0:
        return
    engine.record(
        RaceAction(
            step=engine.log_context.step,
            vehicle_name=vehicle.name,
            kind="Travel",
            amount=covered,
            fuel_after=vehicle.fuel,
        ),
    )
    engine.log_info(f"{vehicle.repr} traveled {covered:.2f} km ({vehicle.distance:.2f} total)")
