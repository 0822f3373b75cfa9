from __future__ import annotations

from typing import TYPE_CHECKING

from fuelrace.core.types import RaceStatus

if TYPE_CHECKING:
    from fuelrace.engine.race_engine import RaceEngine
    from fuelrace.vehicles import Vehicle


def log_final_standings(engine: RaceEngine) -> None:
    if not engine.verbose:
        return
    engine.log_info(f"{'':>10}=== FINAL STANDINGS ===")
    for rank, (name, distance) in enumerate(engine.standings.ranked(), start=1):
        vehicle = engine.get_vehicle(name)
        status = "🏆" if vehicle is engine.winner else ""
        engine.log_info(
            f"{rank:>2}. {vehicle.repr:<24} {distance:>9.2f} km  stops: {vehicle.refuel_stops:<3} {status}",
        )


def find_winner(engine: RaceEngine) -> Vehicle | None:
    """First participant, in entry order, at or past the target distance."""
    for vehicle in engine.participants:
        if vehicle.distance >= engine.target_distance:
            return vehicle
    return None


def check_race_over_condition(engine: RaceEngine) -> bool:
    if (winner := find_winner(engine)) is None:
        return False
    end_race(engine, winner)
    return True


def end_race(engine: RaceEngine, winner: Vehicle) -> None:
    if engine.status is RaceStatus.FINISHED:
        return

    engine.status = RaceStatus.FINISHED
    engine.winner = winner
    engine.log_info(f"!!! WINNER {winner.repr} after {winner.distance:.2f} km !!!")
    engine.log_info("Race ended! 🏁")
    log_final_standings(engine)
