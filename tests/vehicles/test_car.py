import pytest

from fuelrace.core.registry import NameRegistry
from fuelrace.vehicles import Car


def make_car(fuel: float = 25.0, *, hybrid: bool = False, capacity: float = 50.0, **kwargs) -> Car:
    return Car("Aurora", "Seat", "Leon", capacity, fuel, hybrid=hybrid, **kwargs)


def test_autonomy_standard_and_hybrid():
    assert make_car().autonomy() == 250.0
    assert make_car(hybrid=True).autonomy() == 125.0


def test_travel_within_autonomy_burns_distance_over_efficiency():
    car = make_car()
    assert car.travel(100.0) == 0.0
    assert car.fuel == 15.0
    assert car.distance == 100.0


def test_hybrid_travel_burns_at_hybrid_rate():
    car = make_car(hybrid=True)
    assert car.travel(50.0) == 0.0
    assert car.fuel == 15.0


def test_travel_past_autonomy_empties_tank_and_returns_shortfall():
    car = make_car()
    assert car.travel(300.0) == 50.0
    assert car.fuel == 0.0
    assert car.distance == 250.0


def test_travel_exactly_autonomy_returns_nothing_left():
    car = make_car()
    assert car.travel(250.0) == 0.0
    assert car.fuel == 0.0
    assert car.distance == 250.0


def test_travel_rounds_to_two_decimals():
    car = make_car()
    assert car.travel(33.333) == 0.0
    assert car.fuel == 21.67
    assert car.distance == 33.33


def test_zero_travel_on_empty_tank_is_noop():
    car = make_car(fuel=0.0)
    assert car.travel(0.0) == 0.0
    assert car.fuel == 0.0
    assert car.distance == 0.0


def test_negative_travel_is_rejected():
    with pytest.raises(ValueError, match="negative"):
        make_car().travel(-1.0)


def test_fuel_stays_in_tank_and_distance_never_drops():
    car = make_car(fuel=3.0, capacity=5.0)
    last_distance = car.distance
    for leg in [12.5, 40.0, 0.0, 7.77, 55.0, 3.1, 19.99]:
        unconsumed = car.travel(leg)
        assert 0.0 <= car.fuel <= car.fuel_capacity
        assert car.distance >= last_distance
        last_distance = car.distance
        if unconsumed > 0:
            car.refuel()


def test_refuel_without_amount_fills_tank():
    car = make_car()
    assert car.refuel() == 25.0
    assert car.fuel == car.fuel_capacity


@pytest.mark.parametrize("amount", [0.0, -5.0])
def test_refuel_non_positive_amount_fills_tank(amount: float):
    car = make_car(fuel=10.0)
    assert car.refuel(amount) == 40.0
    assert car.fuel == 50.0


def test_refuel_partial_amount():
    car = make_car()
    assert car.refuel(10.0) == 10.0
    assert car.fuel == 35.0


def test_refuel_is_clamped_at_capacity():
    car = make_car()
    assert car.refuel(40.0) == 25.0
    assert car.fuel == 50.0


def test_refuel_full_tank_adds_nothing():
    car = make_car(fuel=50.0)
    assert car.refuel(5.0) == 0.0
    assert car.refuel() == 0.0


def test_skid_cost_shrinks_with_autonomy():
    car = make_car()
    # 7.5 / 250 km = 0.03 L
    assert car.skid() == 24.97
    assert car.fuel == 24.97


def test_hybrid_skid_uses_hybrid_cost():
    car = make_car(hybrid=True)
    # 6.25 / 125 km = 0.05 L
    assert car.skid() == 24.95


def test_skid_never_goes_below_empty():
    car = make_car(fuel=0.01)
    assert car.skid() == 0.0
    assert car.fuel == 0.0


def test_skid_on_empty_tank_drains_nothing():
    car = make_car(fuel=0.0)
    assert car.perform_maneuver() == 0.0


def test_capacity_and_fuel_are_rounded_on_construction():
    car = Car("Aurora", "Seat", "Leon", 50.004, 25.005)
    assert car.fuel_capacity == 50.0
    assert car.fuel == 25.01


@pytest.mark.parametrize(
    ("capacity", "fuel", "distance", "match"),
    [
        (0.0, 0.0, 0.0, "capacity"),
        (-10.0, 0.0, 0.0, "capacity"),
        (0.004, 0.0, 0.0, "capacity"),
        (50.0, -1.0, 0.0, "Fuel cannot be negative"),
        (50.0, 10.0, -5.0, "Distance"),
        (50.0, 60.0, 0.0, "exceed"),
    ],
)
def test_invalid_construction(capacity: float, fuel: float, distance: float, match: str):
    with pytest.raises(ValueError, match=match):
        Car("Aurora", "Seat", "Leon", capacity, fuel, distance)


def test_duplicate_name_fails_for_second_vehicle(registry: NameRegistry):
    _ = Car("Aurora", "Seat", "Leon", 50.0, 25.0, registry=registry)
    with pytest.raises(ValueError, match="already exists"):
        Car("Aurora", "Toyota", "Prius", 40.0, 20.0, registry=registry, hybrid=True)


def test_rejected_vehicle_does_not_claim_its_name(registry: NameRegistry):
    with pytest.raises(ValueError):
        Car("Aurora", "Seat", "Leon", 0.0, 0.0, registry=registry)
    car = Car("Aurora", "Seat", "Leon", 50.0, 25.0, registry=registry)
    assert car.name in registry


def test_vehicles_compare_by_identity():
    assert make_car() != make_car()


def test_describe_and_str():
    car = make_car()
    assert car.describe() == "The Seat Leon can travel 250.00 km."
    assert str(car) == "Car: Aurora, Brand: Seat, Model: Leon, Distance: 0.00 km, Fuel: 25.00 L"
    assert car.repr == "Car:Aurora"


def test_capacity_is_validated_after_rounding(registry: NameRegistry):
    with pytest.raises(ValueError, match="capacity"):
        Car("Tiny", "Seat", "Mii", 0.004, 0.0, registry=registry)
    assert "Tiny" not in registry

    car = Car("Tiny", "Seat", "Mii", 0.005, 0.0, registry=registry)
    assert car.fuel_capacity == 0.01
