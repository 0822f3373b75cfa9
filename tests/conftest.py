import pytest

from fuelrace.core.registry import NameRegistry
from fuelrace.engine.scenario import RaceScenario
from fuelrace.simulation.config import VehicleConfig


@pytest.fixture
def registry():
    """Fresh name registry, so vehicle names never leak between tests."""
    return NameRegistry()


@pytest.fixture
def scenario():
    """Factory fixture to create scenarios."""

    def _builder(vehicles_config, picks=None, quotas=None, **kwargs):
        return RaceScenario(vehicles_config, picks=picks, quotas=quotas, **kwargs)

    return _builder


@pytest.fixture
def car_and_bike():
    """Car and motorcycle, both on half a tank."""
    return [
        VehicleConfig("Car", "Aurora", "Seat", "Leon", fuel_capacity=50, fuel=25),
        VehicleConfig(
            "Motorcycle",
            "Vortex",
            "Yamaha",
            "MT-07",
            fuel_capacity=14,
            fuel=7,
            displacement=689,
        ),
    ]
