import pytest

from fuelrace.simulation.config import RaceConfig, default_roster
from fuelrace.simulation.metrics import SUMMARY_COLUMNS, compute_batch_summary, mean_step_count
from fuelrace.simulation.runner import run_single_simulation


@pytest.fixture
def config():
    return RaceConfig(vehicles=default_roster(), seed=1)


def test_single_simulation_reports_one_winner(config):
    result = run_single_simulation(config)

    assert result.config_hash == config.compute_hash()
    assert result.step_count > 0
    assert [v.won for v in result.vehicles].count(True) == 1
    assert sorted(v.rank for v in result.vehicles) == [1, 2]
    winner = next(v for v in result.vehicles if v.won)
    assert winner.vehicle_name == result.winner
    assert winner.rank == 1
    assert winner.distance == pytest.approx(config.target_distance)


def test_same_config_twice_is_reproducible(config):
    first = run_single_simulation(config)
    second = run_single_simulation(config)

    assert first.winner == second.winner
    assert first.step_count == second.step_count
    assert [v.refuel_stops for v in first.vehicles] == [v.refuel_stops for v in second.vehicles]


def test_batch_summary_counts_every_win(config):
    results = [run_single_simulation(config.with_seed(seed)) for seed in range(6)]

    summary = compute_batch_summary(results)

    assert summary.columns == SUMMARY_COLUMNS
    assert summary.height == 2
    assert summary["wins"].sum() == 6
    assert summary["races"].to_list() == [6, 6]
    assert set(summary["vehicle_name"].to_list()) == {"Aurora", "Vortex"}
    wins = summary["wins"].to_list()
    assert wins == sorted(wins, reverse=True)
    assert mean_step_count(results) > 0


def test_empty_batch_summary():
    summary = compute_batch_summary([])
    assert summary.columns == SUMMARY_COLUMNS
    assert summary.height == 0
    assert mean_step_count([]) == 0.0
