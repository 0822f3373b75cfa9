import io
import logging

import cappa
import pytest
from rich.console import Console

from fuelrace.cli.commands.batch import BatchCommand
from fuelrace.cli.commands.race import RaceCommand, run_console_race
from fuelrace.engine.logging import LOGGER_NAME
from fuelrace.simulation.config import (
    DEFAULT_RACE_NAME,
    RaceConfig,
    VehicleConfig,
    default_roster,
)


@pytest.fixture
def encoded():
    return RaceConfig(
        vehicles=(VehicleConfig("Car", "Encoded"),),
        seed=8,
        name="From Encoding",
        target_distance=1200.0,
    ).encoded


def test_defaults_when_nothing_given():
    config = RaceCommand().resolve_config()
    assert config.vehicles == default_roster()
    assert config.name == DEFAULT_RACE_NAME
    assert config.target_distance == 1000.0


def test_encoding_overrides_file(tmp_path, encoded):
    path = tmp_path / "race.toml"
    path.write_text('name = "From File"\nseed = 1\n')

    config = RaceCommand(config_file=path, encoding=encoded).resolve_config()

    assert config.name == "From Encoding"
    assert config.seed == 8
    assert [v.name for v in config.vehicles] == ["Encoded"]


def test_cli_args_override_everything(tmp_path, encoded):
    path = tmp_path / "race.toml"
    path.write_text('name = "From File"\n')

    config = RaceCommand(
        config_file=path,
        encoding=encoded,
        name="From CLI",
        seed=99,
        target=3000.0,
        vehicles=[VehicleConfig("Motorcycle", "Cli")],
    ).resolve_config()

    assert config.name == "From CLI"
    assert config.seed == 99
    assert config.target_distance == 3000.0
    assert [v.kind for v in config.vehicles] == ["Motorcycle"]


def test_file_values_apply_over_defaults(tmp_path):
    path = tmp_path / "race.toml"
    path.write_text('name = "From File"\ntarget_distance = 1500.0\n')

    config = RaceCommand(config_file=path).resolve_config()

    assert config.name == "From File"
    assert config.target_distance == 1500.0
    assert config.vehicles == default_roster()


def test_missing_config_file_exits(tmp_path):
    with pytest.raises(cappa.Exit):
        RaceCommand(config_file=tmp_path / "nope.toml").resolve_config()


def test_invalid_encoding_exits():
    with pytest.raises(cappa.Exit):
        RaceCommand(encoding="not-a-config").resolve_config()


def test_console_race_prints_standings_and_history():
    out = io.StringIO()
    config = RaceConfig(vehicles=default_roster(), seed=5)

    run_console_race(config, console=Console(file=out, width=120))

    text = out.getvalue()
    assert "Standings" in text
    assert "Aurora" in text
    assert "Vortex" in text
    assert "traveled" in text


def test_console_race_without_history():
    out = io.StringIO()
    config = RaceConfig(vehicles=default_roster(), seed=5)

    run_console_race(config, show_history=False, console=Console(file=out, width=120))

    assert "traveled" not in out.getvalue()


@pytest.mark.parametrize(
    "config",
    [
        RaceConfig(vehicles=default_roster(), seed=1, target_distance=500.0),
        RaceConfig(vehicles=(VehicleConfig("Car", "Twin"), VehicleConfig("Car", "Twin")), seed=1),
        RaceConfig(vehicles=(VehicleConfig("Car", "Leaky", fuel=80.0),), seed=1),
        RaceConfig(vehicles=(), seed=1),
    ],
)
def test_invalid_race_setup_exits(config):
    with pytest.raises(cappa.Exit):
        run_console_race(config, console=Console(file=io.StringIO()))


def test_batch_prints_summary(caplog, capsys):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    BatchCommand(runs=3, seed_offset=10)()

    out = capsys.readouterr().out
    assert "3 races" in out
    assert "Aurora" in out


def test_batch_rejects_non_positive_runs(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    with pytest.raises(cappa.Exit):
        BatchCommand(runs=0)()


def test_batch_with_missing_config_exits(tmp_path):
    with pytest.raises(cappa.Exit):
        BatchCommand(config=tmp_path / "missing.toml").load_config()


def test_encoded_race_without_vehicles_exits():
    config = RaceCommand(encoding=RaceConfig(vehicles=(), seed=1).encoded).resolve_config()
    assert config.vehicles == ()

    with pytest.raises(cappa.Exit):
        run_console_race(config, console=Console(file=io.StringIO()))
