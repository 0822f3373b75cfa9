from __future__ import annotations

import cappa
import msgspec

from fuelrace.simulation.config import VehicleConfig
from fuelrace.vehicles import resolve_vehicle_kind

# Short option names accepted on the command line
OPTION_ALIASES: dict[str, str] = {
    "capacity": "fuel_capacity",
    "tank": "fuel_capacity",
    "cc": "displacement",
    "km": "distance",
}


def parse_key_values(value: str) -> dict[str, str]:
    """
    Parse "key=value,key=value" into a dictionary.
    Values stay strings; msgspec converts them against the target type.
    """
    options: dict[str, str] = {}
    for item in filter(None, (part.strip() for part in value.split(","))):
        if "=" not in item:
            msg = f"Invalid vehicle option '{item}'. Expected 'key=value'."
            raise cappa.Exit(msg, code=1)
        k, v = item.split("=", 1)
        k = k.strip().lower()
        options[OPTION_ALIASES.get(k, k)] = v.strip()
    return options


def parse_vehicle_spec(value: str) -> VehicleConfig:
    """
    Parse "Kind:Name[:key=value,...]" into a VehicleConfig.
    Input "motor cycle:Vortex:cc=689,fuel=7" resolves kind "Motorcycle".
    """
    parts = value.split(":", 2)
    if len(parts) < 2 or not parts[1].strip():
        msg = f"Invalid vehicle '{value}'. Expected 'Kind:Name[:key=value,...]'."
        raise cappa.Exit(msg, code=1)

    try:
        kind = resolve_vehicle_kind(parts[0])
    except ValueError as e:
        raise cappa.Exit(str(e), code=1) from e

    raw: dict[str, str | bool] = {"kind": kind, "name": parts[1].strip()}
    if len(parts) == 3:
        raw.update(parse_key_values(parts[2]))

    if unknown := sorted(set(raw) - set(VehicleConfig.__struct_fields__)):
        msg = f"Unknown vehicle option(s) {', '.join(unknown)} in '{value}'."
        raise cappa.Exit(msg, code=1)

    try:
        return msgspec.convert(raw, type=VehicleConfig, strict=False)
    except msgspec.ValidationError as e:
        msg = f"Invalid vehicle '{value}': {e}"
        raise cappa.Exit(msg, code=1) from e


def parse_vehicle_specs(values: list[str]) -> list[VehicleConfig]:
    return [parse_vehicle_spec(v) for v in values]
