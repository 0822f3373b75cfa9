from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing_extensions import override

from rich.highlighter import Highlighter
from rich.logging import RichHandler

if TYPE_CHECKING:
    from rich.text import Text

    from fuelrace.engine.race_engine import RaceEngine

LOGGER_NAME = "fuelrace"

# Captures "Car:Aurora" or "Motorcycle:Vespa" with the kind as prefix
VEHICLE_REPR_PATTERN = re.compile(r"(?P<prefix>\b(?:Car|Motorcycle):)(?P<name>[^\s.,]+)")

COLOR = {
    "travel": "bold #23d18b",  # light green
    "refuel": "bold #29b8db",  # cyan
    "maneuver": "bold #ffaf00",  # orange
    "winner": "bold #f5f543",  # yellow
    "warning": "bold bright_red",
    "prefix": "grey50",
    "car": "#d670d6",  # magenta
    "motorcycle": "#87d700",  # yellow-ish green
}


@dataclass(slots=True)
class LogContext:
    """Per-race logging state."""

    engine_id: int = 0
    step: int = 0
    current_vehicle_repr: str = "_"
    step_log_count: int = 0

    def start_step(self, vehicle_repr: str) -> None:
        self.step += 1
        self.step_log_count = 0
        self.current_vehicle_repr = vehicle_repr

    def inc_log_count(self) -> None:
        self.step_log_count += 1


class ContextFilter(logging.Filter):
    """Inject per-engine runtime context into every log record."""

    def __init__(self, engine: RaceEngine, name: str = "") -> None:
        super().__init__(name)
        self.engine: RaceEngine = engine

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        logctx = self.engine.log_context
        record.engine_id = logctx.engine_id
        record.step = logctx.step
        record.step_log_count = logctx.step_log_count
        record.vehicle_repr = logctx.current_vehicle_repr
        logctx.inc_log_count()
        return True


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        engine_id = getattr(record, "engine_id", 0)
        step = getattr(record, "step", 0)
        step_log_count = getattr(record, "step_log_count", 0)

        prefix = f"{engine_id}:{step}.{step_log_count}"
        message = record.getMessage()
        return f"[{COLOR['prefix']}]{prefix:<10}[/{COLOR['prefix']}]  {message}"


class RaceLogHighlighter(Highlighter):
    @override
    def highlight(self, text: Text) -> None:
        text.highlight_regex(r"\btraveled\b", COLOR["travel"])
        text.highlight_regex(r"\bRefuel(?:ed)?\b", COLOR["refuel"])
        text.highlight_regex(r"\brefueled\b", COLOR["refuel"])
        text.highlight_regex(r"\b(?:Skid|Wheelie)\b", COLOR["maneuver"])
        text.highlight_regex(r"\bWINNER\b", COLOR["winner"])
        text.highlight_regex(r"!!!", COLOR["warning"])

        for match in VEHICLE_REPR_PATTERN.finditer(text.plain):
            kind = match.group("prefix").rstrip(":").lower()
            text.stylize(COLOR[kind], start=match.start("prefix"), end=match.end("prefix"))
            text.stylize("bold white", start=match.start("name"), end=match.end("name"))


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(
        markup=True,
        show_path=False,
        show_time=False,
        highlighter=RaceLogHighlighter(),
    )
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
