from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from typing_extensions import override

from fuelrace.core.rounding import round2

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(slots=True)
class SeededRandomSource:
    """Random draws backed by a single ``random.Random``."""

    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def from_seed(cls, seed: int | None) -> SeededRandomSource:
        return cls(random.Random(seed))

    def choose_index(self, count: int) -> int:
        return self.rng.randrange(count)

    def travel_quota(self, low: float, high: float) -> float:
        # Draw whole hundredths so every value is exactly representable at 2 dp
        cents = self.rng.randint(round(low * 100), round(high * 100))
        return cents / 100


@dataclass(slots=True)
class ScriptedRandomSource:
    """
    Replays a fixed sequence of vehicle picks and quotas.
    Used to make races reproducible without depending on the PRNG algorithm.
    Running out of script is a setup error.
    """

    picks: deque[int] = field(default_factory=deque)
    quotas: deque[float] = field(default_factory=deque)

    @classmethod
    def from_script(
        cls,
        picks: Iterable[int] = (),
        quotas: Iterable[float] = (),
    ) -> ScriptedRandomSource:
        return cls(deque(picks), deque(quotas))

    def choose_index(self, count: int) -> int:
        if not self.picks:
            msg = "Scripted random source ran out of vehicle picks."
            raise LookupError(msg)
        idx = self.picks.popleft()
        if not 0 <= idx < count:
            msg = f"Scripted pick {idx} is out of range for {count} vehicles."
            raise ValueError(msg)
        return idx

    def travel_quota(self, low: float, high: float) -> float:
        _ = low, high
        if not self.quotas:
            msg = "Scripted random source ran out of travel quotas."
            raise LookupError(msg)
        return round2(self.quotas.popleft())

    @override
    def __repr__(self) -> str:
        return f"ScriptedRandomSource(picks={list(self.picks)}, quotas={list(self.quotas)})"
