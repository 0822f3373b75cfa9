from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Every random draw the race engine makes goes through this interface."""

    def choose_index(self, count: int) -> int:
        """Return an index in ``range(count)``, uniformly."""
        ...

    def travel_quota(self, low: float, high: float) -> float:
        """Return a distance in ``[low, high]`` at two-decimal granularity."""
        ...
