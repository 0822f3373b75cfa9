from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class NameRegistry:
    """Tracks every vehicle name claimed so far.

    One registry is shared by everything that builds vehicles for a session,
    so a name can only be used once. Tests create a fresh registry per case.
    """

    _names: set[str] = field(default_factory=set)

    def claim(self, name: str) -> str:
        if not name:
            msg = "Vehicle name must not be empty."
            raise ValueError(msg)
        if name in self._names:
            msg = f"The name {name!r} already exists."
            raise ValueError(msg)
        self._names.add(name)
        return name

    def release(self, name: str) -> None:
        self._names.discard(name)

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)
