"""N-state toggles built from an ordered list of descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .models import ToggleDescriptor, ToggleKey


@dataclass(frozen=True, slots=True)
class Cycle:
    """Ordered states where advancing activates ``(index + 1) mod N``.

    A state is active when its ``is_enabled`` predicate holds; the first
    active state wins. Include an explicit "off" descriptor to make off part
    of the rotation.
    """

    key: ToggleKey
    states: tuple[ToggleDescriptor, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("cycle key cannot be empty")
        states = tuple(self.states)
        if len(states) < 2:
            raise ValueError("Cycle requires at least two states")
        keys = [state.key for state in states]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Cycle '{self.key}' has duplicate state keys")
        object.__setattr__(self, "states", states)

    def active_index(self) -> Optional[int]:
        for index, state in enumerate(self.states):
            if state.is_enabled():
                return index
        return None

    def next_index(self, current: Optional[int]) -> int:
        if current is None:
            return 0
        return (current + 1) % len(self.states)

    @classmethod
    def of(
        cls, key: ToggleKey, states: Sequence[ToggleDescriptor], description: str = ""
    ) -> "Cycle":
        return cls(key=key, states=tuple(states), description=description)


__all__ = ["Cycle"]
