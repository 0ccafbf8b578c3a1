"""Dataclasses describing toggles and the outcome of triggering them."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Literal, Mapping, Optional

ToggleKey = str
Action = Callable[[], None]
Predicate = Callable[[], bool]
Verb = Literal["enable", "disable", "flip", "advance"]

VERBS: tuple[str, ...] = ("enable", "disable", "flip", "advance")


@dataclass(frozen=True, slots=True)
class ToggleDescriptor:
    """Immutable definition of one bistable feature."""

    key: ToggleKey
    enable: Action
    disable: Action
    is_enabled: Predicate
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("toggle key cannot be empty")
        for name in ("enable", "disable", "is_enabled"):
            if not callable(getattr(self, name)):
                raise TypeError(f"{name} must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True, slots=True)
class TriggerBinding:
    """Maps an external trigger (key token, command name) to a toggle verb."""

    trigger: str
    key: ToggleKey
    verb: Verb = "flip"

    def __post_init__(self) -> None:
        if not self.trigger:
            raise ValueError("trigger cannot be empty")
        if self.verb not in VERBS:
            raise ValueError(f"unsupported verb '{self.verb}'")


@dataclass(frozen=True, slots=True)
class ToggleOutcome:
    """Result of a ``dispatch`` at the trigger boundary."""

    key: ToggleKey
    verb: str
    changed: bool
    enabled: Optional[bool]
    message: Optional[str] = None
    state: Optional[ToggleKey] = None

    @property
    def failed(self) -> bool:
        return self.message is not None


__all__ = [
    "ToggleKey",
    "Action",
    "Predicate",
    "Verb",
    "VERBS",
    "ToggleDescriptor",
    "TriggerBinding",
    "ToggleOutcome",
]
