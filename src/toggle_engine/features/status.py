"""Status-line flags the host polls to show which toggles are on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from toggle_engine.toggles import ToggleRegistry


@dataclass(frozen=True, slots=True)
class StatusFlag:
    key: str
    label: str


class StatusFlags:
    """Renders ``[AOF][Debug]``-style text from live toggle state.

    Rendering only evaluates predicates; it never changes anything. Flags for
    keys that are not registered are skipped, and a cycle renders as
    ``[label:state]`` while its active state is not the first one.
    """

    def __init__(self, registry: ToggleRegistry, flags: Iterable[StatusFlag] = ()) -> None:
        self.registry = registry
        self._flags: List[StatusFlag] = list(flags)

    @classmethod
    def from_registry(cls, registry: ToggleRegistry) -> "StatusFlags":
        """Use each descriptor's ``metadata["status"]`` label, if it has one."""

        flags = [
            StatusFlag(descriptor.key, str(descriptor.metadata["status"]))
            for descriptor in registry.iter_descriptors()
            if "status" in descriptor.metadata
        ]
        return cls(registry, flags)

    def add(self, key: str, label: str) -> None:
        self._flags.append(StatusFlag(key, label))

    def _cycle_text(self, flag: StatusFlag) -> Optional[str]:
        cycle = self.registry.get_cycle(flag.key)
        index = cycle.active_index()
        if not index:
            return None
        state = cycle.states[index].key
        suffix = state.split(".", 1)[-1]
        return f"[{flag.label}:{suffix}]"

    def render(self) -> str:
        parts: List[str] = []
        for flag in self._flags:
            if self.registry.is_cycle(flag.key):
                text = self._cycle_text(flag)
                if text:
                    parts.append(text)
            elif flag.key in self.registry and self.registry.is_enabled(flag.key):
                parts.append(f"[{flag.label}]")
        return "".join(parts)


__all__ = ["StatusFlag", "StatusFlags"]
