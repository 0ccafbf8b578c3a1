"""Textual-facing controller that routes key presses to toggle triggers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from toggle_engine.features.status import StatusFlags
from toggle_engine.host import MemoryHost
from toggle_engine.toggles import ToggleOutcome, ToggleRegistry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_status: Callable[[str], None]
    notify: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualToggleAdapter:
    """Bridges key presses and host timers to the registry and status line."""

    def __init__(
        self,
        registry: ToggleRegistry,
        hooks: TextualUIHooks,
        *,
        host: MemoryHost | None = None,
        status: StatusFlags | None = None,
    ) -> None:
        self.registry = registry
        self.hooks = hooks
        self.host = host
        self.status = status or StatusFlags.from_registry(registry)
        self.registry.set_notifier(self._notify)
        self.refresh_status()

    def handle_textual_key(self, key: str) -> Optional[ToggleOutcome]:
        """Dispatch the trigger bound to ``key``; unbound keys return ``None``."""

        self.hooks.log(f"key -> {key}")
        outcome = self.registry.trigger(key)
        if outcome is None:
            return None
        self.hooks.log(
            f"outcome <- key={outcome.key} verb={outcome.verb} "
            f"changed={outcome.changed} enabled={outcome.enabled}"
        )
        self.refresh_status()
        return outcome

    def process_timeouts(self) -> int:
        """Fire due host timers (e.g. yank highlight clears)."""

        if self.host is None:
            return 0
        fired = self.host.process_timers()
        if fired:
            self.hooks.log(f"timers fired: {fired}")
            self.refresh_status()
        return fired

    def refresh_status(self) -> str:
        text = self.status.render()
        self.hooks.update_status(text)
        return text

    def _notify(self, message: str) -> None:
        if self.host is not None:
            self.host.echo(message)
        self.hooks.notify(message)
        self.hooks.log(f"message: {message}")


__all__ = ["TextualUIHooks", "TextualToggleAdapter"]
