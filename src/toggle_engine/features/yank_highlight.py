"""Briefly highlight yanked text, clearing it again on a timer."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Optional, Protocol

from toggle_engine.host import HighlightHost, OptionHost
from toggle_engine.runtime import telemetry
from toggle_engine.toggles import ToggleDescriptor

KEY = "highlight_yank"
OPTION = "yank_highlight"


class YankHighlightHost(OptionHost, HighlightHost, Protocol):
    """Global option storage plus highlights and timers."""


class YankHighlighter:
    """Owns at most one pending yank highlight per scope.

    Each highlight is cleared by a timer that remembers the highlight id it
    was armed for. If the highlight was replaced by a newer yank, or already
    cleared, the timer finds a different (or no) id and does nothing.
    """

    def __init__(self, host: YankHighlightHost, *, duration_ms: int = 150) -> None:
        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")
        self.host = host
        self.duration_ms = duration_ms
        self._active: Dict[Hashable, int] = {}

    @property
    def enabled(self) -> bool:
        return bool(self.host.get_option(OPTION))

    def active(self, scope: Hashable) -> Optional[int]:
        return self._active.get(scope)

    def on_yank(self, region: Any, scope: Hashable | None = None) -> Optional[int]:
        if not self.enabled:
            return None
        owner = scope if scope is not None else self.host.current_buffer()
        previous = self._active.pop(owner, None)
        if previous is not None:
            self.host.clear_highlight(previous)
        highlight_id = self.host.add_highlight(owner, region)
        self._active[owner] = highlight_id
        self.host.call_later(
            self.duration_ms, lambda: self.clear(owner, highlight_id)
        )
        return highlight_id

    def clear(self, scope: Hashable, highlight_id: int) -> bool:
        """Clear ``highlight_id`` if it is still the scope's current highlight."""

        if self._active.get(scope) != highlight_id:
            telemetry.record_event(
                "yank.clear_stale",
                level="debug",
                data={"scope": scope, "highlight": highlight_id},
            )
            return False
        del self._active[scope]
        return self.host.clear_highlight(highlight_id)

    def clear_all(self) -> None:
        for scope, highlight_id in list(self._active.items()):
            self.clear(scope, highlight_id)

    def forget(self, scope: Hashable) -> None:
        """Drop ``scope``'s pending highlight; its timer then finds nothing to clear."""

        highlight_id = self._active.pop(scope, None)
        if highlight_id is not None:
            self.host.clear_highlight(highlight_id)

    def descriptor(self) -> ToggleDescriptor:
        def enable() -> None:
            self.host.set_option(OPTION, None, True)

        def disable() -> None:
            self.host.set_option(OPTION, None, False)
            self.clear_all()

        return ToggleDescriptor(
            key=KEY,
            enable=enable,
            disable=disable,
            is_enabled=lambda: self.enabled,
            description="Highlight yanked text briefly",
            metadata={"duration_ms": self.duration_ms, "status": "HY"},
        )


__all__ = ["KEY", "OPTION", "YankHighlighter"]
