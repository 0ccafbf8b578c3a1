"""Scroll-bind the current window, snapshotting the options it forces."""

from __future__ import annotations

from typing import Dict

from toggle_engine.host import OptionHost, OptionValue
from toggle_engine.store import StateStore
from toggle_engine.toggles import ToggleDescriptor, with_snapshot

KEY = "scrollbind"

# Options captured before the override and written back afterwards.
SNAPSHOT_OPTIONS: tuple[str, ...] = ("cursorbind", "cursorline", "foldenable")

OVERRIDE: Dict[str, OptionValue] = {
    "scrollbind": True,
    "cursorbind": True,
    "cursorline": True,
    "foldenable": False,
}


def scroll_bind_toggle(host: OptionHost, store: StateStore) -> ToggleDescriptor:
    def capture() -> Dict[str, OptionValue]:
        window = host.current_window()
        return {name: host.get_option(name, window) for name in SNAPSHOT_OPTIONS}

    def apply(override: Dict[str, OptionValue]) -> None:
        window = host.current_window()
        for name, value in override.items():
            host.set_option(name, window, value)

    def restore(snapshot: Dict[str, OptionValue]) -> None:
        window = host.current_window()
        for name, value in snapshot.items():
            host.set_option(name, window, value)
        host.set_option("scrollbind", window, False)

    def observe() -> bool:
        return bool(host.get_option("scrollbind", host.current_window()))

    def release() -> None:
        host.set_option("scrollbind", host.current_window(), False)

    return with_snapshot(
        KEY,
        store,
        host.current_window,
        capture,
        apply,
        restore,
        override=dict(OVERRIDE),
        observe=observe,
        on_unsaved=release,
        description="Bind scrolling and cursor of this window to the others",
        metadata={"status": "SB"},
    )


__all__ = ["KEY", "SNAPSHOT_OPTIONS", "OVERRIDE", "scroll_bind_toggle"]
