"""Lift the syntax-highlight column limit for long lines."""

from __future__ import annotations

from toggle_engine.errors import ActionFailedError
from toggle_engine.host import OptionHost
from toggle_engine.store import StateStore
from toggle_engine.toggles import ToggleDescriptor, with_snapshot

KEY = "synmaxcol"
OPTION = "synmaxcol"
DEFAULT_OVERRIDE = 3000


def syntax_column_toggle(
    host: OptionHost, store: StateStore, *, override: int = DEFAULT_OVERRIDE
) -> ToggleDescriptor:
    if override <= 0:
        raise ValueError("override must be positive")

    def capture() -> int:
        return int(host.get_option(OPTION, host.current_buffer()))

    def write(value: int) -> None:
        host.set_option(OPTION, host.current_buffer(), value)

    def at_override() -> bool:
        return capture() == override

    def nothing_saved() -> None:
        raise ActionFailedError(
            f"{OPTION} is {override} but no previous limit was saved", key=KEY
        )

    return with_snapshot(
        KEY,
        store,
        host.current_buffer,
        capture,
        write,
        write,
        override=override,
        observe=at_override,
        on_unsaved=nothing_saved,
        description=f"Highlight syntax up to column {override}",
        metadata={"status": "SMC"},
    )


__all__ = ["KEY", "OPTION", "DEFAULT_OVERRIDE", "syntax_column_toggle"]
