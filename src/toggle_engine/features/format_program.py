"""Switch a buffer between its local format program and the global one.

The sense is inverted compared to the other saved-state toggles: *enabled*
means the local value is cleared so the global program applies. The predicate
reads the live local value, so a local program set by hand after the toggle
counts as disabled.
"""

from __future__ import annotations

from toggle_engine.errors import ActionFailedError
from toggle_engine.host import OptionHost
from toggle_engine.store import StateStore
from toggle_engine.toggles import ToggleDescriptor, with_snapshot

KEY = "global_formatprg"
OPTION = "formatprg"


def format_program_toggle(host: OptionHost, store: StateStore) -> ToggleDescriptor:
    def local_value() -> str:
        return str(host.get_option(OPTION, host.current_buffer()))

    def apply(override: str) -> None:
        host.set_option(OPTION, host.current_buffer(), override)

    def restore(saved: str) -> None:
        host.set_option(OPTION, host.current_buffer(), saved)

    def uses_global() -> bool:
        return local_value() == ""

    def nothing_saved() -> None:
        raise ActionFailedError(
            "No local format program was saved for this buffer", key=KEY
        )

    return with_snapshot(
        KEY,
        store,
        host.current_buffer,
        local_value,
        apply,
        restore,
        override="",
        observe=uses_global,
        on_unsaved=nothing_saved,
        description="Use the global format program instead of the buffer's",
        metadata={"status": "GFP"},
    )


__all__ = ["KEY", "OPTION", "format_program_toggle"]
