"""Contracts the engine needs from the host editor.

Toggles only ever talk to the host through these protocols, so any editor
(or the in-memory host used by tests and the demo) can sit behind them.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Optional, Protocol, Sequence, Union

OptionValue = Union[bool, int, str]
BindingAction = Callable[[], None]
CommandHandler = Callable[[bool, Sequence[str]], None]


class OptionHost(Protocol):
    """Reads and writes boolean, numeric, and string options."""

    def get_option(self, name: str, scope: Optional[Hashable] = None) -> OptionValue:
        """Return the option value for ``scope`` (``None`` means global)."""
        ...

    def set_option(
        self, name: str, scope: Optional[Hashable], value: OptionValue
    ) -> None:
        """Write an option value for ``scope`` (``None`` means global)."""
        ...

    def current_buffer(self) -> Hashable:
        """Handle of the buffer in the active window."""
        ...

    def current_window(self) -> Hashable:
        """Handle of the active window."""
        ...


class KeyBindingHost(Protocol):
    """Buffer-local key bindings."""

    def binding(self, scope: Hashable, lhs: str) -> Optional[BindingAction]:
        """Return the action bound to ``lhs`` without changing anything."""
        ...

    def bind(self, scope: Hashable, lhs: str, action: BindingAction) -> None:
        ...

    def unbind(self, scope: Hashable, lhs: str) -> Optional[BindingAction]:
        """Remove ``lhs`` and return whatever was bound to it."""
        ...

    def reveal_cursor(self, scope: Hashable) -> None:
        """Make the cursor line visible (open whatever hides it)."""
        ...


class CommandHost(Protocol):
    """User command namespace."""

    def register_command(self, name: str, handler: CommandHandler) -> None:
        ...


class HighlightHost(Protocol):
    """Transient highlights plus a one-shot timer."""

    def add_highlight(self, scope: Hashable, region: Any) -> int:
        ...

    def clear_highlight(self, highlight_id: int) -> bool:
        """Clear ``highlight_id``; returns ``False`` if it no longer exists."""
        ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        ...


class LifecycleHost(Protocol):
    """Notifies listeners when a buffer or window goes away."""

    def on_scope_closed(self, callback: Callable[[Hashable], None]) -> None:
        ...


class EditorHost(
    OptionHost, KeyBindingHost, CommandHost, HighlightHost, LifecycleHost, Protocol
):
    """Everything the default toggle set needs from one host."""

    def echo(self, message: str) -> None:
        """Show a single-line message to the user."""
        ...


__all__ = [
    "OptionValue",
    "BindingAction",
    "CommandHandler",
    "OptionHost",
    "KeyBindingHost",
    "CommandHost",
    "HighlightHost",
    "LifecycleHost",
    "EditorHost",
]
