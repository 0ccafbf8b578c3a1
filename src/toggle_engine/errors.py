"""Exception hierarchy shared by the store, registry, and features."""

from __future__ import annotations

from typing import Hashable


class ToggleError(RuntimeError):
    """Base class for every error raised by the toggle engine."""


class UnknownToggleError(ToggleError, KeyError):
    """Raised when a key (or trigger) is not registered."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Toggle '{key}' is not registered")
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateToggleError(ToggleError, ValueError):
    """Raised when registering a key that already exists."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Toggle '{key}' already registered")
        self.key = key


class AlreadySavedError(ToggleError):
    """A snapshot exists already; saving again would lose the original."""

    def __init__(self, scope: Hashable, key: str) -> None:
        super().__init__(f"Snapshot for '{key}' in scope {scope!r} already saved")
        self.scope = scope
        self.key = key


class SnapshotNotFoundError(ToggleError, LookupError):
    """Restore was attempted without a matching snapshot."""

    def __init__(self, scope: Hashable, key: str) -> None:
        super().__init__(f"No snapshot for '{key}' in scope {scope!r}")
        self.scope = scope
        self.key = key


class ReentrantToggleError(ToggleError):
    """A transition on a key was requested while that key was mid-transition."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Toggle '{key}' is already transitioning")
        self.key = key


class ActionFailedError(ToggleError):
    """Domain failure reported by an enable/disable action.

    ``message`` is shown to the user verbatim as a single line.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        single_line = " ".join(str(message).split())
        super().__init__(single_line)
        self.message = single_line
        self.key = key


__all__ = [
    "ToggleError",
    "UnknownToggleError",
    "DuplicateToggleError",
    "AlreadySavedError",
    "SnapshotNotFoundError",
    "ReentrantToggleError",
    "ActionFailedError",
]
