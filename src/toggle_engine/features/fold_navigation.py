"""Navigation bindings that reveal the cursor line after every move."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Optional, Protocol

from toggle_engine.host import BindingAction, KeyBindingHost, OptionHost
from toggle_engine.runtime.config import DEFAULT_FOLD_KEYS
from toggle_engine.store import StateStore
from toggle_engine.toggles import ToggleDescriptor, with_snapshot

KEY = "auto_open_folds"


class FoldNavigationHost(OptionHost, KeyBindingHost, Protocol):
    """Option access for the current buffer plus buffer-local bindings."""


@dataclass(frozen=True, slots=True)
class RevealBinding:
    """Runs the binding it replaced, then reveals the cursor line."""

    lhs: str
    scope: Hashable
    host: KeyBindingHost
    previous: Optional[BindingAction] = None

    def __call__(self) -> None:
        if self.previous is not None:
            self.previous()
        self.host.reveal_cursor(self.scope)


def fold_navigation_active(store: StateStore, scope: Hashable) -> bool:
    """Whether the reveal bindings are installed for ``scope``.

    Answered from the store rather than by inspecting what the keys are bound
    to, since a third party may wrap or replace the bindings.
    """

    return store.has(scope, KEY)


def fold_navigation_toggle(
    host: FoldNavigationHost,
    store: StateStore,
    *,
    keys: Iterable[str] = DEFAULT_FOLD_KEYS,
) -> ToggleDescriptor:
    lhs_list = tuple(dict.fromkeys(keys))
    if not lhs_list:
        raise ValueError("fold navigation needs at least one key")

    def capture() -> Dict[str, Optional[BindingAction]]:
        scope = host.current_buffer()
        return {lhs: host.binding(scope, lhs) for lhs in lhs_list}

    def apply(_override: object) -> None:
        scope = host.current_buffer()
        for lhs in lhs_list:
            host.bind(
                scope,
                lhs,
                RevealBinding(lhs, scope, host, host.binding(scope, lhs)),
            )

    def restore(snapshot: Dict[str, Optional[BindingAction]]) -> None:
        scope = host.current_buffer()
        for lhs, previous in snapshot.items():
            if previous is None:
                host.unbind(scope, lhs)
            else:
                host.bind(scope, lhs, previous)

    return with_snapshot(
        KEY,
        store,
        host.current_buffer,
        capture,
        apply,
        restore,
        description="Open folds under the cursor while navigating",
        metadata={"keys": lhs_list, "status": "AOF"},
    )


__all__ = ["KEY", "RevealBinding", "fold_navigation_active", "fold_navigation_toggle"]
