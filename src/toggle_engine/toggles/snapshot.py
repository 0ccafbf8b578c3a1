"""Saved-state toggles: capture host state, override it, restore it later."""

from __future__ import annotations

from typing import Any, Callable, Hashable, Mapping, Optional

from toggle_engine.store import StateStore

from .models import ToggleDescriptor, ToggleKey


def with_snapshot(
    key: ToggleKey,
    store: StateStore,
    scope_of: Callable[[], Hashable],
    capture: Callable[[], Any],
    apply: Callable[[Any], None],
    restore: Callable[[Any], None],
    *,
    override: Any = None,
    observe: Optional[Callable[[], bool]] = None,
    on_unsaved: Optional[Callable[[], None]] = None,
    description: str = "",
    metadata: Mapping[str, object] | None = None,
) -> ToggleDescriptor:
    """Build a descriptor whose state lives in ``store`` under ``(scope, key)``.

    ``observe`` reports whether the override is currently visible in host
    state. When given it decides ``is_enabled``; the store only answers when
    the override cannot be observed directly.

    A snapshot is saved once per enable transition and never overwritten. If
    the override has since been undone by someone else, enabling again
    re-applies it but keeps the first snapshot, so disabling still returns the
    scope to what it was before the first enable.

    ``on_unsaved`` runs when disable is asked for while the override is
    observed but no snapshot exists (the user set it by hand). It may reset the
    state itself or raise ``ActionFailedError``; without it disable is a no-op.
    """

    def is_enabled() -> bool:
        if observe is not None:
            return bool(observe())
        return store.has(scope_of(), key)

    def enable() -> None:
        scope = scope_of()
        if store.has(scope, key):
            if observe is not None and not observe():
                apply(override)
            return
        snapshot = capture()
        store.save(scope, key, snapshot)
        try:
            apply(override)
        except Exception:
            try:
                restore(snapshot)
            finally:
                store.delete(scope, key)
            raise

    def disable() -> None:
        scope = scope_of()
        if not store.has(scope, key):
            if on_unsaved is not None and observe is not None and observe():
                on_unsaved()
            return
        restore(store.load(scope, key))
        store.delete(scope, key)

    return ToggleDescriptor(
        key=key,
        enable=enable,
        disable=disable,
        is_enabled=is_enabled,
        description=description,
        metadata={"saved_state": True, **(metadata or {})},
    )


__all__ = ["with_snapshot"]
