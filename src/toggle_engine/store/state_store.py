"""Per-scope snapshot storage used by saved-state toggles."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterator

from toggle_engine.errors import AlreadySavedError, SnapshotNotFoundError
from toggle_engine.runtime import telemetry


class StateStore:
    """Holds one snapshot per ``(scope, key)`` pair.

    Scopes are opaque to the store: buffer handles, window handles, or any
    other hashable the caller chooses. An entry is never overwritten; callers
    must ``delete`` before saving again.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._entries: Dict[Hashable, Dict[str, Any]] = {}
        self._logger_name = logger_name

    def save(self, scope: Hashable, key: str, value: Any) -> None:
        bucket = self._entries.setdefault(scope, {})
        if key in bucket:
            raise AlreadySavedError(scope, key)
        bucket[key] = value
        telemetry.record_event(
            "store.save",
            level="debug",
            data={"scope": scope, "key": key},
            logger_name=self._logger_name,
        )

    def load(self, scope: Hashable, key: str) -> Any:
        try:
            return self._entries[scope][key]
        except KeyError as exc:
            raise SnapshotNotFoundError(scope, key) from exc

    def has(self, scope: Hashable, key: str) -> bool:
        return key in self._entries.get(scope, {})

    def delete(self, scope: Hashable, key: str) -> None:
        bucket = self._entries.get(scope)
        if not bucket or key not in bucket:
            return
        del bucket[key]
        if not bucket:
            del self._entries[scope]
        telemetry.record_event(
            "store.delete",
            level="debug",
            data={"scope": scope, "key": key},
            logger_name=self._logger_name,
        )

    def drop_scope(self, scope: Hashable) -> int:
        """Forget every snapshot owned by ``scope``; returns how many."""

        bucket = self._entries.pop(scope, None)
        if not bucket:
            return 0
        telemetry.record_event(
            "store.drop_scope",
            level="debug",
            data={"scope": scope, "keys": sorted(bucket)},
            logger_name=self._logger_name,
        )
        return len(bucket)

    def keys(self, scope: Hashable) -> tuple[str, ...]:
        return tuple(self._entries.get(scope, {}))

    def scopes(self) -> Iterator[Hashable]:
        yield from self._entries

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._entries.values())


__all__ = ["StateStore"]
