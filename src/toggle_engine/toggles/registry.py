"""Toggle registry: idempotent enable/disable/flip plus trigger dispatch."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional

from toggle_engine.errors import (
    ActionFailedError,
    DuplicateToggleError,
    ReentrantToggleError,
    UnknownToggleError,
)
from toggle_engine.runtime import telemetry
from toggle_engine.runtime.telemetry import span

from .cycle import Cycle
from .models import (
    Action,
    Predicate,
    ToggleDescriptor,
    ToggleKey,
    ToggleOutcome,
    TriggerBinding,
    Verb,
)


def _noop_notify(message: str) -> None:  # pragma: no cover - default sink
    del message


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    toggle_count: int
    cycle_count: int
    trigger_count: int
    enabled: tuple[ToggleKey, ...]


class ToggleRegistry:
    """Owns toggle descriptors and guarantees idempotent transitions.

    ``enable`` and ``disable`` consult the descriptor's predicate first and
    only run the action when the state actually has to change. ``flip``
    evaluates the predicate once and runs exactly one action. A key that is
    mid-transition cannot be transitioned again until the first call returns.
    """

    def __init__(
        self,
        *,
        notify: Callable[[str], None] | None = None,
        logger_name: str | None = None,
    ) -> None:
        self._toggles: Dict[ToggleKey, ToggleDescriptor] = {}
        self._cycles: Dict[ToggleKey, Cycle] = {}
        self._triggers: Dict[str, TriggerBinding] = {}
        self._busy: set[ToggleKey] = set()
        self._notify = notify or _noop_notify
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def set_notifier(self, notify: Callable[[str], None]) -> None:
        self._notify = notify

    # registration -----------------------------------------------------------

    def register(
        self, descriptor: ToggleDescriptor, *, replace: bool = False
    ) -> ToggleDescriptor:
        with span(
            "toggles::register",
            logger_name=self._logger_name,
            component="toggles",
            metadata={"key": descriptor.key},
        ):
            self._claim_key(descriptor.key, replace=replace)
            self._cycles.pop(descriptor.key, None)
            self._toggles[descriptor.key] = descriptor
            self._touch()
            return descriptor

    def register_toggle(
        self,
        key: ToggleKey,
        enable: Action,
        disable: Action,
        is_enabled: Predicate,
        *,
        description: str = "",
        replace: bool = False,
    ) -> ToggleDescriptor:
        descriptor = ToggleDescriptor(
            key=key,
            enable=enable,
            disable=disable,
            is_enabled=is_enabled,
            description=description,
        )
        return self.register(descriptor, replace=replace)

    def register_cycle(self, cycle: Cycle, *, replace: bool = False) -> Cycle:
        with span(
            "toggles::register_cycle",
            logger_name=self._logger_name,
            component="toggles",
            metadata={"key": cycle.key, "states": len(cycle.states)},
        ):
            self._claim_key(cycle.key, replace=replace)
            self._toggles.pop(cycle.key, None)
            self._cycles[cycle.key] = cycle
            self._touch()
            return cycle

    def unregister(self, key: ToggleKey) -> None:
        if self._toggles.pop(key, None) is None and self._cycles.pop(key, None) is None:
            raise UnknownToggleError(key)
        for trigger in [t for t, b in self._triggers.items() if b.key == key]:
            del self._triggers[trigger]
        self._touch()

    def get(self, key: ToggleKey) -> ToggleDescriptor:
        try:
            return self._toggles[key]
        except KeyError:
            raise UnknownToggleError(key) from None

    def get_cycle(self, key: ToggleKey) -> Cycle:
        try:
            return self._cycles[key]
        except KeyError:
            raise UnknownToggleError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._toggles or key in self._cycles

    def is_cycle(self, key: ToggleKey) -> bool:
        return key in self._cycles

    def iter_descriptors(self) -> Iterator[ToggleDescriptor]:
        yield from self._toggles.values()

    def iter_cycles(self) -> Iterator[Cycle]:
        yield from self._cycles.values()

    # transitions ------------------------------------------------------------

    def is_enabled(self, key: ToggleKey) -> bool:
        return bool(self.get(key).is_enabled())

    def enable(self, key: ToggleKey) -> bool:
        """Run the enable action unless already enabled; returns whether it ran."""

        descriptor = self.get(key)
        with self._transition(key, "enable") as handle:
            if descriptor.is_enabled():
                handle.add_metadata("status", "noop")
                return False
            descriptor.enable()
            handle.add_metadata("status", "enabled")
            return True

    def disable(self, key: ToggleKey) -> bool:
        """Run the disable action unless already disabled; returns whether it ran."""

        descriptor = self.get(key)
        with self._transition(key, "disable") as handle:
            if not descriptor.is_enabled():
                handle.add_metadata("status", "noop")
                return False
            descriptor.disable()
            handle.add_metadata("status", "disabled")
            return True

    def flip(self, key: ToggleKey) -> bool:
        """Invert the toggle; returns the state it was moved to."""

        descriptor = self.get(key)
        with self._transition(key, "flip") as handle:
            if descriptor.is_enabled():
                descriptor.disable()
                handle.add_metadata("status", "disabled")
                return False
            descriptor.enable()
            handle.add_metadata("status", "enabled")
            return True

    def advance(self, key: ToggleKey) -> ToggleKey:
        """Move a cycle to its next state; returns the newly active state key."""

        cycle = self.get_cycle(key)
        with self._transition(key, "advance") as handle:
            current = cycle.active_index()
            target = cycle.states[cycle.next_index(current)]
            previous = None if current is None else cycle.states[current]
            if previous is not None:
                previous.disable()
            try:
                if not target.is_enabled():
                    target.enable()
            except ActionFailedError:
                if previous is not None:
                    previous.enable()
                raise
            handle.add_metadata("state", target.key)
            return target.key

    def current_state(self, key: ToggleKey) -> Optional[ToggleKey]:
        cycle = self.get_cycle(key)
        index = cycle.active_index()
        return None if index is None else cycle.states[index].key

    # trigger boundary -------------------------------------------------------

    def bind(self, trigger: str, key: ToggleKey, verb: Verb = "flip") -> TriggerBinding:
        if key not in self:
            raise UnknownToggleError(key)
        binding = TriggerBinding(trigger=trigger, key=key, verb=verb)
        self._triggers[trigger] = binding
        self._touch()
        return binding

    def unbind(self, trigger: str) -> Optional[TriggerBinding]:
        binding = self._triggers.pop(trigger, None)
        if binding is not None:
            self._touch()
        return binding

    def binding_for(self, trigger: str) -> Optional[TriggerBinding]:
        return self._triggers.get(trigger)

    def iter_bindings(self) -> Iterator[TriggerBinding]:
        yield from self._triggers.values()

    def trigger(self, trigger: str) -> Optional[ToggleOutcome]:
        binding = self._triggers.get(trigger)
        if binding is None:
            return None
        return self.dispatch(binding.key, binding.verb)

    def dispatch(self, key: ToggleKey, verb: Verb = "flip") -> ToggleOutcome:
        """Run ``verb`` on ``key``, turning domain failures into a message.

        ``ActionFailedError`` is reported through the notifier as one line and
        the outcome is marked unchanged. Every other error propagates.
        """

        try:
            if verb == "flip":
                enabled: Optional[bool] = self.flip(key)
                changed = True
            elif verb == "enable":
                changed = self.enable(key)
                enabled = True
            elif verb == "disable":
                changed = self.disable(key)
                enabled = False
            elif verb == "advance":
                state = self.advance(key)
                return ToggleOutcome(
                    key=key, verb=verb, changed=True, enabled=True, state=state
                )
            else:
                raise ValueError(f"unsupported verb '{verb}'")
        except ActionFailedError as exc:
            telemetry.record_event(
                "toggle.action_failed",
                level="warning",
                data={"key": key, "verb": verb, "message": exc.message},
                logger_name=self._logger_name,
            )
            self._notify(exc.message)
            return ToggleOutcome(
                key=key,
                verb=verb,
                changed=False,
                enabled=self._peek(key),
                message=exc.message,
            )
        return ToggleOutcome(key=key, verb=verb, changed=changed, enabled=enabled)

    def _peek(self, key: ToggleKey) -> Optional[bool]:
        # The predicate may be what failed; never raise out of the handler.
        if key not in self._toggles:
            return None
        try:
            return self.is_enabled(key)
        except ActionFailedError:
            return None

    def stats(self) -> RegistryStats:
        return RegistryStats(
            toggle_count=len(self._toggles),
            cycle_count=len(self._cycles),
            trigger_count=len(self._triggers),
            enabled=tuple(
                key for key, descriptor in self._toggles.items() if descriptor.is_enabled()
            ),
        )

    # internals --------------------------------------------------------------

    def _claim_key(self, key: ToggleKey, *, replace: bool) -> None:
        if key in self and not replace:
            raise DuplicateToggleError(key)
        if key in self._busy:
            raise ReentrantToggleError(key)

    @contextmanager
    def _transition(self, key: ToggleKey, verb: str) -> Iterator[telemetry.SpanHandle]:
        if key in self._busy:
            raise ReentrantToggleError(key)
        self._busy.add(key)
        try:
            with span(
                f"toggles::{verb}",
                logger_name=self._logger_name,
                component="toggles",
                metadata={"key": key},
            ) as handle:
                yield handle
        finally:
            self._busy.discard(key)

    def _touch(self) -> None:
        self._revision += 1


__all__ = ["ToggleRegistry", "RegistryStats"]
