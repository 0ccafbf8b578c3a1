"""Plain option flips: no snapshot, state is read straight from the host."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Literal, Mapping, Optional, Tuple

from toggle_engine.errors import ActionFailedError
from toggle_engine.host import OptionHost, OptionValue
from toggle_engine.toggles import ToggleDescriptor

Scope = Literal["global", "buffer", "window"]
Guard = Callable[[str, Optional[Hashable]], None]


def _resolve_scope(host: OptionHost, scope: Scope) -> Optional[Hashable]:
    if scope == "global":
        return None
    if scope == "buffer":
        return host.current_buffer()
    if scope == "window":
        return host.current_window()
    raise ValueError(f"unknown scope '{scope}'")


def option_toggle(
    key: str,
    host: OptionHost,
    settings: Mapping[str, Tuple[OptionValue, OptionValue]],
    *,
    scope: Scope = "global",
    guard: Guard | None = None,
    description: str = "",
    status: str | None = None,
) -> ToggleDescriptor:
    """Toggle that writes ``on``/``off`` values for each option in ``settings``.

    Enabled means every option currently holds its ``on`` value. ``guard``
    runs before any write with the verb and resolved scope and may raise
    ``ActionFailedError`` to refuse the change. If a write fails half way, the
    options already written are put back.
    """

    pairs = dict(settings)
    if not pairs:
        raise ValueError("option_toggle needs at least one option")
    if scope not in ("global", "buffer", "window"):
        raise ValueError(f"unknown scope '{scope}'")

    def is_enabled() -> bool:
        target = _resolve_scope(host, scope)
        return all(host.get_option(name, target) == on for name, (on, _) in pairs.items())

    def write(verb: str, index: int) -> None:
        target = _resolve_scope(host, scope)
        if guard is not None:
            guard(verb, target)
        written: Dict[str, OptionValue] = {}
        try:
            for name, values in pairs.items():
                previous = host.get_option(name, target)
                host.set_option(name, target, values[index])
                written[name] = previous
        except ActionFailedError:
            for name, previous in written.items():
                host.set_option(name, target, previous)
            raise

    metadata: Dict[str, object] = {"scope": scope}
    if status:
        metadata["status"] = status
    return ToggleDescriptor(
        key=key,
        enable=lambda: write("enable", 0),
        disable=lambda: write("disable", 1),
        is_enabled=is_enabled,
        description=description,
        metadata=metadata,
    )


def refuse_if_modified(verb: str, scope: Optional[Hashable], *, host: OptionHost) -> None:
    """Guard for read-only toggles: a modified buffer cannot be locked again."""

    if verb == "disable" and scope is not None and host.get_option("modified", scope):
        raise ActionFailedError("Buffer has unsaved changes")


def conceal_toggle(host: OptionHost, *, level: int = 2) -> ToggleDescriptor:
    return option_toggle(
        "conceal",
        host,
        {"conceallevel": (level, 0)},
        scope="window",
        description=f"Conceal markup (level {level})",
    )


def debug_toggle(host: OptionHost) -> ToggleDescriptor:
    return option_toggle(
        "debug",
        host,
        {"verbose": (1, 0), "debug": ("msg", "")},
        description="Verbose error messages",
        status="Debug",
    )


def spell_toggle(host: OptionHost) -> ToggleDescriptor:
    return option_toggle(
        "spell",
        host,
        {"spell": (True, False)},
        scope="buffer",
        description="Spell checking",
        status="Spell",
    )


def help_edit_toggle(host: OptionHost) -> ToggleDescriptor:
    def guard(verb: str, scope: Optional[Hashable]) -> None:
        refuse_if_modified(verb, scope, host=host)

    return option_toggle(
        "help_edit",
        host,
        {"modifiable": (True, False), "readonly": (False, True)},
        scope="buffer",
        guard=guard,
        description="Allow editing the current (help) buffer",
        status="Edit",
    )


__all__ = [
    "option_toggle",
    "refuse_if_modified",
    "conceal_toggle",
    "debug_toggle",
    "spell_toggle",
    "help_edit_toggle",
]
