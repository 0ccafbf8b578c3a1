"""User commands that drive toggles from the host's command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from toggle_engine.errors import ActionFailedError
from toggle_engine.host import CommandHost
from toggle_engine.toggles import ToggleOutcome, ToggleRegistry


@dataclass(frozen=True, slots=True)
class ToggleCommand:
    """``Name`` enables the toggle, ``Name!`` disables it.

    The bang is read as a plain "disable" switch; it never turns into a
    numeric argument that could be negated a second time downstream.
    """

    name: str
    key: str
    description: str = ""

    def handler(self, registry: ToggleRegistry):
        def run(bang: bool, args: Sequence[str]) -> ToggleOutcome:
            if args:
                raise ActionFailedError(f"{self.name} takes no arguments")
            return registry.dispatch(self.key, "disable" if bang else "enable")

        return run


DEFAULT_COMMANDS: tuple[ToggleCommand, ...] = (
    ToggleCommand(
        name="AutoOpenFolds",
        key="auto_open_folds",
        description="Open folds while navigating (! to stop)",
    ),
)


def _toggle_by_name(registry: ToggleRegistry):
    def run(bang: bool, args: Sequence[str]) -> List[ToggleOutcome]:
        if not args:
            raise ActionFailedError("Toggle requires at least one name")
        unknown = [key for key in args if key not in registry]
        if unknown:
            raise ActionFailedError(f"Unknown toggle: {', '.join(unknown)}")
        outcomes: List[ToggleOutcome] = []
        for key in args:
            if registry.is_cycle(key):
                outcomes.append(registry.dispatch(key, "advance"))
            else:
                outcomes.append(registry.dispatch(key, "disable" if bang else "flip"))
        return outcomes

    return run


def register_toggle_commands(
    host: CommandHost,
    registry: ToggleRegistry,
    commands: Iterable[ToggleCommand] = DEFAULT_COMMANDS,
    *,
    generic_name: str | None = "Toggle",
) -> tuple[str, ...]:
    """Expose ``commands`` plus a generic ``Toggle name...`` command.

    ``Toggle name`` flips (or advances a cycle), ``Toggle! name`` forces off.
    Commands whose toggle is not registered are skipped. Returns the command
    names that were registered.
    """

    registered: List[str] = []
    for command in commands:
        if command.key not in registry:
            continue
        host.register_command(command.name, command.handler(registry))
        registered.append(command.name)
    if generic_name:
        host.register_command(generic_name, _toggle_by_name(registry))
        registered.append(generic_name)
    return tuple(registered)


__all__ = ["ToggleCommand", "DEFAULT_COMMANDS", "register_toggle_commands"]
