"""Toggles that also notify an external helper program."""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

from toggle_engine.errors import ActionFailedError
from toggle_engine.host import OptionHost
from toggle_engine.runtime import telemetry
from toggle_engine.toggles import ToggleDescriptor

Launcher = Callable[[Sequence[str]], object]

LIGATURES_KEY = "ligatures"


def spawn_detached(argv: Sequence[str]) -> subprocess.Popen:
    """Start ``argv`` without waiting for it or keeping its output."""

    return subprocess.Popen(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def external_toggle(
    key: str,
    host: OptionHost,
    option: str,
    command: Sequence[str],
    *,
    launcher: Launcher = spawn_detached,
    description: str = "",
) -> ToggleDescriptor:
    """Flip a global boolean option and tell ``command`` about it.

    The helper is run as ``command + ["on"]`` or ``command + ["off"]`` and is
    never awaited. With an empty ``command`` only the option changes. The
    option is written after a successful launch, so a helper that cannot be
    started leaves the toggle where it was.
    """

    base = tuple(command)

    def launch(state: str) -> None:
        if not base:
            return
        argv = (*base, state)
        try:
            launcher(argv)
        except OSError as exc:
            raise ActionFailedError(
                f"Cannot run {base[0]}: {exc.strerror or exc}", key=key
            ) from exc
        telemetry.record_event("external.launch", data={"key": key, "argv": argv})

    def enable() -> None:
        launch("on")
        host.set_option(option, None, True)

    def disable() -> None:
        launch("off")
        host.set_option(option, None, False)

    return ToggleDescriptor(
        key=key,
        enable=enable,
        disable=disable,
        is_enabled=lambda: bool(host.get_option(option)),
        description=description,
        metadata={"command": base},
    )


def ligatures_toggle(
    host: OptionHost, command: Sequence[str], *, launcher: Launcher = spawn_detached
) -> ToggleDescriptor:
    return external_toggle(
        LIGATURES_KEY,
        host,
        "ligatures",
        command,
        launcher=launcher,
        description="Font ligatures",
    )


__all__ = ["LIGATURES_KEY", "Launcher", "spawn_detached", "external_toggle", "ligatures_toggle"]
