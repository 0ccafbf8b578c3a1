from __future__ import annotations

from typing import List, Sequence

import pytest

from toggle_engine.errors import ActionFailedError
from toggle_engine.features import (
    conceal_toggle,
    debug_toggle,
    external_toggle,
    help_edit_toggle,
    option_toggle,
    spell_language_cycle,
)
from toggle_engine.host import MemoryHost
from toggle_engine.toggles import ToggleRegistry


def make_registry() -> tuple[MemoryHost, ToggleRegistry, List[str]]:
    messages: List[str] = []
    return MemoryHost(), ToggleRegistry(notify=messages.append), messages


def test_conceal_uses_configured_level() -> None:
    host, registry, _ = make_registry()
    registry.register(conceal_toggle(host, level=3))

    registry.flip("conceal")
    assert host.get_option("conceallevel", host.current_window()) == 3

    registry.flip("conceal")
    assert host.get_option("conceallevel", host.current_window()) == 0


def test_debug_sets_every_option() -> None:
    host, registry, _ = make_registry()
    registry.register(debug_toggle(host))

    registry.enable("debug")

    assert host.get_option("verbose") == 1
    assert host.get_option("debug") == "msg"
    host.set_option("debug", None, "")
    assert registry.is_enabled("debug") is False


def test_help_edit_refuses_to_lock_modified_buffer() -> None:
    host, registry, messages = make_registry()
    registry.register(help_edit_toggle(host))
    buffer = host.current_buffer()
    host.set_modified(buffer)

    outcome = registry.dispatch("help_edit", "disable")

    assert outcome.changed is False
    assert messages == ["Buffer has unsaved changes"]
    assert host.get_option("modifiable", buffer) is True
    assert host.get_option("readonly", buffer) is False


def test_help_edit_locks_clean_buffer() -> None:
    host, registry, _ = make_registry()
    registry.register(help_edit_toggle(host))

    registry.disable("help_edit")

    buffer = host.current_buffer()
    assert host.get_option("modifiable", buffer) is False
    assert host.get_option("readonly", buffer) is True


def test_partial_write_is_rolled_back() -> None:
    host, registry, _ = make_registry()
    registry.register(
        option_toggle("mixed", host, {"verbose": (2, 0), "spell": ("yes", "no")})
    )

    with pytest.raises(ActionFailedError):
        registry.enable("mixed")

    assert host.get_option("verbose") == 0


def test_option_toggle_validates_scope() -> None:
    host = MemoryHost()

    with pytest.raises(ValueError):
        option_toggle("bad", host, {"spell": (True, False)}, scope="tab")  # type: ignore[arg-type]


def test_spell_cycle_rotates_languages() -> None:
    host, registry, _ = make_registry()
    registry.register_cycle(spell_language_cycle(host, ["en_us", "de"]))
    buffer = host.current_buffer()

    assert registry.current_state("spelllang") == "spelllang.off"
    assert registry.advance("spelllang") == "spelllang.en_us"
    assert host.get_option("spelllang", buffer) == "en_us"
    assert registry.advance("spelllang") == "spelllang.de"
    assert host.get_option("spell", buffer) is True
    assert registry.advance("spelllang") == "spelllang.off"
    assert host.get_option("spell", buffer) is False


def test_spell_cycle_restarts_from_unknown_language() -> None:
    host, registry, _ = make_registry()
    registry.register_cycle(spell_language_cycle(host, ["en_us"]))
    buffer = host.current_buffer()
    host.set_option("spelllang", buffer, "fr")
    host.set_option("spell", buffer, True)

    assert registry.current_state("spelllang") is None
    assert registry.advance("spelllang") == "spelllang.off"


def test_external_toggle_launches_helper() -> None:
    host, registry, _ = make_registry()
    launched: List[Sequence[str]] = []
    registry.register(
        external_toggle(
            "ligatures", host, "ligatures", ["fontctl", "--ligatures"], launcher=launched.append
        )
    )

    registry.flip("ligatures")
    registry.flip("ligatures")

    assert launched == [
        ("fontctl", "--ligatures", "on"),
        ("fontctl", "--ligatures", "off"),
    ]
    assert host.get_option("ligatures") is False


def test_external_toggle_launch_failure_keeps_state() -> None:
    host, registry, messages = make_registry()

    def missing(argv: Sequence[str]) -> None:
        raise FileNotFoundError(2, "No such file or directory")

    registry.register(external_toggle("ligatures", host, "ligatures", ["fontctl"], launcher=missing))

    outcome = registry.dispatch("ligatures")

    assert outcome.failed
    assert host.get_option("ligatures") is False
    assert messages == ["Cannot run fontctl: No such file or directory"]


def test_external_toggle_without_command_only_flips_option() -> None:
    host, registry, _ = make_registry()
    registry.register(external_toggle("ligatures", host, "ligatures", ()))

    assert registry.flip("ligatures") is True
    assert host.get_option("ligatures") is True
