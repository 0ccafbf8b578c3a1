from __future__ import annotations

from typing import List

import pytest

from toggle_engine.features import (
    RevealBinding,
    fold_navigation_active,
    fold_navigation_toggle,
    format_program_toggle,
    scroll_bind_toggle,
    syntax_column_toggle,
)
from toggle_engine.host import MemoryHost
from toggle_engine.store import StateStore
from toggle_engine.toggles import ToggleRegistry


def make_setup() -> tuple[MemoryHost, StateStore, ToggleRegistry, List[str]]:
    messages: List[str] = []
    host = MemoryHost(clock=lambda: 0.0)
    store = StateStore()
    registry = ToggleRegistry(notify=messages.append)
    return host, store, registry, messages


def window_state(host: MemoryHost) -> dict:
    window = host.current_window()
    return {
        name: host.get_option(name, window)
        for name in ("scrollbind", "cursorbind", "cursorline", "foldenable")
    }


def test_scroll_bind_scenario() -> None:
    host, store, registry, _ = make_setup()
    registry.register(scroll_bind_toggle(host, store))
    before = window_state(host)
    assert before == {
        "scrollbind": False,
        "cursorbind": False,
        "cursorline": False,
        "foldenable": True,
    }

    registry.enable("scrollbind")
    assert window_state(host) == {
        "scrollbind": True,
        "cursorbind": True,
        "cursorline": True,
        "foldenable": False,
    }

    registry.disable("scrollbind")
    assert window_state(host) == before
    assert len(store) == 0


def test_scroll_bind_snapshot_is_per_window() -> None:
    host, store, registry, _ = make_setup()
    registry.register(scroll_bind_toggle(host, store))
    first = host.current_window()
    host.set_option("cursorline", first, True)
    second = host.open_window(host.current_buffer())

    registry.enable("scrollbind")
    host.focus(first)
    registry.enable("scrollbind")
    registry.disable("scrollbind")

    assert host.get_option("cursorline", first) is True
    assert host.get_option("scrollbind", second) is True
    assert store.has(second, "scrollbind")


def test_scroll_bind_set_by_hand_can_be_turned_off() -> None:
    host, store, registry, _ = make_setup()
    registry.register(scroll_bind_toggle(host, store))
    host.set_option("scrollbind", host.current_window(), True)

    assert registry.flip("scrollbind") is False

    assert host.get_option("scrollbind", host.current_window()) is False


def test_format_program_inversion_scenario() -> None:
    host, store, registry, _ = make_setup()
    registry.register(format_program_toggle(host, store))
    buffer = host.current_buffer()
    host.set_option("formatprg", buffer, "prettier")
    assert registry.is_enabled("global_formatprg") is False

    registry.flip("global_formatprg")
    assert host.get_option("formatprg", buffer) == ""
    assert store.load(buffer, "global_formatprg") == "prettier"

    registry.flip("global_formatprg")
    assert host.get_option("formatprg", buffer) == "prettier"
    assert store.has(buffer, "global_formatprg") is False


def test_format_program_without_saved_value_reports() -> None:
    host, store, registry, messages = make_setup()
    registry.register(format_program_toggle(host, store))

    outcome = registry.dispatch("global_formatprg", "flip")

    assert outcome.changed is False
    assert outcome.enabled is True
    assert messages == ["No local format program was saved for this buffer"]


def test_format_program_predicate_reads_live_value() -> None:
    host, store, registry, _ = make_setup()
    registry.register(format_program_toggle(host, store))
    buffer = host.current_buffer()
    host.set_option("formatprg", buffer, "prettier")
    registry.enable("global_formatprg")

    host.set_option("formatprg", buffer, "black")

    assert registry.is_enabled("global_formatprg") is False
    registry.enable("global_formatprg")
    registry.disable("global_formatprg")
    assert host.get_option("formatprg", buffer) == "prettier"


def test_syntax_column_round_trip() -> None:
    host, store, registry, _ = make_setup()
    registry.register(syntax_column_toggle(host, store, override=4000))
    buffer = host.current_buffer()
    host.set_option("synmaxcol", buffer, 250)

    assert registry.flip("synmaxcol") is True
    assert host.get_option("synmaxcol", buffer) == 4000
    assert registry.flip("synmaxcol") is False
    assert host.get_option("synmaxcol", buffer) == 250


def test_syntax_column_rejects_bad_override() -> None:
    host, store, _, _ = make_setup()

    with pytest.raises(ValueError):
        syntax_column_toggle(host, store, override=0)


def test_fold_navigation_wraps_and_restores_bindings() -> None:
    host, store, registry, _ = make_setup()
    registry.register(fold_navigation_toggle(host, store, keys=("j", "k")))
    buffer = host.current_buffer()
    moves: List[str] = []
    original_j = lambda: moves.append("j")  # noqa: E731
    host.bind(buffer, "j", original_j)

    registry.enable("auto_open_folds")

    assert fold_navigation_active(store, buffer)
    assert isinstance(host.binding(buffer, "j"), RevealBinding)
    host.press("j")
    host.press("k")
    assert moves == ["j"]
    assert host.buffer_record().reveals == 2

    registry.disable("auto_open_folds")

    assert host.binding(buffer, "j") is original_j
    assert host.binding(buffer, "k") is None
    assert not fold_navigation_active(store, buffer)


def test_fold_navigation_enable_twice_keeps_original_bindings() -> None:
    host, store, registry, _ = make_setup()
    toggle = fold_navigation_toggle(host, store, keys=("j",))
    registry.register(toggle)
    buffer = host.current_buffer()

    registry.enable("auto_open_folds")
    toggle.enable()  # bypassing the registry must not wrap the wrapper
    registry.disable("auto_open_folds")

    assert host.binding(buffer, "j") is None


def test_fold_navigation_is_per_buffer() -> None:
    host, store, registry, _ = make_setup()
    registry.register(fold_navigation_toggle(host, store, keys=("j",)))
    first = host.current_buffer()
    registry.enable("auto_open_folds")

    second = host.open_buffer("notes.txt")
    host.show_buffer(second)

    assert registry.is_enabled("auto_open_folds") is False
    assert host.binding(second, "j") is None
    assert host.binding(first, "j") is not None
