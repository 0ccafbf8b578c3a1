from __future__ import annotations

from toggle_engine.features import YankHighlighter
from toggle_engine.host import MemoryHost
from toggle_engine.toggles import ToggleRegistry


class ManualClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_highlighter(duration_ms: int = 150):
    clock = ManualClock()
    host = MemoryHost(clock=clock)
    yank = YankHighlighter(host, duration_ms=duration_ms)
    registry = ToggleRegistry()
    registry.register(yank.descriptor())
    registry.enable("highlight_yank")
    return clock, host, yank, registry


def test_disabled_highlighter_does_nothing() -> None:
    host = MemoryHost()
    yank = YankHighlighter(host)

    assert yank.on_yank(region=(0, 0, 0, 4)) is None
    assert host.highlights() == {}


def test_highlight_cleared_after_delay() -> None:
    clock, host, yank, _ = make_highlighter()
    buffer = host.current_buffer()

    highlight_id = yank.on_yank(region=(0, 0, 0, 4))

    assert host.highlights(buffer) == {highlight_id: (0, 0, 0, 4)}
    clock.now = 100
    assert host.process_timers() == 0
    clock.now = 150
    assert host.process_timers() == 1
    assert host.highlights() == {}
    assert yank.active(buffer) is None


def test_stale_clear_is_noop() -> None:
    clock, host, yank, _ = make_highlighter()
    buffer = host.current_buffer()

    first = yank.on_yank(region="first")
    clock.now = 100
    second = yank.on_yank(region="second")

    clock.now = 160  # only the first timer is due
    host.process_timers()

    assert host.highlights(buffer) == {second: "second"}
    assert first not in host.highlights()
    assert yank.clear(buffer, first) is False

    clock.now = 260
    host.process_timers()
    assert host.highlights() == {}


def test_disabling_clears_active_highlights() -> None:
    _, host, yank, registry = make_highlighter()
    yank.on_yank(region="text")

    registry.disable("highlight_yank")

    assert host.highlights() == {}
    assert yank.active(host.current_buffer()) is None
