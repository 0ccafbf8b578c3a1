from __future__ import annotations

from typing import List

from toggle_engine.adapters.textual import TextualToggleAdapter, TextualUIHooks
from toggle_engine.features import load_default_toggles
from toggle_engine.host import MemoryHost
from toggle_engine.toggles import ToggleRegistry


class ManualClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_adapter():
    clock = ManualClock()
    host = MemoryHost(clock=clock)
    toggles = load_default_toggles(ToggleRegistry(), host, launcher=lambda argv: None)
    statuses: List[str] = []
    notices: List[str] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_status=statuses.append,
        notify=notices.append,
        log=logs.append,
    )
    adapter = TextualToggleAdapter(
        toggles.registry, hooks, host=host, status=toggles.status
    )
    return clock, host, toggles, adapter, statuses, notices, logs


def test_adapter_publishes_status_on_start_and_change() -> None:
    _, _, _, adapter, statuses, _, _ = make_adapter()

    assert statuses == ["[GFP][Edit]"]

    outcome = adapter.handle_textual_key("a")

    assert outcome is not None and outcome.changed
    assert statuses[-1] == "[AOF][GFP][Edit]"


def test_unbound_key_is_ignored() -> None:
    _, _, _, adapter, statuses, _, logs = make_adapter()

    assert adapter.handle_textual_key("z") is None
    assert len(statuses) == 1
    assert logs == ["key -> z"]


def test_failures_reach_hooks_and_host() -> None:
    _, host, _, adapter, _, notices, logs = make_adapter()

    outcome = adapter.handle_textual_key("f")

    assert outcome is not None and outcome.failed
    assert notices == ["No local format program was saved for this buffer"]
    assert host.messages == notices
    assert any(line.startswith("message: ") for line in logs)


def test_process_timeouts_clears_yank_highlight() -> None:
    clock, host, toggles, adapter, _, _, _ = make_adapter()
    adapter.handle_textual_key("y")
    toggles.yank.on_yank(region="word")
    assert host.highlights()

    assert adapter.process_timeouts() == 0
    clock.now = 150
    assert adapter.process_timeouts() == 1
    assert host.highlights() == {}


def test_adapter_without_host_has_no_timers() -> None:
    registry = ToggleRegistry()
    statuses: List[str] = []
    adapter = TextualToggleAdapter(registry, TextualUIHooks(update_status=statuses.append))

    assert adapter.process_timeouts() == 0
    assert statuses == [""]
