"""Executable Textual app that exercises the default toggles."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use toggle_engine.adapters.textual.app"
    ) from exc

from toggle_engine.features import DefaultToggles, load_default_toggles
from toggle_engine.features.defaults import DEFAULT_TRIGGERS
from toggle_engine.host import MemoryHost
from toggle_engine.runtime import telemetry
from toggle_engine.runtime.config import load_config
from toggle_engine.toggles import ToggleRegistry

from .controller import TextualToggleAdapter, TextualUIHooks


def create_default_toggles(host: MemoryHost) -> DefaultToggles:
    """Registry + default toggles wired to ``host`` with env configuration."""

    return load_default_toggles(ToggleRegistry(), host, config=load_config())


class ToggleEngineApp(App[None]):
    """Minimal Textual UI listing the toggles and their live state."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#toggle-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#message-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.host = MemoryHost()
        self.toggles: DefaultToggles | None = None
        self.adapter: TextualToggleAdapter | None = None
        self._toggle_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="toggle-area"):
            self._toggle_widget = Static("", id="toggle-view")
            yield self._toggle_widget
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._status_widget
        yield self._message_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.toggles = create_default_toggles(self.host)
        hooks = TextualUIHooks(
            update_status=self._update_status,
            notify=self._show_message,
            log=self._log_line,
        )
        self.adapter = TextualToggleAdapter(
            self.toggles.registry, hooks, host=self.host, status=self.toggles.status
        )
        self._render_toggles()
        self.set_interval(0.05, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter and self.adapter.process_timeouts():
            self._render_toggles()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        if event.key == "Y" and self.toggles:
            self.toggles.yank.on_yank(region=(0, 0, 0, 10))
            self._show_message("yanked")
        elif self.adapter.handle_textual_key(event.character or event.key) is None:
            return
        self._render_toggles()
        event.stop()

    def _render_toggles(self) -> None:
        if not self.toggles or not self._toggle_widget:
            return
        registry = self.toggles.registry
        lines: List[str] = []
        for trigger, (key, verb) in DEFAULT_TRIGGERS.items():
            if key not in registry:
                continue
            if registry.is_cycle(key):
                state = registry.current_state(key) or "-"
                lines.append(f"{trigger}  {key:<18} {verb:<8} {state}")
            else:
                mark = "on" if registry.is_enabled(key) else "off"
                lines.append(f"{trigger}  {key:<18} {verb:<8} {mark}")
        highlights = len(self.host.highlights())
        lines.append("")
        lines.append(f"Y  yank (highlights: {highlights})")
        self._toggle_widget.update("\n".join(lines))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_message(self, message: str) -> None:
        if self._message_widget:
            self._message_widget.update(message)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.log", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the toggle engine Textual demo.")
    parser.add_argument(
        "--preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    ToggleEngineApp().run()


if __name__ == "__main__":  # pragma: no cover - manual demo entry point
    main()
