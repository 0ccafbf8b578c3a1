"""In-process host used by tests and the Textual demo."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from toggle_engine.errors import ActionFailedError

from .protocols import BindingAction, CommandHandler, OptionValue

OPTION_DEFAULTS: Dict[str, OptionValue] = {
    # global
    "verbose": 0,
    "debug": "",
    "ligatures": False,
    "yank_highlight": False,
    # buffer-local
    "formatprg": "",
    "synmaxcol": 200,
    "spell": False,
    "spelllang": "en",
    "modified": False,
    "modifiable": True,
    "readonly": False,
    # window-local
    "scrollbind": False,
    "cursorbind": False,
    "cursorline": False,
    "foldenable": True,
    "conceallevel": 0,
}


@dataclass(frozen=True, slots=True)
class BufferHandle:
    id: int

    def __str__(self) -> str:
        return f"buffer:{self.id}"


@dataclass(frozen=True, slots=True)
class WindowHandle:
    id: int

    def __str__(self) -> str:
        return f"window:{self.id}"


@dataclass(slots=True)
class BufferRecord:
    handle: BufferHandle
    name: str = ""
    options: Dict[str, OptionValue] = field(default_factory=dict)
    bindings: Dict[str, BindingAction] = field(default_factory=dict)
    reveals: int = 0


@dataclass(slots=True)
class WindowRecord:
    handle: WindowHandle
    buffer: BufferHandle
    options: Dict[str, OptionValue] = field(default_factory=dict)


@dataclass(slots=True)
class PendingTimer:
    deadline: float
    callback: Callable[[], None]
    generation: int


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class MemoryHost:
    """Buffers, windows, options, bindings, commands, and timers in memory.

    Implements every protocol in ``toggle_engine.host.protocols``. Timers are
    not fired by a background thread; call ``process_timers`` from the event
    loop (the Textual app does this on an interval, tests drive ``clock``).
    """

    def __init__(self, *, clock: Callable[[], float] = _monotonic_ms) -> None:
        self._clock = clock
        self._globals: Dict[str, OptionValue] = {}
        self._buffers: Dict[BufferHandle, BufferRecord] = {}
        self._windows: Dict[WindowHandle, WindowRecord] = {}
        self._commands: Dict[str, CommandHandler] = {}
        self._highlights: Dict[int, Tuple[Hashable, Any]] = {}
        self._timers: Dict[int, PendingTimer] = {}
        self._close_listeners: List[Callable[[Hashable], None]] = []
        self._counter = 0
        self._current: Optional[WindowHandle] = None
        self.messages: List[str] = []
        self.open_window(self.open_buffer("[No Name]"))

    # scopes -----------------------------------------------------------------

    def _next_id(self) -> int:
        self._counter += 1
        return self._counter

    def open_buffer(self, name: str = "") -> BufferHandle:
        handle = BufferHandle(self._next_id())
        self._buffers[handle] = BufferRecord(handle=handle, name=name)
        return handle

    def open_window(self, buffer: BufferHandle, *, focus: bool = True) -> WindowHandle:
        self._buffer(buffer)
        handle = WindowHandle(self._next_id())
        self._windows[handle] = WindowRecord(handle=handle, buffer=buffer)
        if focus or self._current is None:
            self._current = handle
        return handle

    def focus(self, window: WindowHandle) -> None:
        self._window(window)
        self._current = window

    def show_buffer(self, buffer: BufferHandle, window: WindowHandle | None = None) -> None:
        self._buffer(buffer)
        self._window(window or self.current_window()).buffer = buffer

    def close_window(self, window: WindowHandle) -> None:
        self._windows.pop(self._window(window).handle)
        if self._current == window:
            self._current = next(iter(self._windows), None)
        self._notify_closed(window)

    def close_buffer(self, buffer: BufferHandle) -> None:
        self._buffers.pop(self._buffer(buffer).handle)
        for window in [w for w in self._windows.values() if w.buffer == buffer]:
            self.close_window(window.handle)
        self._notify_closed(buffer)

    def on_scope_closed(self, callback: Callable[[Hashable], None]) -> None:
        self._close_listeners.append(callback)

    def _notify_closed(self, scope: Hashable) -> None:
        for callback in list(self._close_listeners):
            callback(scope)

    def current_window(self) -> WindowHandle:
        if self._current is None:
            raise ActionFailedError("No window is open")
        return self._current

    def current_buffer(self) -> BufferHandle:
        return self._window(self.current_window()).buffer

    def buffer_record(self, buffer: BufferHandle | None = None) -> BufferRecord:
        return self._buffer(buffer or self.current_buffer())

    def set_modified(self, buffer: BufferHandle, modified: bool = True) -> None:
        self._buffer(buffer).options["modified"] = modified

    def _buffer(self, handle: Hashable) -> BufferRecord:
        record = self._buffers.get(handle)  # type: ignore[arg-type]
        if record is None:
            raise ActionFailedError(f"Invalid buffer {handle}")
        return record

    def _window(self, handle: Hashable) -> WindowRecord:
        record = self._windows.get(handle)  # type: ignore[arg-type]
        if record is None:
            raise ActionFailedError(f"Invalid window {handle}")
        return record

    # options ----------------------------------------------------------------

    def _option_table(self, scope: Optional[Hashable]) -> Dict[str, OptionValue]:
        if scope is None:
            return self._globals
        if isinstance(scope, BufferHandle):
            return self._buffer(scope).options
        if isinstance(scope, WindowHandle):
            return self._window(scope).options
        raise ActionFailedError(f"Unknown scope {scope!r}")

    def get_option(self, name: str, scope: Optional[Hashable] = None) -> OptionValue:
        if name not in OPTION_DEFAULTS:
            raise ActionFailedError(f"Unknown option: {name}")
        return self._option_table(scope).get(name, OPTION_DEFAULTS[name])

    def set_option(
        self, name: str, scope: Optional[Hashable], value: OptionValue
    ) -> None:
        default = OPTION_DEFAULTS.get(name)
        if default is None:
            raise ActionFailedError(f"Unknown option: {name}")
        if type(value) is not type(default):
            raise ActionFailedError(f"Invalid argument: {name}={value!r}")
        self._option_table(scope)[name] = value

    # bindings ---------------------------------------------------------------

    def binding(self, scope: Hashable, lhs: str) -> Optional[BindingAction]:
        return self._buffer(scope).bindings.get(lhs)

    def bind(self, scope: Hashable, lhs: str, action: BindingAction) -> None:
        self._buffer(scope).bindings[lhs] = action

    def unbind(self, scope: Hashable, lhs: str) -> Optional[BindingAction]:
        return self._buffer(scope).bindings.pop(lhs, None)

    def press(self, lhs: str, scope: Hashable | None = None) -> bool:
        """Run the binding for ``lhs``; returns ``False`` when nothing is bound."""

        action = self.binding(scope or self.current_buffer(), lhs)
        if action is None:
            return False
        action()
        return True

    def reveal_cursor(self, scope: Hashable) -> None:
        self._buffer(scope).reveals += 1

    # commands ---------------------------------------------------------------

    def register_command(self, name: str, handler: CommandHandler) -> None:
        if not name or not name[0].isupper():
            raise ValueError("User commands must start with an uppercase letter")
        self._commands[name] = handler

    def has_command(self, name: str) -> bool:
        return name in self._commands

    def execute(self, line: str) -> None:
        """Run ``Name[!] [args...]`` against the registered commands."""

        parts = line.strip().split()
        if not parts:
            return
        head, args = parts[0], parts[1:]
        bang = head.endswith("!")
        name = head[:-1] if bang else head
        handler = self._commands.get(name)
        if handler is None:
            raise ActionFailedError(f"Not an editor command: {line.strip()}")
        handler(bang, args)

    def echo(self, message: str) -> None:
        self.messages.append(message)

    # highlights + timers ----------------------------------------------------

    def add_highlight(self, scope: Hashable, region: Any) -> int:
        highlight_id = self._next_id()
        self._highlights[highlight_id] = (scope, region)
        return highlight_id

    def clear_highlight(self, highlight_id: int) -> bool:
        return self._highlights.pop(highlight_id, None) is not None

    def highlights(self, scope: Hashable | None = None) -> Dict[int, Any]:
        return {
            hid: region
            for hid, (owner, region) in self._highlights.items()
            if scope is None or owner == scope
        }

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        generation = self._next_id()
        self._timers[generation] = PendingTimer(
            deadline=self._clock() + delay_ms,
            callback=callback,
            generation=generation,
        )
        return generation

    def cancel_timer(self, generation: int) -> None:
        self._timers.pop(generation, None)

    def pending_timers(self) -> int:
        return len(self._timers)

    def process_timers(self) -> int:
        """Fire every timer whose deadline has passed; returns how many fired."""

        now = self._clock()
        due = sorted(
            (timer for timer in self._timers.values() if timer.deadline <= now),
            key=lambda timer: (timer.deadline, timer.generation),
        )
        for timer in due:
            if self._timers.pop(timer.generation, None) is not None:
                timer.callback()
        return len(due)


__all__ = [
    "MemoryHost",
    "BufferHandle",
    "WindowHandle",
    "BufferRecord",
    "WindowRecord",
    "OPTION_DEFAULTS",
]
