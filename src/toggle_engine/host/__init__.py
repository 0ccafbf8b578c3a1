"""Host contracts and the in-memory reference host."""

from .memory import BufferHandle, MemoryHost, OPTION_DEFAULTS, WindowHandle
from .protocols import (
    BindingAction,
    CommandHandler,
    CommandHost,
    EditorHost,
    HighlightHost,
    KeyBindingHost,
    LifecycleHost,
    OptionHost,
    OptionValue,
)

__all__ = [
    "MemoryHost",
    "BufferHandle",
    "WindowHandle",
    "OPTION_DEFAULTS",
    "BindingAction",
    "CommandHandler",
    "CommandHost",
    "EditorHost",
    "HighlightHost",
    "KeyBindingHost",
    "LifecycleHost",
    "OptionHost",
    "OptionValue",
]
