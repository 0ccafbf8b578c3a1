"""Built-in toggles, trigger keys, and commands for a host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Mapping, Optional, Sequence

from toggle_engine.host import EditorHost
from toggle_engine.runtime.config import EngineConfig
from toggle_engine.store import StateStore
from toggle_engine.toggles import Cycle, ToggleDescriptor, ToggleRegistry
from toggle_engine.toggles.models import Verb

from . import external, fold_navigation, format_program, scroll_bind, spell, syntax_column
from .commands import register_toggle_commands
from .options import conceal_toggle, debug_toggle, help_edit_toggle, spell_toggle
from .status import StatusFlags
from .yank_highlight import YankHighlighter

# Trigger tokens are opaque to the registry; these match single key presses
# in the Textual demo.
DEFAULT_TRIGGERS: Mapping[str, tuple[str, Verb]] = {
    "a": (fold_navigation.KEY, "flip"),
    "s": (scroll_bind.KEY, "flip"),
    "f": (format_program.KEY, "flip"),
    "m": (syntax_column.KEY, "flip"),
    "c": ("conceal", "flip"),
    "d": ("debug", "flip"),
    "e": ("help_edit", "flip"),
    "p": ("spell", "flip"),
    "l": (spell.KEY, "advance"),
    "y": ("highlight_yank", "flip"),
    "g": (external.LIGATURES_KEY, "flip"),
}


@dataclass(slots=True)
class DefaultToggles:
    """Handles to the pieces ``load_default_toggles`` wired together."""

    registry: ToggleRegistry
    store: StateStore
    yank: YankHighlighter
    status: StatusFlags
    commands: tuple[str, ...]


def _builders(
    host: EditorHost,
    store: StateStore,
    config: EngineConfig,
    yank: YankHighlighter,
    launcher: Optional[external.Launcher],
) -> Dict[str, Callable[[], ToggleDescriptor | Cycle]]:
    ligature_kwargs = {"launcher": launcher} if launcher is not None else {}
    return {
        fold_navigation.KEY: lambda: fold_navigation.fold_navigation_toggle(
            host, store, keys=config.fold_navigation_keys
        ),
        scroll_bind.KEY: lambda: scroll_bind.scroll_bind_toggle(host, store),
        format_program.KEY: lambda: format_program.format_program_toggle(host, store),
        syntax_column.KEY: lambda: syntax_column.syntax_column_toggle(
            host, store, override=config.synmaxcol_override
        ),
        "conceal": lambda: conceal_toggle(host, level=config.conceal_level),
        "debug": lambda: debug_toggle(host),
        "help_edit": lambda: help_edit_toggle(host),
        "spell": lambda: spell_toggle(host),
        spell.KEY: lambda: spell.spell_language_cycle(host, config.spell_languages),
        "highlight_yank": yank.descriptor,
        external.LIGATURES_KEY: lambda: external.ligatures_toggle(
            host, config.ligature_command, **ligature_kwargs
        ),
    }


def load_default_toggles(
    registry: ToggleRegistry,
    host: EditorHost,
    *,
    store: StateStore | None = None,
    config: EngineConfig | None = None,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    bind_triggers: bool = True,
    register_commands: bool = True,
    replace: bool = False,
    launcher: Optional[external.Launcher] = None,
) -> DefaultToggles:
    """Register the standard toggle set against ``host``.

    Snapshots of closed buffers and windows are dropped automatically, and
    domain failures raised by toggles are echoed by the host.
    """

    settings = config or EngineConfig()
    snapshot_store = store or StateStore()
    yank = YankHighlighter(host, duration_ms=settings.yank_highlight_ms)
    selected = _build_filters(include, exclude)

    for key, build in _builders(host, snapshot_store, settings, yank, launcher).items():
        if not _selected(key, selected):
            continue
        item = build()
        if isinstance(item, Cycle):
            registry.register_cycle(item, replace=replace)
        else:
            registry.register(item, replace=replace)

    if bind_triggers:
        for trigger, (key, verb) in DEFAULT_TRIGGERS.items():
            if key in registry:
                registry.bind(trigger, key, verb)

    commands: tuple[str, ...] = ()
    if register_commands:
        commands = register_toggle_commands(host, registry)

    def scope_closed(scope: Hashable) -> None:
        snapshot_store.drop_scope(scope)
        yank.forget(scope)

    host.on_scope_closed(scope_closed)
    registry.set_notifier(host.echo)

    status = StatusFlags.from_registry(registry)
    if spell.KEY in registry:
        status.add(spell.KEY, "Lang")

    return DefaultToggles(
        registry=registry,
        store=snapshot_store,
        yank=yank,
        status=status,
        commands=commands,
    )


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["load_default_toggles", "DefaultToggles", "DEFAULT_TRIGGERS"]
