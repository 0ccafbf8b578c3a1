"""Concrete toggles built on the registry, store, and host protocols."""

from .commands import DEFAULT_COMMANDS, ToggleCommand, register_toggle_commands
from .defaults import DEFAULT_TRIGGERS, DefaultToggles, load_default_toggles
from .external import external_toggle, ligatures_toggle, spawn_detached
from .fold_navigation import RevealBinding, fold_navigation_active, fold_navigation_toggle
from .format_program import format_program_toggle
from .options import (
    conceal_toggle,
    debug_toggle,
    help_edit_toggle,
    option_toggle,
    spell_toggle,
)
from .scroll_bind import scroll_bind_toggle
from .spell import spell_language_cycle
from .status import StatusFlag, StatusFlags
from .syntax_column import syntax_column_toggle
from .yank_highlight import YankHighlighter

__all__ = [
    "DEFAULT_COMMANDS",
    "DEFAULT_TRIGGERS",
    "DefaultToggles",
    "RevealBinding",
    "StatusFlag",
    "StatusFlags",
    "ToggleCommand",
    "YankHighlighter",
    "conceal_toggle",
    "debug_toggle",
    "external_toggle",
    "fold_navigation_active",
    "fold_navigation_toggle",
    "format_program_toggle",
    "help_edit_toggle",
    "ligatures_toggle",
    "load_default_toggles",
    "option_toggle",
    "register_toggle_commands",
    "scroll_bind_toggle",
    "spawn_detached",
    "spell_language_cycle",
    "spell_toggle",
    "syntax_column_toggle",
]
