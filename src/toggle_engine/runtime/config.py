"""Environment-driven engine settings."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from typing import Mapping, Optional

ENV_PREFIX = "TOGGLE_ENGINE_"

DEFAULT_FOLD_KEYS: tuple[str, ...] = ("j", "k", "gg", "G", "n", "N", "<C-d>", "<C-u>")
DEFAULT_SPELL_LANGUAGES: tuple[str, ...] = ("en_us", "de")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables consumed by the default feature set."""

    synmaxcol_override: int = 3000
    yank_highlight_ms: int = 150
    fold_navigation_keys: tuple[str, ...] = DEFAULT_FOLD_KEYS
    spell_languages: tuple[str, ...] = DEFAULT_SPELL_LANGUAGES
    conceal_level: int = 2
    ligature_command: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.synmaxcol_override <= 0:
            raise ValueError("synmaxcol_override must be positive")
        if self.yank_highlight_ms < 0:
            raise ValueError("yank_highlight_ms cannot be negative")
        if not self.spell_languages:
            raise ValueError("spell_languages cannot be empty")


def _env_int(environ: Mapping[str, str], name: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_list(
    environ: Mapping[str, str], name: str, fallback: tuple[str, ...]
) -> tuple[str, ...]:
    value = environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or fallback


def load_config(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build an ``EngineConfig`` from ``TOGGLE_ENGINE_*`` variables.

    Malformed numbers fall back to the defaults rather than failing startup.
    """

    env = os.environ if environ is None else environ
    defaults = EngineConfig()
    synmaxcol = _env_int(env, "SYNMAXCOL", defaults.synmaxcol_override)
    yank_ms = _env_int(env, "YANK_HIGHLIGHT_MS", defaults.yank_highlight_ms)
    return EngineConfig(
        synmaxcol_override=synmaxcol if synmaxcol > 0 else defaults.synmaxcol_override,
        yank_highlight_ms=yank_ms if yank_ms >= 0 else defaults.yank_highlight_ms,
        fold_navigation_keys=_env_list(env, "FOLD_KEYS", DEFAULT_FOLD_KEYS),
        spell_languages=_env_list(env, "SPELL_LANGS", DEFAULT_SPELL_LANGUAGES),
        conceal_level=_env_int(env, "CONCEAL_LEVEL", defaults.conceal_level),
        ligature_command=tuple(shlex.split(env.get(f"{ENV_PREFIX}LIGATURE_CMD", ""))),
    )


__all__ = ["EngineConfig", "load_config", "DEFAULT_FOLD_KEYS", "DEFAULT_SPELL_LANGUAGES"]
