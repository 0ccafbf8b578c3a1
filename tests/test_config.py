from __future__ import annotations

import pytest

from toggle_engine.runtime.config import (
    DEFAULT_FOLD_KEYS,
    DEFAULT_SPELL_LANGUAGES,
    EngineConfig,
    load_config,
)


def test_empty_environment_gives_defaults() -> None:
    assert load_config({}) == EngineConfig()


def test_environment_overrides() -> None:
    config = load_config(
        {
            "TOGGLE_ENGINE_SYNMAXCOL": "8000",
            "TOGGLE_ENGINE_YANK_HIGHLIGHT_MS": "300",
            "TOGGLE_ENGINE_FOLD_KEYS": "j, k ,,G",
            "TOGGLE_ENGINE_SPELL_LANGS": "fr",
            "TOGGLE_ENGINE_CONCEAL_LEVEL": "1",
            "TOGGLE_ENGINE_LIGATURE_CMD": "fontctl --font 'Fira Code'",
        }
    )

    assert config.synmaxcol_override == 8000
    assert config.yank_highlight_ms == 300
    assert config.fold_navigation_keys == ("j", "k", "G")
    assert config.spell_languages == ("fr",)
    assert config.conceal_level == 1
    assert config.ligature_command == ("fontctl", "--font", "Fira Code")


@pytest.mark.parametrize(
    "name, value",
    [
        ("TOGGLE_ENGINE_SYNMAXCOL", "lots"),
        ("TOGGLE_ENGINE_SYNMAXCOL", "-5"),
        ("TOGGLE_ENGINE_YANK_HIGHLIGHT_MS", "-1"),
        ("TOGGLE_ENGINE_SPELL_LANGS", " , "),
    ],
)
def test_malformed_values_fall_back(name: str, value: str) -> None:
    config = load_config({name: value})

    assert config.synmaxcol_override == 3000
    assert config.yank_highlight_ms == 150
    assert config.spell_languages == DEFAULT_SPELL_LANGUAGES
    assert config.fold_navigation_keys == DEFAULT_FOLD_KEYS


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        EngineConfig(synmaxcol_override=0)
    with pytest.raises(ValueError):
        EngineConfig(spell_languages=())
