"""Cycle spell checking through off and each configured language."""

from __future__ import annotations

from typing import Sequence

from toggle_engine.host import OptionHost
from toggle_engine.runtime.config import DEFAULT_SPELL_LANGUAGES
from toggle_engine.toggles import Cycle, ToggleDescriptor

KEY = "spelllang"
OFF_STATE = "spelllang.off"


def _off_state(host: OptionHost) -> ToggleDescriptor:
    def enable() -> None:
        host.set_option("spell", host.current_buffer(), False)

    return ToggleDescriptor(
        key=OFF_STATE,
        enable=enable,
        disable=lambda: None,
        is_enabled=lambda: not host.get_option("spell", host.current_buffer()),
        description="Spell checking off",
    )


def _language_state(host: OptionHost, language: str) -> ToggleDescriptor:
    def is_enabled() -> bool:
        buffer = host.current_buffer()
        return bool(host.get_option("spell", buffer)) and (
            host.get_option("spelllang", buffer) == language
        )

    def enable() -> None:
        buffer = host.current_buffer()
        host.set_option("spelllang", buffer, language)
        host.set_option("spell", buffer, True)

    def disable() -> None:
        host.set_option("spell", host.current_buffer(), False)

    return ToggleDescriptor(
        key=f"{KEY}.{language}",
        enable=enable,
        disable=disable,
        is_enabled=is_enabled,
        description=f"Spell check in '{language}'",
        metadata={"language": language},
    )


def spell_language_cycle(
    host: OptionHost, languages: Sequence[str] = DEFAULT_SPELL_LANGUAGES
) -> Cycle:
    """off -> languages[0] -> languages[1] -> ... -> off.

    Spell on with a language outside the list counts as no active state, so
    the next advance starts over at "off".
    """

    if not languages:
        raise ValueError("at least one spell language is required")
    states = [_off_state(host)]
    states.extend(_language_state(host, language) for language in dict.fromkeys(languages))
    return Cycle.of(KEY, states, description="Cycle spell-check language")


__all__ = ["KEY", "OFF_STATE", "spell_language_cycle"]
