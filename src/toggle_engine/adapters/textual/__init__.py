"""Textual adapter for the toggle engine."""

from .controller import TextualToggleAdapter, TextualUIHooks

__all__ = ["TextualToggleAdapter", "TextualUIHooks"]
