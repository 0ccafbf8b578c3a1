"""Snapshot storage keyed by scope and toggle."""

from .state_store import StateStore

__all__ = ["StateStore"]
