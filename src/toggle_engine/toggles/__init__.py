"""Toggle descriptors, the registry, and saved-state constructors."""

from .cycle import Cycle
from .models import ToggleDescriptor, ToggleKey, ToggleOutcome, TriggerBinding
from .registry import RegistryStats, ToggleRegistry
from .snapshot import with_snapshot

__all__ = [
    "Cycle",
    "ToggleDescriptor",
    "ToggleKey",
    "ToggleOutcome",
    "TriggerBinding",
    "ToggleRegistry",
    "RegistryStats",
    "with_snapshot",
]
