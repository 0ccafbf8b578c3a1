"""UI-agnostic toggle engine with saved-state toggles."""

__all__ = [
    "adapters",
    "errors",
    "features",
    "host",
    "runtime",
    "store",
    "toggles",
]

__version__ = "0.1.0"
