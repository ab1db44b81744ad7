"""Deduce typed input from a native text area's value and selection."""

__all__ = [
    "adapters",
    "model",
    "runtime",
    "state",
]

__version__ = "0.1.0"
