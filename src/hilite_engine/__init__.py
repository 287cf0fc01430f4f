"""Host-agnostic syntax highlighting and undo/redo engine for live text buffers."""

__all__ = [
    "adapters",
    "buffer",
    "highlight",
    "rules",
    "runtime",
    "session",
]

__version__ = "0.1.0"
