"""Classification models."""

from __future__ import annotations

from enum import Enum, auto


class CopyKind(Enum):
    """Copy strategy family chosen for a runtime type."""

    IMMUTABLE = auto()
    """Shared between source and copy, never duplicated."""

    ARRAY = auto()
    """Flat typed storage (array.array, bytearray), copied slot by slot."""

    SEQUENCE = auto()
    """Sequence or set container, rebuilt element by element in iteration order."""

    ASSOCIATIVE = auto()
    """Key-value container, rebuilt entry by entry with keys and values copied."""

    GENERIC_OBJECT = auto()
    """Anything else, copied field by field."""
