"""Deep copy engine: public entry point and per-call session."""

from structclone.engine.engine import CopySession, DeepCopyEngine, deep_copy

__all__ = [
    "CopySession",
    "DeepCopyEngine",
    "deep_copy",
]
