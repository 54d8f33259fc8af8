"""Type classification: copy kinds and the extensible classifier."""

from structclone.core.classify.core import (
    DEFAULT_IMMUTABLES,
    TypeClassifier,
    get_classifier,
    register_immutable,
)
from structclone.core.classify.models import CopyKind

__all__ = [
    "CopyKind",
    "DEFAULT_IMMUTABLES",
    "TypeClassifier",
    "get_classifier",
    "register_immutable",
]
