"""structclone: deep copy engine for arbitrary, possibly cyclic object graphs.

Usage:
    from dataclasses import dataclass
    from structclone import deep_copy

    @dataclass
    class Department:
        name: str
        related: "Department | None" = None

    hr = Department("HR")
    it = Department("IT", related=hr)
    hr.related = it

    hr_copy = deep_copy(hr)
    assert hr_copy.related.related is hr_copy
    assert hr_copy.related is not it

Immutable values (numbers, text, enums, ...) are shared, everything else is
duplicated. Shared references and cycles keep their shape. Copy hooks such as
``__deepcopy__`` are never called; objects without a zero-argument
constructor are allocated with ``__init__`` skipped and filled field by field.
"""

__version__ = "0.1.0"

# Config
from structclone.config import CopySettings

# Core primitives
from structclone.core import (
    Copy,
    CopyDepthExceeded,
    CopyFailure,
    CopyKind,
    FieldAccessFailure,
    FixedMappingBuilder,
    FixedSequenceBuilder,
    IncrementalMappingBuilder,
    IncrementalSequenceBuilder,
    InstantiationFailure,
    StrategyRegistry,
    TypeClassifier,
    UnsupportedContainerFailure,
    get_classifier,
    get_strategy_registry,
    register_immutable,
)

# Engine
from structclone.engine import DeepCopyEngine, deep_copy

__all__ = [
    # Version
    "__version__",
    # Engine
    "deep_copy",
    "DeepCopyEngine",
    "Copy",
    # Config
    "CopySettings",
    # Errors
    "CopyFailure",
    "InstantiationFailure",
    "FieldAccessFailure",
    "UnsupportedContainerFailure",
    "CopyDepthExceeded",
    # Extension points
    "CopyKind",
    "TypeClassifier",
    "get_classifier",
    "register_immutable",
    "StrategyRegistry",
    "get_strategy_registry",
    "IncrementalSequenceBuilder",
    "IncrementalMappingBuilder",
    "FixedSequenceBuilder",
    "FixedMappingBuilder",
]
