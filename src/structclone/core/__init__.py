"""Core functionalities: stateless building blocks of the copy engine.

Architecture Note:
    core/ contains pure, stateless functionality: classification,
    instantiation, container strategies and field access. None of it
    recurses on its own; the per-call state (identity map, depth) lives in
    engine/.
"""

from structclone.core.classify import (
    DEFAULT_IMMUTABLES,
    CopyKind,
    TypeClassifier,
    get_classifier,
    register_immutable,
)
from structclone.core.containers import (
    FixedMappingBuilder,
    FixedSequenceBuilder,
    IncrementalMappingBuilder,
    IncrementalSequenceBuilder,
    MappingBuilder,
    SequenceBuilder,
    StrategyRegistry,
    get_strategy_registry,
)
from structclone.core.errors import (
    CopyDepthExceeded,
    CopyFailure,
    FieldAccessFailure,
    InstantiationFailure,
    UnsupportedContainerFailure,
)
from structclone.core.fields import FieldRef, copy_fields, iter_instance_fields
from structclone.core.instantiate import allocate, instantiate
from structclone.core.types import Copy, canonical_name

__all__ = [
    # Types
    "Copy",
    "canonical_name",
    # Errors
    "CopyFailure",
    "InstantiationFailure",
    "FieldAccessFailure",
    "UnsupportedContainerFailure",
    "CopyDepthExceeded",
    # Classification
    "CopyKind",
    "DEFAULT_IMMUTABLES",
    "TypeClassifier",
    "get_classifier",
    "register_immutable",
    # Instantiation
    "instantiate",
    "allocate",
    # Containers
    "SequenceBuilder",
    "MappingBuilder",
    "IncrementalSequenceBuilder",
    "IncrementalMappingBuilder",
    "FixedSequenceBuilder",
    "FixedMappingBuilder",
    "StrategyRegistry",
    "get_strategy_registry",
    # Fields
    "FieldRef",
    "copy_fields",
    "iter_instance_fields",
]
