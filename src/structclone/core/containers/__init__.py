"""Container copy strategies: builder protocols, built-in strategies, registry."""

from structclone.core.containers.core import StrategyRegistry, get_strategy_registry
from structclone.core.containers.models import (
    ArrayAllocator,
    Instantiator,
    MappingBuilder,
    MappingStrategy,
    SequenceBuilder,
    SequenceStrategy,
)
from structclone.core.containers.operations import (
    FixedMappingBuilder,
    FixedSequenceBuilder,
    IncrementalMappingBuilder,
    IncrementalSequenceBuilder,
    incremental_mapping,
    incremental_sequence,
)

__all__ = [
    # Models
    "Instantiator",
    "SequenceBuilder",
    "MappingBuilder",
    "SequenceStrategy",
    "MappingStrategy",
    "ArrayAllocator",
    # Builders
    "IncrementalSequenceBuilder",
    "IncrementalMappingBuilder",
    "FixedSequenceBuilder",
    "FixedMappingBuilder",
    "incremental_sequence",
    "incremental_mapping",
    # Registry
    "StrategyRegistry",
    "get_strategy_registry",
]
