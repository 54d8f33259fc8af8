"""Container strategy registry.

Maps canonical container-kind names to construction strategies. This is the
only externally configurable surface of the engine.

Usage:
    from structclone import get_strategy_registry
    from structclone.core.containers import FixedSequenceBuilder

    def sorted_list_strategy(original, instantiate):
        return FixedSequenceBuilder(lambda items: SortedList(items, key=original.key))

    get_strategy_registry().register_sequence(SortedList, sorted_list_strategy)
"""

from __future__ import annotations

import array
import logging
import warnings
from collections import defaultdict, deque
from types import MappingProxyType

from structclone.core.containers.models import ArrayAllocator, MappingStrategy, SequenceStrategy
from structclone.core.containers.operations import (
    allocate_bytearray,
    allocate_typed_array,
    defaultdict_strategy,
    deque_strategy,
    frozenset_strategy,
    incremental_mapping,
    incremental_sequence,
    mappingproxy_strategy,
    tuple_strategy,
)
from structclone.core.types import canonical_name

logger = logging.getLogger(__name__)


def _key(kind: type | str) -> str:
    return kind if isinstance(kind, str) else canonical_name(kind)


class StrategyRegistry:
    """Registry of container strategies keyed by canonical type name.

    Lookups walk the type's MRO, so a subclass uses the strategy of its
    nearest registered base. Kinds with no registered strategy fall back to
    the incremental strategies.

    Register at import time; the registry is read without locking while
    copies run.
    """

    def __init__(self) -> None:
        """Initialize an empty registry (no built-in strategies)."""
        self._sequences: dict[str, SequenceStrategy] = {}
        self._mappings: dict[str, MappingStrategy] = {}
        self._arrays: dict[str, ArrayAllocator] = {}

    @classmethod
    def with_defaults(cls) -> StrategyRegistry:
        """Create a registry pre-loaded with the standard library container kinds.

        Returns:
            Registry handling deque, defaultdict, tuple, frozenset,
            mappingproxy, array.array and bytearray.
        """
        registry = cls()
        registry.register_sequence(deque, deque_strategy)
        registry.register_sequence(tuple, tuple_strategy)
        registry.register_sequence(frozenset, frozenset_strategy)
        registry.register_mapping(defaultdict, defaultdict_strategy)
        registry.register_mapping(MappingProxyType, mappingproxy_strategy)
        registry.register_array(array.array, allocate_typed_array)
        registry.register_array(bytearray, allocate_bytearray)
        return registry

    def copy(self) -> StrategyRegistry:
        """Return an independent registry with the same entries.

        Returns:
            New registry; registering on it leaves this one untouched.
        """
        clone = StrategyRegistry()
        clone._sequences.update(self._sequences)
        clone._mappings.update(self._mappings)
        clone._arrays.update(self._arrays)
        return clone

    def register_sequence(self, kind: type | str, strategy: SequenceStrategy) -> None:
        """Register a strategy for a sequence or set container kind.

        Args:
            kind: Container type or its canonical name (``module.QualName``).
            strategy: Callable ``(original, instantiate) -> SequenceBuilder``.
        """
        self._store(self._sequences, kind, strategy)

    def register_mapping(self, kind: type | str, strategy: MappingStrategy) -> None:
        """Register a strategy for a key-value container kind.

        Args:
            kind: Mapping type or its canonical name.
            strategy: Callable ``(original, instantiate) -> MappingBuilder``.
        """
        self._store(self._mappings, kind, strategy)

    def register_array(self, kind: type | str, allocator: ArrayAllocator) -> None:
        """Register an allocator for a flat array kind.

        Args:
            kind: Array type or its canonical name.
            allocator: Callable ``(original) -> zero-filled array of equal length``.
        """
        self._store(self._arrays, kind, allocator)

    def find_sequence(self, cls: type) -> SequenceStrategy | None:
        """Registered sequence strategy for cls or its nearest base, if any."""
        return self._lookup(self._sequences, cls)

    def find_mapping(self, cls: type) -> MappingStrategy | None:
        """Registered mapping strategy for cls or its nearest base, if any."""
        return self._lookup(self._mappings, cls)

    def find_array(self, cls: type) -> ArrayAllocator | None:
        """Registered array allocator for cls or its nearest base, if any."""
        return self._lookup(self._arrays, cls)

    def sequence_strategy(self, cls: type) -> SequenceStrategy:
        """Strategy to use for a sequence kind, falling back to incremental build."""
        strategy = self.find_sequence(cls)
        if strategy is None:
            logger.debug("No sequence strategy for %s, using incremental build", cls.__qualname__)
            return incremental_sequence
        return strategy

    def mapping_strategy(self, cls: type) -> MappingStrategy:
        """Strategy to use for a mapping kind, falling back to incremental build."""
        strategy = self.find_mapping(cls)
        if strategy is None:
            logger.debug("No mapping strategy for %s, using incremental build", cls.__qualname__)
            return incremental_mapping
        return strategy

    @staticmethod
    def _store[S](table: dict[str, S], kind: type | str, entry: S) -> None:
        key = _key(kind)
        if key in table and table[key] is not entry:
            warnings.warn(
                f"Replacing registered container strategy for {key}",
                stacklevel=3,
            )
        table[key] = entry

    @staticmethod
    def _lookup[S](table: dict[str, S], cls: type) -> S | None:
        if not table:
            return None
        for base in cls.__mro__:
            entry = table.get(canonical_name(base))
            if entry is not None:
                return entry
        return None


# Module-level registry instance
_registry = StrategyRegistry.with_defaults()


def get_strategy_registry() -> StrategyRegistry:
    """Access the process-wide strategy registry.

    Returns:
        The registry used by ``deep_copy`` and engines built without one.
    """
    return _registry
