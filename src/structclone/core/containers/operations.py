"""Built-in container builders and strategies.

Pure building blocks: none of these recurse. The engine copies each element
first and hands the copy to a builder.
"""

from __future__ import annotations

import array
from collections import defaultdict, deque
from collections.abc import Callable, MutableMapping, MutableSequence, MutableSet
from types import MappingProxyType
from typing import Any

from structclone.core.containers.models import Instantiator
from structclone.core.errors import UnsupportedContainerFailure
from structclone.core.instantiate import has_zero_arg_constructor, native_base


class IncrementalSequenceBuilder:
    """Appends copied elements straight into a live container."""

    __slots__ = ("_container", "_insert")

    deferred = False

    def __init__(self, container: Any, insert: Callable[[Any, Any], Any]) -> None:
        self._container = container
        self._insert = insert

    def add(self, item: Any) -> None:
        self._insert(self._container, item)

    def result(self) -> Any:
        return self._container


class IncrementalMappingBuilder:
    """Stores copied entries straight into a live mapping."""

    __slots__ = ("_mapping",)

    deferred = False

    def __init__(self, mapping: Any) -> None:
        self._mapping = mapping

    def put(self, key: Any, value: Any) -> None:
        self._mapping[key] = value

    def result(self) -> Any:
        return self._mapping


class FixedSequenceBuilder:
    """Buffers copied elements and builds an immutable container at the end."""

    __slots__ = ("_buffer", "_finish")

    deferred = True

    def __init__(self, finish: Callable[[list[Any]], Any]) -> None:
        self._buffer: list[Any] = []
        self._finish = finish

    def add(self, item: Any) -> None:
        self._buffer.append(item)

    def result(self) -> Any:
        return self._finish(self._buffer)


class FixedMappingBuilder:
    """Buffers copied entries in a dict and wraps them at the end."""

    __slots__ = ("_buffer", "_finish")

    deferred = True

    def __init__(self, finish: Callable[[dict[Any, Any]], Any]) -> None:
        self._buffer: dict[Any, Any] = {}
        self._finish = finish

    def put(self, key: Any, value: Any) -> None:
        self._buffer[key] = value

    def result(self) -> Any:
        return self._finish(self._buffer)


def _emptied(container: Any) -> Any:
    """Drop anything a zero-argument constructor may have pre-filled."""
    if len(container):
        container.clear()
    return container


def _fresh_container(cls: type, instantiate: Instantiator) -> Any:
    """Empty instance of a container type populated through its own methods.

    Raises:
        UnsupportedContainerFailure: If cls is a pure-Python container whose
            storage only its constructor sets up.
    """
    if native_base(cls) is object and has_zero_arg_constructor(cls) is False:
        raise UnsupportedContainerFailure(
            f"{cls.__qualname__} has no zero-argument constructor; "
            f"register a strategy for it",
            cls,
        )
    return _emptied(instantiate(cls))


def sequence_insert(cls: type) -> Callable[[Any, Any], Any] | None:
    """Find the unbound insertion method of a sequence or set type.

    Args:
        cls: Container type.

    Returns:
        ``cls.append`` for mutable sequences, ``cls.add`` for mutable sets,
        whichever exists for unregistered duck types, or None.
    """
    if issubclass(cls, MutableSequence):
        return cls.append
    if issubclass(cls, MutableSet):
        return cls.add
    return getattr(cls, "append", None) or getattr(cls, "add", None)


# Incremental strategies


def incremental_sequence(original: Any, instantiate: Instantiator) -> IncrementalSequenceBuilder:
    """Default strategy: same concrete type, populated with append/add.

    Raises:
        UnsupportedContainerFailure: If the type has no append/add method.
    """
    cls = type(original)
    insert = sequence_insert(cls)
    if insert is None:
        raise UnsupportedContainerFailure(
            f"{cls.__qualname__} is a container without append/add "
            f"and no strategy is registered for it",
            cls,
        )
    return IncrementalSequenceBuilder(_fresh_container(cls, instantiate), insert)


def incremental_mapping(original: Any, instantiate: Instantiator) -> IncrementalMappingBuilder:
    """Default strategy: same concrete mapping type, populated with item assignment.

    Raises:
        UnsupportedContainerFailure: If the type does not support item assignment.
    """
    cls = type(original)
    if not (issubclass(cls, MutableMapping) or hasattr(cls, "__setitem__")):
        raise UnsupportedContainerFailure(
            f"{cls.__qualname__} is a read-only mapping and no strategy is registered for it",
            cls,
        )
    return IncrementalMappingBuilder(_fresh_container(cls, instantiate))


def deque_strategy(original: deque[Any], instantiate: Instantiator) -> IncrementalSequenceBuilder:
    """Rebuild a deque with the original ``maxlen``."""
    container = instantiate(type(original))
    deque.__init__(container, (), original.maxlen)
    return IncrementalSequenceBuilder(container, deque.append)


def defaultdict_strategy(
    original: defaultdict[Any, Any], instantiate: Instantiator
) -> IncrementalMappingBuilder:
    """Rebuild a defaultdict sharing the original ``default_factory``."""
    mapping = _emptied(instantiate(type(original)))
    mapping.default_factory = original.default_factory
    return IncrementalMappingBuilder(mapping)


# Fixed strategies


def tuple_strategy(original: tuple[Any, ...], instantiate: Instantiator) -> FixedSequenceBuilder:
    """Build plain tuples, named tuples (via ``_make``) and other tuple subclasses."""
    cls = type(original)
    if cls is tuple:
        return FixedSequenceBuilder(tuple)
    make = getattr(cls, "_make", None)
    if make is not None:
        return FixedSequenceBuilder(make)
    return FixedSequenceBuilder(cls)


def frozenset_strategy(original: frozenset[Any], instantiate: Instantiator) -> FixedSequenceBuilder:
    """Build a frozenset (or subclass) from the buffered elements."""
    return FixedSequenceBuilder(type(original))


def mappingproxy_strategy(
    original: MappingProxyType[Any, Any], instantiate: Instantiator
) -> FixedMappingBuilder:
    """Wrap the buffered entries in a new read-only proxy."""
    return FixedMappingBuilder(MappingProxyType)


# Array allocators


def allocate_bytearray(original: bytearray) -> bytearray:
    """Zero-filled bytearray (or subclass) of the same length, ``__init__`` of subclasses skipped."""
    cls = type(original)
    buffer = bytearray.__new__(cls)
    bytearray.__init__(buffer, len(original))
    return buffer


def allocate_typed_array(original: array.array[Any]) -> array.array[Any]:
    """Zero-filled array of the same typecode and length."""
    cls = type(original)
    return array.array.__new__(cls, original.typecode, bytes(len(original) * original.itemsize))
