"""Container builder protocols and strategy signatures.

A strategy receives the original container and an instantiator and returns a
builder. The engine feeds copied elements into the builder and asks it for the
finished container.

Incremental builders own a real container from the start (``deferred`` is
False), so the engine registers it in the identity map before populating it.
Deferred builders only produce their container in ``result()``; fixed kinds
like ``tuple`` cannot exist half-filled.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

Instantiator = Callable[[type], Any]
"""Signature: (type) -> new empty instance of that type."""


@runtime_checkable
class SequenceBuilder(Protocol):
    """Accumulates copied elements of a sequence or set container."""

    deferred: bool

    def add(self, item: Any) -> None: ...

    def result(self) -> Any: ...


@runtime_checkable
class MappingBuilder(Protocol):
    """Accumulates copied entries of a key-value container."""

    deferred: bool

    def put(self, key: Any, value: Any) -> None: ...

    def result(self) -> Any: ...


SequenceStrategy = Callable[[Any, Instantiator], SequenceBuilder]
"""Signature: (original_container, instantiate) -> builder"""

MappingStrategy = Callable[[Any, Instantiator], MappingBuilder]
"""Signature: (original_mapping, instantiate) -> builder"""

ArrayAllocator = Callable[[Any], Any]
"""Signature: (original_array) -> zero-filled array of the same type and length"""
