"""Type classifier: runtime type -> copy strategy family.

Rules, first match wins:
    1. registered immutable type or Enum  -> IMMUTABLE
    2. registered array kind              -> ARRAY
    3. sequence/set container             -> SEQUENCE
    4. key-value container                -> ASSOCIATIVE
    5. anything else                      -> GENERIC_OBJECT

Usage:
    from structclone import register_immutable

    register_immutable(Money)  # share Money instances instead of copying them
"""

from __future__ import annotations

import datetime
import re
import types
import uuid
import weakref
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath

from structclone.core.classify.models import CopyKind
from structclone.core.containers import StrategyRegistry, get_strategy_registry

DEFAULT_IMMUTABLES: tuple[type, ...] = (
    # Scalars and text
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    types.NoneType,
    types.EllipsisType,
    types.NotImplementedType,
    Enum,
    Decimal,
    Fraction,
    range,
    slice,
    # Value types from the standard library
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    PurePath,
    re.Pattern,
    # Program structure, shared by reference
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.ModuleType,
    types.CodeType,
    weakref.ref,
    # Interpreter records reachable from exceptions
    types.TracebackType,
    types.FrameType,
)


class TypeClassifier:
    """Decides which copy strategy family applies to a runtime type.

    Args:
        strategies: Registry consulted for container kinds. Defaults to the
            process-wide registry.
        immutables: Types whose instances are shared instead of copied.
    """

    def __init__(
        self,
        strategies: StrategyRegistry | None = None,
        immutables: tuple[type, ...] = DEFAULT_IMMUTABLES,
    ) -> None:
        self._strategies = strategies if strategies is not None else get_strategy_registry()
        self._immutables = immutables

    @property
    def strategies(self) -> StrategyRegistry:
        """Registry used for container classification."""
        return self._strategies

    def register_immutable(self, *kinds: type) -> None:
        """Treat instances of these types (and subclasses) as immutable.

        Args:
            *kinds: Types to share by reference during copies.
        """
        self._immutables = self._immutables + tuple(k for k in kinds if k not in self._immutables)

    def is_immutable(self, cls: type) -> bool:
        """Check whether instances of cls are shared rather than copied."""
        return issubclass(cls, self._immutables)

    def classify(self, cls: type) -> CopyKind:
        """Classify a runtime type.

        Args:
            cls: The value's runtime type (``type(value)``).

        Returns:
            The copy strategy family for instances of cls.
        """
        if issubclass(cls, self._immutables):
            return CopyKind.IMMUTABLE
        if self._strategies.find_array(cls) is not None:
            return CopyKind.ARRAY
        if self._strategies.find_sequence(cls) is not None or issubclass(cls, (Sequence, Set)):
            return CopyKind.SEQUENCE
        if self._strategies.find_mapping(cls) is not None or issubclass(cls, Mapping):
            return CopyKind.ASSOCIATIVE
        return CopyKind.GENERIC_OBJECT


# Module-level classifier instance, bound to the process-wide registry
_classifier = TypeClassifier()


def get_classifier() -> TypeClassifier:
    """Access the process-wide classifier.

    Returns:
        The classifier used by ``deep_copy`` and engines built without one.
    """
    return _classifier


def register_immutable(*kinds: type) -> None:
    """Register immutable types on the process-wide classifier.

    Args:
        *kinds: Types whose instances are shared between source and copy.
    """
    _classifier.register_immutable(*kinds)
