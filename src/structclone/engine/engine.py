"""Deep copy engine: orchestrates classification, instantiation and population.

Usage:
    from structclone import deep_copy

    clone = deep_copy(graph)

    # Custom collaborators
    engine = DeepCopyEngine(settings=CopySettings(max_depth=1000))
    clone = engine.deep_copy(graph)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from functools import partial
from typing import Any

from structclone.config import CopySettings, get_settings
from structclone.core.classify import CopyKind, TypeClassifier, get_classifier
from structclone.core.containers import StrategyRegistry, get_strategy_registry
from structclone.core.errors import CopyDepthExceeded, CopyFailure, FieldAccessFailure
from structclone.core.fields import copy_fields, has_known_layout
from structclone.core.instantiate import instantiate, native_base
from structclone.core.types import Copy

logger = logging.getLogger(__name__)


@contextmanager
def _failures_as_copy_failure(cls: type, action: str) -> Iterator[None]:
    """Re-raise unexpected errors as CopyFailure naming the container type."""
    try:
        yield
    except (CopyFailure, RecursionError):
        raise
    except Exception as exc:
        raise CopyFailure(f"Failed to {action} {cls.__qualname__}: {exc}", cls) from exc


class CopySession:
    """State of one deep copy call: the identity map and the current depth.

    Created per call and discarded afterwards, never shared between calls.

    Args:
        classifier: Type classifier.
        strategies: Container strategy registry.
        settings: Engine configuration.
    """

    __slots__ = ("_classifier", "_strategies", "_settings", "_instantiate", "_copies", "_depth")

    def __init__(
        self,
        classifier: TypeClassifier,
        strategies: StrategyRegistry,
        settings: CopySettings,
    ) -> None:
        self._classifier = classifier
        self._strategies = strategies
        self._settings = settings
        self._instantiate = partial(instantiate, allow_placeholder=settings.allow_placeholder)
        # id(original) -> (original, copy). Holding the original keeps its id
        # from being reused by another object during the call.
        self._copies: dict[int, tuple[Any, Any]] = {}
        self._depth = 0

    def copy(self, value: Any) -> Any:
        """Copy one node of the source graph.

        Args:
            value: Any value, possibly already copied earlier in this session.

        Returns:
            The copy (or value itself when it is None or immutable).
        """
        if value is None:
            return None

        cls = type(value)
        kind = self._classifier.classify(cls)
        if kind is CopyKind.IMMUTABLE:
            return value

        # Must be checked before any descent: this terminates cycles.
        seen = self._copies.get(id(value))
        if seen is not None:
            return seen[1]

        max_depth = self._settings.max_depth
        if max_depth is not None and self._depth >= max_depth:
            raise CopyDepthExceeded(max_depth, cls)

        self._depth += 1
        try:
            if kind is CopyKind.ARRAY:
                return self._copy_array(value)
            if kind is CopyKind.SEQUENCE:
                return self._copy_sequence(value)
            if kind is CopyKind.ASSOCIATIVE:
                return self._copy_mapping(value)
            return self._copy_object(value)
        finally:
            self._depth -= 1

    def _remember(self, original: Any, clone: Any) -> None:
        self._copies[id(original)] = (original, clone)

    def _copy_array(self, original: Any) -> Any:
        cls = type(original)
        allocator = self._strategies.find_array(cls)
        with _failures_as_copy_failure(cls, "allocate"):
            clone = allocator(original)  # type: ignore[misc]
        self._remember(original, clone)
        for index, item in enumerate(original):
            clone[index] = self.copy(item)
        return self._copy_container_attributes(original, clone)

    def _copy_sequence(self, original: Any) -> Any:
        cls = type(original)
        strategy = self._strategies.sequence_strategy(cls)
        with _failures_as_copy_failure(cls, "create a builder for"):
            builder = strategy(original, self._instantiate)
        if not builder.deferred:
            self._remember(original, builder.result())
        for item in original:
            copied = self.copy(item)
            with _failures_as_copy_failure(cls, "add an element to"):
                builder.add(copied)
        return self._finish(original, builder)

    def _copy_mapping(self, original: Any) -> Any:
        cls = type(original)
        strategy = self._strategies.mapping_strategy(cls)
        with _failures_as_copy_failure(cls, "create a builder for"):
            builder = strategy(original, self._instantiate)
        if not builder.deferred:
            self._remember(original, builder.result())
        for key, value in original.items():
            copied_key = self.copy(key)
            copied_value = self.copy(value)
            with _failures_as_copy_failure(cls, "insert an entry into"):
                builder.put(copied_key, copied_value)
        return self._finish(original, builder)

    def _finish(self, original: Any, builder: Any) -> Any:
        if not builder.deferred:
            return self._copy_container_attributes(original, builder.result())

        with _failures_as_copy_failure(type(original), "build"):
            clone = builder.result()
        # A cycle through a mutable element may have copied this container
        # already; keep the copy the rest of the graph points to.
        seen = self._copies.get(id(original))
        if seen is not None:
            return seen[1]
        self._remember(original, clone)
        return self._copy_container_attributes(original, clone)

    def _copy_container_attributes(self, original: Any, clone: Any) -> Any:
        # Strategies may build a different type; its layout is theirs to fill.
        if self._settings.copy_container_attributes and type(clone) is type(original):
            copy_fields(original, clone, self.copy)
        return clone

    def _copy_object(self, original: Any) -> Any:
        cls = type(original)
        if not has_known_layout(cls):
            raise FieldAccessFailure(
                f"{cls.__qualname__} keeps native {native_base(cls).__qualname__} state "
                f"that cannot be copied field by field",
                cls,
            )
        clone = self._instantiate(cls)
        self._remember(original, clone)
        copy_fields(original, clone, self.copy)
        return clone


class DeepCopyEngine:
    """Stateless deep copy engine.

    Holds only read-only collaborators; every ``deep_copy`` call gets its own
    CopySession, so one engine can serve concurrent calls on disjoint inputs.
    The source graph must not be mutated by another thread during a copy.

    Args:
        classifier: Type classifier. Defaults to the process-wide classifier,
            or to a fresh one bound to ``strategies`` when those are given.
        strategies: Container strategy registry. Defaults to the process-wide one.
        settings: Engine configuration. Defaults to settings from the environment.
    """

    def __init__(
        self,
        classifier: TypeClassifier | None = None,
        strategies: StrategyRegistry | None = None,
        settings: CopySettings | None = None,
    ) -> None:
        if classifier is None:
            classifier = get_classifier() if strategies is None else TypeClassifier(strategies)
        self._classifier = classifier
        self._strategies = strategies if strategies is not None else classifier.strategies
        self._settings = settings if settings is not None else get_settings()

    @property
    def settings(self) -> CopySettings:
        """Engine configuration."""
        return self._settings

    def deep_copy[T](self, value: T) -> Copy[T]:
        """Create a fully independent copy of value and everything it reaches.

        Args:
            value: Root of the source graph. None and immutable values are
                returned unchanged.

        Returns:
            Copy with the same structure, values, shared references and cycles.

        Raises:
            CopyFailure: If any reachable node cannot be copied. No partial
                result is returned.
        """
        session = CopySession(self._classifier, self._strategies, self._settings)
        try:
            try:
                return session.copy(value)  # type: ignore[no-any-return]
            except RecursionError as exc:
                raise CopyDepthExceeded(self._settings.max_depth, type(value)) from exc
        except CopyFailure as exc:
            logger.debug("Deep copy of %s aborted: %s", type(value).__qualname__, exc)
            raise


def deep_copy[T](value: T, *, settings: CopySettings | None = None) -> Copy[T]:
    """Deep copy value with the process-wide classifier and strategy registry.

    Args:
        value: Root of the source graph.
        settings: Optional configuration overriding environment defaults.

    Returns:
        Independent copy of value.

    Raises:
        CopyFailure: If any reachable node cannot be copied.
    """
    return DeepCopyEngine(settings=settings).deep_copy(value)
