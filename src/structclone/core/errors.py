"""Failure kinds raised by the copy engine.

Every failure aborts the whole ``deep_copy`` call; no partial result is returned.

Usage:
    try:
        clone = deep_copy(graph)
    except CopyFailure as exc:
        log.error("copy of %s failed", exc.type)
"""

from __future__ import annotations


class CopyFailure(Exception):
    """Base class for everything that can abort a deep copy.

    Args:
        message: Human readable description.
        type_: Runtime type of the node being copied when the failure happened.
    """

    def __init__(self, message: str, type_: type | None = None) -> None:
        super().__init__(message)
        self.type = type_


class InstantiationFailure(CopyFailure):
    """Raised when no empty instance of a type can be produced by any means."""

    pass


class FieldAccessFailure(CopyFailure):
    """Raised when a field cannot be read from the source or written to the copy."""

    def __init__(self, message: str, type_: type | None = None, field: str | None = None) -> None:
        super().__init__(message, type_)
        self.field = field


class UnsupportedContainerFailure(CopyFailure):
    """Raised for a container kind with no strategy and no incremental-build protocol."""

    pass


class CopyDepthExceeded(CopyFailure):
    """Raised when the source graph is deeper than the configured ``max_depth``.

    With ``max_depth`` set to None the interpreter recursion limit is the only
    bound, and hitting it raises this failure as well.
    """

    def __init__(self, max_depth: int | None, type_: type | None = None) -> None:
        if max_depth is None:
            message = "Source graph exceeds the interpreter recursion limit"
        else:
            message = (
                f"Source graph exceeds max_depth={max_depth} "
                f"(raise CopySettings.max_depth or set it to None)"
            )
        super().__init__(message, type_)
        self.max_depth = max_depth
