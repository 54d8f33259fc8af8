"""Generic instantiation of arbitrary types.

Two paths, tried in order:
    1. Zero-argument construction: ``cls()`` when its signature allows it,
       so field defaults set by ``__init__`` are in place.
    2. Placeholder construction: ``base.__new__(cls)`` on the nearest native
       base, skipping ``__init__`` entirely. The instance holds no state
       until the field copier fills it in; it violates whatever invariants
       ``__init__`` would have established until then.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from structclone.core.errors import InstantiationFailure

logger = logging.getLogger(__name__)

# Set on types created by class statements, clear on native (C-level) types.
_HEAPTYPE = 1 << 9


def native_base(cls: type) -> type:
    """Return the nearest base of cls implemented natively.

    This is the type whose ``__new__`` actually allocates storage for
    instances of cls (``object`` for plain classes, ``list`` for list
    subclasses, ...). Mirrors the lookup done by ``copyreg``.

    Args:
        cls: Type to inspect.

    Returns:
        First class in ``cls.__mro__`` that is not a heap type.
    """
    for base in cls.__mro__:
        if not base.__flags__ & _HEAPTYPE:
            return base
    return object


def has_zero_arg_constructor(cls: type) -> bool | None:
    """Check whether ``cls()`` is a valid call.

    Args:
        cls: Type to inspect.

    Returns:
        True or False from the signature, or None when the signature cannot
        be introspected (some native types).
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return None
    try:
        signature.bind()
    except TypeError:
        return False
    return True


def allocate(cls: type) -> Any:
    """Create an instance of cls without running any initialization code.

    Args:
        cls: Type to allocate.

    Returns:
        Bare instance with no instance attributes set.

    Raises:
        InstantiationFailure: If the native base refuses bare allocation
            (functions, frames, locks and other closed native types).
    """
    base = native_base(cls)
    try:
        return base.__new__(cls)
    except TypeError as exc:
        raise InstantiationFailure(
            f"Cannot allocate {cls.__qualname__} without initialization: {exc}", cls
        ) from exc


def instantiate(cls: type, *, allow_placeholder: bool = True) -> Any:
    """Produce a new, empty instance of an arbitrary type.

    Args:
        cls: Type to instantiate.
        allow_placeholder: Whether types without a zero-argument form may be
            allocated with ``__init__`` skipped.

    Returns:
        New instance of exactly cls.

    Raises:
        InstantiationFailure: If neither path can produce an instance.
    """
    accepts_no_args = has_zero_arg_constructor(cls)

    if accepts_no_args is None:
        try:
            return cls()
        except TypeError:
            accepts_no_args = False
        except RecursionError:
            raise
        except Exception as exc:
            raise InstantiationFailure(
                f"Zero-argument construction of {cls.__qualname__} failed: {exc}", cls
            ) from exc
    elif accepts_no_args:
        try:
            return cls()
        except RecursionError:
            raise
        except Exception as exc:
            raise InstantiationFailure(
                f"Zero-argument construction of {cls.__qualname__} failed: {exc}", cls
            ) from exc

    if not allow_placeholder:
        raise InstantiationFailure(
            f"{cls.__qualname__} has no zero-argument constructor "
            f"and placeholder construction is disabled",
            cls,
        )
    logger.debug("Allocating %s without __init__", cls.__qualname__)
    return allocate(cls)
