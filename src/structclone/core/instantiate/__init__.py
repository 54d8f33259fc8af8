"""Generic instantiation: zero-argument construction with placeholder fallback."""

from structclone.core.instantiate.core import (
    allocate,
    has_zero_arg_constructor,
    instantiate,
    native_base,
)

__all__ = [
    "instantiate",
    "allocate",
    "native_base",
    "has_zero_arg_constructor",
]
