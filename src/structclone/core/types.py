"""Core type definitions for structclone."""

type Copy[T] = T
"""Type alias indicating a value is an independent deep copy.

When you see `Copy[T]` in a return type, the returned value shares no mutable
state with its source. Mutating either side never affects the other.
"""


def canonical_name(cls: type) -> str:
    """Return the fully qualified name used to key container strategies.

    Args:
        cls: Type to name.

    Returns:
        ``module.QualifiedName``, e.g. ``collections.OrderedDict``.
    """
    return f"{cls.__module__}.{cls.__qualname__}"
