"""Field copier: per-instance state of generic composite objects.

Python keeps instance state in three places: slots declared by each class in
the MRO, the instance ``__dict__``, and the native layout of a built-in base.
Native state is only reachable for bases listed in ``NATIVE_FIELDS``. Class
attributes live on the class and are never visited.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from structclone.core.errors import FieldAccessFailure
from structclone.core.fields.models import FieldRef
from structclone.core.instantiate import native_base

_SKIPPED_SLOTS = frozenset({"__dict__", "__weakref__"})

# Writable descriptors exposing the native layout of built-in bases.
# __cause__ precedes __suppress_context__: setting the cause resets the flag.
NATIVE_FIELDS: dict[type, tuple[str, ...]] = {
    BaseException: ("args", "__cause__", "__context__", "__suppress_context__", "__traceback__"),
    OSError: ("errno", "strerror", "filename", "filename2"),
    ImportError: ("msg", "name", "path"),
    AttributeError: ("name", "obj"),
    NameError: ("name",),
    StopIteration: ("value",),
    SystemExit: ("code",),
}


def iter_ancestors(cls: type) -> Iterator[type]:
    """Yield cls and its bases, most specific first, excluding ``object``."""
    for ancestor in cls.__mro__:
        if ancestor is not object:
            yield ancestor


def _mangle(owner: type, name: str) -> str:
    """Apply private name mangling the way the compiler does for ``__name`` slots."""
    if name.startswith("__") and not name.endswith("__"):
        stripped = owner.__name__.lstrip("_")
        if stripped:
            return f"_{stripped}{name}"
    return name


def declared_slots(cls: type) -> tuple[str, ...]:
    """Slot names declared directly on cls (mangled, without __dict__/__weakref__)."""
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(_mangle(cls, name) for name in slots if name not in _SKIPPED_SLOTS)


def has_known_layout(cls: type) -> bool:
    """Check whether every piece of native state of cls is reachable as a field.

    A native class that grows its base's instance layout stores state that
    neither slots nor ``__dict__`` show. Such a class is only known when it
    is listed in ``NATIVE_FIELDS``. The size comparison mirrors the one
    ``object.__getstate__`` uses to detect extra native storage.

    Args:
        cls: Type of a generic composite object.

    Returns:
        False if copying cls field by field would drop native state.
    """
    for ancestor in native_base(cls).__mro__:
        if ancestor is object or ancestor in NATIVE_FIELDS:
            continue
        base = ancestor.__base__
        if base is not None and ancestor.__basicsize__ != base.__basicsize__:
            return False
    return True


def _declared_fields(cls: type) -> Iterator[FieldRef]:
    for name in declared_slots(cls):
        yield FieldRef(name, cls)
    for name in NATIVE_FIELDS.get(cls, ()):
        yield FieldRef(name, cls)


def iter_instance_fields(obj: Any) -> Iterator[tuple[FieldRef, Any]]:
    """Yield every set instance field of obj with its current value.

    Slots and native fields come first, walking the ancestor chain from the
    most specific class; instance ``__dict__`` entries follow. Unset slots
    are skipped.

    Args:
        obj: Object to inspect.

    Yields:
        (field, value) pairs.

    Raises:
        FieldAccessFailure: If a field exists but cannot be read.
    """
    for ancestor in iter_ancestors(type(obj)):
        for field in _declared_fields(ancestor):
            try:
                value = field.read(obj)
            except AttributeError:
                continue
            except Exception as exc:
                raise FieldAccessFailure(
                    f"Cannot read slot {field.name!r} of {type(obj).__qualname__}: {exc}",
                    type(obj),
                    field.name,
                ) from exc
            yield field, value

    try:
        instance_dict = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        return
    for name, value in list(instance_dict.items()):
        yield FieldRef(name), value


def copy_fields(original: Any, destination: Any, copy_value: Callable[[Any], Any]) -> None:
    """Copy every instance field of original into destination.

    Fields the destination already holds but original does not (set by a
    zero-argument ``__init__``, for example) are removed first, so both end
    up with the same set of fields.

    Args:
        original: Source object, only read.
        destination: Fresh instance of the same type.
        copy_value: Callback producing the copy of each field value.

    Raises:
        FieldAccessFailure: If a field cannot be read, removed or written.
    """
    fields = list(iter_instance_fields(original))
    present = {field for field, _ in fields}
    stale = [field for field, _ in iter_instance_fields(destination) if field not in present]
    for field in stale:
        field.clear(destination)
    for field, value in fields:
        field.write(destination, copy_value(value))
