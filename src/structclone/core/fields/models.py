"""Field references: where one piece of per-instance state lives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from structclone.core.errors import FieldAccessFailure


@dataclass(slots=True, frozen=True)
class FieldRef:
    """One instance field of a composite object.

    ``owner`` is the class declaring the slot or native field, or None for
    entries of the instance ``__dict__``. Reads and writes bypass
    ``__getattribute__`` and ``__setattr__`` overrides, so frozen dataclasses
    can be populated.
    """

    name: str
    owner: type | None = None

    def read(self, obj: Any) -> Any:
        """Read this field from obj.

        Raises:
            AttributeError: If the slot is declared but unset on obj.
        """
        if self.owner is None:
            return object.__getattribute__(obj, "__dict__")[self.name]
        return self.owner.__dict__[self.name].__get__(obj, self.owner)

    def clear(self, obj: Any) -> None:
        """Remove this field from obj, leaving a slot unset or a dict entry absent.

        Raises:
            FieldAccessFailure: If obj refuses the removal.
        """
        try:
            if self.owner is None:
                del object.__getattribute__(obj, "__dict__")[self.name]
            else:
                self.owner.__dict__[self.name].__delete__(obj)
        except (AttributeError, TypeError, KeyError) as exc:
            raise FieldAccessFailure(
                f"Cannot remove field {self.name!r} from {type(obj).__qualname__}: {exc}",
                type(obj),
                self.name,
            ) from exc

    def write(self, obj: Any, value: Any) -> None:
        """Write value into this field of obj.

        Raises:
            FieldAccessFailure: If the destination refuses the value.
        """
        try:
            if self.owner is None:
                object.__getattribute__(obj, "__dict__")[self.name] = value
            else:
                self.owner.__dict__[self.name].__set__(obj, value)
        except (AttributeError, TypeError, KeyError) as exc:
            raise FieldAccessFailure(
                f"Cannot write field {self.name!r} on {type(obj).__qualname__}: {exc}",
                type(obj),
                self.name,
            ) from exc
