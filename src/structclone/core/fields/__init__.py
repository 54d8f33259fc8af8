"""Field copier: enumerate, read and write per-instance state."""

from structclone.core.fields.core import (
    NATIVE_FIELDS,
    copy_fields,
    declared_slots,
    has_known_layout,
    iter_ancestors,
    iter_instance_fields,
)
from structclone.core.fields.models import FieldRef

__all__ = [
    "FieldRef",
    "NATIVE_FIELDS",
    "copy_fields",
    "declared_slots",
    "has_known_layout",
    "iter_ancestors",
    "iter_instance_fields",
]
