from __future__ import annotations

from typing import Dict, Optional

from .meta_keys import EDITABLE_FIELDS
from .models import MediaFileRecord, NormalizedFields


def diff(fields: NormalizedFields, record: MediaFileRecord) -> Dict[str, Dict[str, Optional[object]]]:
    """Return every editable field whose requested value differs from the index."""
    current = record.editable_values()
    desired = fields.as_dict()
    changes: Dict[str, Dict[str, Optional[object]]] = {}
    for key in EDITABLE_FIELDS:
        old = current.get(key)
        new = desired.get(key)
        if not _same(old, new):
            changes[key] = {"old": old, "new": new}
    return changes


def has_changes(fields: NormalizedFields, record: MediaFileRecord) -> bool:
    return bool(diff(fields, record))


def _same(old: object, new: object) -> bool:
    # None only equals None; 0 and "" are real values.
    if old is None or new is None:
        return old is None and new is None
    return type(old) is type(new) and old == new
