from __future__ import annotations

from ..index import MediaIndex
from ..meta_keys import EDITABLE_FIELDS, PRESERVED_FIELDS
from ..models import MediaFileRecord

SHOWN_FIELDS = EDITABLE_FIELDS + PRESERVED_FIELDS


def field_line(label: str, value: object) -> str:
    return f"  {label:<13} {'-' if value is None else value}"


def render(record: MediaFileRecord) -> list[str]:
    kind = "directory" if record.is_directory else "file"
    lines = [f"[{record.id}] {record.path} ({kind})"]
    if record.parent_id is not None:
        lines.append(field_line("parent", record.parent_id))
    for name in SHOWN_FIELDS:
        lines.append(field_line(name, getattr(record, name)))
    return lines


def run(index: MediaIndex, media_id: int) -> None:
    record = index.get_by_id(media_id)
    for line in render(record):
        print(line)
