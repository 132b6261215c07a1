from __future__ import annotations

from ..models import EditOutcome, TagEditError, TagEditRequest
from ..service import TagEditService


def run(service: TagEditService, request: TagEditRequest, *, dry_run: bool = False) -> bool:
    if dry_run:
        try:
            changes = service.preview(request)
        except TagEditError as exc:
            print(exc)
            return False
        if not changes:
            print("No changes.")
            return True
        for key, change in changes.items():
            print(f"{key}: {change['old']!r} -> {change['new']!r}")
        return True
    outcome: EditOutcome = service.edit(request)
    print(outcome.render())
    return outcome.ok
