from __future__ import annotations

import logging
from typing import Optional

from .models import NormalizedFields, TagEditRequest

logger = logging.getLogger(__name__)

# Values every supported tag format stores and reads back unchanged:
# MP4 keeps track numbers as unsigned 16-bit, ID3 timestamps hold four-digit years.
TRACK_RANGE = range(0, 0x10000)
YEAR_RANGE = range(0, 10000)


def trim_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def to_int(
    value: Optional[str],
    label: str,
    log: logging.Logger = logger,
    valid: Optional[range] = None,
) -> Optional[int]:
    """Parse an already trimmed value; malformed or out of range input degrades to None."""
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        log.warning("Illegal %s: %s", label, value)
        return None
    if valid is not None and number not in valid:
        log.warning("Illegal %s: %s", label, value)
        return None
    return number


def normalize_fields(request: TagEditRequest, log: logging.Logger = logger) -> NormalizedFields:
    return NormalizedFields(
        track_number=to_int(trim_to_none(request.track), "track number", log, TRACK_RANGE),
        artist=trim_to_none(request.artist),
        album=trim_to_none(request.album),
        title=trim_to_none(request.title),
        year=to_int(trim_to_none(request.year), "year", log, YEAR_RANGE),
        genre=trim_to_none(request.genre),
    )
