from __future__ import annotations

import re
from pathlib import Path
from typing import Tuple

from ..models import MetaData, TagWriteError

TRACK_PREFIX = re.compile(r"^(\d{1,3})\s*[-._]?\s+(.+)$")


class DefaultCodec:
    """Read-only fallback for formats without a tag codec.

    Metadata is guessed from the path: the file name gives the title (and a
    leading track number), the parent directory the album and the directory
    above it the artist.
    """

    name = "default"
    extensions: Tuple[str, ...] = ()

    def editing_supported(self) -> bool:
        return False

    def read(self, path: Path) -> MetaData:
        title = path.stem
        track_number = None
        match = TRACK_PREFIX.match(title)
        if match:
            track_number = int(match.group(1))
            title = match.group(2).strip()
        album = path.parent.name or None
        artist = path.parent.parent.name if path.parent != path.parent.parent else None
        return MetaData(
            artist=artist or None,
            album=album,
            title=title or None,
            track_number=track_number,
        )

    def write(self, path: Path, meta: MetaData) -> None:
        raise TagWriteError(f"Tag editing of {path.suffix.lstrip('.')} files is not supported.")

    def __repr__(self) -> str:
        return "<DefaultCodec>"
