from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Tuple

from mutagen import MutagenError

from ..models import CodecError, MetaData, TagWriteError, parse_int, parse_year

logger = logging.getLogger(__name__)


class MutagenCodec:
    """Shared read/modify/save flow for the formats mutagen can edit.

    Subclasses open the mutagen object for a path, translate it into a
    MetaData and apply a MetaData back onto it. Only the frames that map to
    MetaData fields are touched, so artwork, comments and any other frame
    present in the file survive a write untouched.
    """

    name = ""
    extensions: Tuple[str, ...] = ()

    def editing_supported(self) -> bool:
        return True

    def read(self, path: Path) -> MetaData:
        try:
            audio = self._open(path)
            return self._extract(audio)
        except (MutagenError, OSError) as exc:
            raise CodecError(f"Failed to read tags from {path.name}: {exc}") from exc

    def write(self, path: Path, meta: MetaData) -> None:
        try:
            audio = self._open(path)
            self._apply(audio, meta)
            self._save(audio, path)
        except (MutagenError, OSError) as exc:
            raise TagWriteError(f"Failed to write tags to {path.name}: {exc}") from exc
        logger.debug("Saved %s tags to %s", self.name, path)

    def _open(self, path: Path) -> Any:
        raise NotImplementedError

    def _extract(self, audio: Any) -> MetaData:
        raise NotImplementedError

    def _apply(self, audio: Any, meta: MetaData) -> None:
        raise NotImplementedError

    def _save(self, audio: Any, path: Path) -> None:
        audio.save()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def position_text(existing: Optional[str], number: int) -> str:
    """Render a track/disc number, keeping the "/total" part already stored."""
    if existing and "/" in existing:
        total = existing.split("/", 1)[1].strip()
        if total:
            return f"{number}/{total}"
    return str(number)


def same_position(existing: Optional[str], number: Optional[int]) -> bool:
    return existing is not None and number is not None and parse_int(existing) == number


def same_year(existing: Optional[str], year: Optional[int]) -> bool:
    return existing is not None and year is not None and parse_year(existing) == year
