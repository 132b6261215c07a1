from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from mutagen.flac import FLAC
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from ..models import MetaData, parse_int, parse_year
from .base import MutagenCodec, position_text, same_position, same_year

TEXT_KEYS: Dict[str, str] = {
    "artist": "ARTIST",
    "album_artist": "ALBUMARTIST",
    "album": "ALBUM",
    "title": "TITLE",
    "genre": "GENRE",
}


class VorbisCommentCodec(MutagenCodec):
    """Vorbis comments, shared by FLAC and the Ogg family."""

    file_type: Any = None

    def _open(self, path: Path) -> Any:
        audio = self.file_type(path)
        if audio.tags is None:
            audio.add_tags()
        return audio

    def _extract(self, audio: Any) -> MetaData:
        tags = audio.tags
        values = {attr: self._first(tags, key) for attr, key in TEXT_KEYS.items()}
        return MetaData(
            year=parse_year(self._first(tags, "DATE") or self._first(tags, "YEAR")),
            track_number=parse_int(self._first(tags, "TRACKNUMBER")),
            disc_number=parse_int(self._first(tags, "DISCNUMBER")),
            **values,
        )

    def _apply(self, audio: Any, meta: MetaData) -> None:
        tags = audio.tags
        for attr, key in TEXT_KEYS.items():
            self._set(tags, key, getattr(meta, attr))
        if not same_year(self._first(tags, "DATE"), meta.year):
            self._set(tags, "YEAR", None)
            self._set(tags, "DATE", None if meta.year is None else str(meta.year))
        self._set_position(tags, "TRACKNUMBER", meta.track_number)
        self._set_position(tags, "DISCNUMBER", meta.disc_number)

    @staticmethod
    def _first(tags: Any, key: str) -> Optional[str]:
        values = tags.get(key)
        if not values:
            return None
        return values[0]

    @staticmethod
    def _set(tags: Any, key: str, value: Optional[str]) -> None:
        if value is None:
            if key in tags:
                del tags[key]
            return
        tags[key] = value

    def _set_position(self, tags: Any, key: str, number: Optional[int]) -> None:
        existing = self._first(tags, key)
        if same_position(existing, number):
            return
        self._set(tags, key, None if number is None else position_text(existing, number))


class FLACCodec(VorbisCommentCodec):
    name = "flac"
    extensions = ("flac",)
    file_type = FLAC


class OggVorbisCodec(VorbisCommentCodec):
    name = "ogg"
    extensions = ("ogg", "oga")
    file_type = OggVorbis


class OggOpusCodec(VorbisCommentCodec):
    name = "opus"
    extensions = ("opus",)
    file_type = OggOpus
