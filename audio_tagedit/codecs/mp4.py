from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from mutagen.mp4 import MP4

from ..models import MetaData, parse_year
from .base import MutagenCodec, same_year

TEXT_KEYS: Dict[str, str] = {
    "artist": "\xa9ART",
    "album_artist": "aART",
    "album": "\xa9alb",
    "title": "\xa9nam",
    "genre": "\xa9gen",
}


class MP4Codec(MutagenCodec):
    name = "mp4"
    extensions = ("m4a", "m4b", "mp4")

    def _open(self, path: Path) -> MP4:
        audio = MP4(path)
        if audio.tags is None:
            audio.add_tags()
        return audio

    def _extract(self, audio: MP4) -> MetaData:
        values = {attr: self._text(audio, key) for attr, key in TEXT_KEYS.items()}
        return MetaData(
            year=parse_year(self._text(audio, "\xa9day")),
            track_number=self._pair_first(audio, "trkn"),
            disc_number=self._pair_first(audio, "disk"),
            **values,
        )

    def _apply(self, audio: MP4, meta: MetaData) -> None:
        for attr, key in TEXT_KEYS.items():
            self._set(audio, key, getattr(meta, attr))
        if meta.genre is not None:
            # An ID3v1 style numeric genre would otherwise shadow the text one.
            self._set(audio, "gnre", None)
        if not same_year(self._text(audio, "\xa9day"), meta.year):
            self._set(audio, "\xa9day", None if meta.year is None else str(meta.year))
        self._set_pair(audio, "trkn", meta.track_number)
        self._set_pair(audio, "disk", meta.disc_number)

    @staticmethod
    def _text(audio: MP4, key: str) -> Optional[str]:
        value = audio.tags.get(key)
        if not value:
            return None
        first = value[0]
        if isinstance(first, bytes):
            return first.decode("utf-8", errors="replace")
        return str(first)

    @staticmethod
    def _pair_first(audio: MP4, key: str) -> Optional[int]:
        value = audio.tags.get(key)
        if not value:
            return None
        first = value[0]
        if isinstance(first, (tuple, list)) and first and first[0] is not None:
            return int(first[0])
        return None

    @staticmethod
    def _set(audio: MP4, key: str, value: Optional[str]) -> None:
        if value is None:
            if key in audio.tags:
                del audio.tags[key]
            return
        audio.tags[key] = [value]

    def _set_pair(self, audio: MP4, key: str, number: Optional[int]) -> None:
        if self._pair_first(audio, key) == number:
            return
        if number is None:
            self._set(audio, key, None)
            return
        total = 0
        existing = audio.tags.get(key)
        if existing and isinstance(existing[0], (tuple, list)) and len(existing[0]) > 1:
            total = int(existing[0][1])
        audio.tags[key] = [(number, total)]
