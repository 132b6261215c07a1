from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from mutagen.id3 import ID3, ID3NoHeaderError, TALB, TCON, TDRC, TIT2, TPE1, TPE2, TPOS, TRCK

from ..models import MetaData, parse_int, parse_year
from .base import MutagenCodec, position_text, same_position, same_year

# ID3v2.3 genre reference: "(17)" or "(17)Rock"; a literal "(" is escaped as "((".
GENRE_REFERENCE = re.compile(r"\(([0-9]+)\)(.*)")


class ID3Codec(MutagenCodec):
    """ID3v2 tags on MPEG audio. Files without a tag get a fresh ID3v2.4 one."""

    name = "mp3"
    extensions = ("mp3",)

    def _open(self, path: Path) -> ID3:
        try:
            tags = ID3(path, translate=False)
        except ID3NoHeaderError:
            return ID3()
        # The v2.4 upgrade rewrites TCON through TCON.genres, which turns a
        # plain "17" into "Rock"; keep the stored text.
        genre = tags.get("TCON")
        stored = list(genre.text) if genre is not None else None
        tags.update_to_v24()
        if stored is not None and "TCON" in tags:
            tags["TCON"].text = stored
        return tags

    def _extract(self, tags: ID3) -> MetaData:
        return MetaData(
            artist=self._text(tags, "TPE1"),
            album_artist=self._text(tags, "TPE2"),
            album=self._text(tags, "TALB"),
            title=self._text(tags, "TIT2"),
            year=parse_year(self._text(tags, "TDRC") or self._text(tags, "TYER")),
            genre=self._genre(tags),
            track_number=parse_int(self._text(tags, "TRCK")),
            disc_number=parse_int(self._text(tags, "TPOS")),
        )

    def _apply(self, tags: ID3, meta: MetaData) -> None:
        self._set_frame(tags, TPE1, meta.artist)
        self._set_frame(tags, TPE2, meta.album_artist)
        self._set_frame(tags, TALB, meta.album)
        self._set_frame(tags, TIT2, meta.title)
        self._set_genre(tags, meta.genre)
        self._set_year(tags, meta.year)
        self._set_position(tags, TRCK, meta.track_number)
        self._set_position(tags, TPOS, meta.disc_number)

    def _save(self, tags: ID3, path: Path) -> None:
        tags.save(path)

    @staticmethod
    def _text(tags: ID3, frame_id: str) -> Optional[str]:
        frame = tags.getall(frame_id)
        if not frame or not frame[0].text:
            return None
        return str(frame[0].text[0])

    def _genre(self, tags: ID3) -> Optional[str]:
        text = self._text(tags, "TCON")
        if text is None:
            return None
        if text.startswith("(("):
            return text[1:]
        match = GENRE_REFERENCE.fullmatch(text)
        if match is None:
            return text
        number, refinement = match.groups()
        if refinement:
            return refinement
        if int(number) < len(TCON.GENRES):
            return TCON.GENRES[int(number)]
        return text

    def _set_genre(self, tags: ID3, genre: Optional[str]) -> None:
        if genre is not None and genre.startswith("("):
            genre = "(" + genre
        self._set_frame(tags, TCON, genre)

    @staticmethod
    def _set_frame(tags: ID3, frame_cls, value: Optional[str]) -> None:
        if value is None:
            tags.delall(frame_cls.__name__)
            return
        tags.setall(frame_cls.__name__, [frame_cls(encoding=3, text=value)])

    def _set_year(self, tags: ID3, year: Optional[int]) -> None:
        if same_year(self._text(tags, "TDRC"), year):
            return
        tags.delall("TYER")
        if year is None:
            tags.delall("TDRC")
            return
        tags.setall("TDRC", [TDRC(encoding=3, text=str(year))])

    def _set_position(self, tags: ID3, frame_cls, number: Optional[int]) -> None:
        existing = self._text(tags, frame_cls.__name__)
        if same_position(existing, number):
            return
        if number is None:
            tags.delall(frame_cls.__name__)
            return
        tags.setall(frame_cls.__name__, [frame_cls(encoding=3, text=position_text(existing, number))])
