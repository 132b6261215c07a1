from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from .meta_keys import EDITABLE_FIELDS, SKIPPED, UPDATED


@dataclass(frozen=True, slots=True)
class TagEditRequest:
    """Raw, untrusted values for one media file as submitted by a caller."""

    file_id: int
    track: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    year: Optional[str] = None
    genre: Optional[str] = None


@dataclass(frozen=True, slots=True)
class NormalizedFields:
    track_number: Optional[int] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    genre: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}


@dataclass(frozen=True, slots=True)
class MediaFileRecord:
    id: int
    path: Path
    parent_id: Optional[int] = None
    is_directory: bool = False
    artist: Optional[str] = None
    album_artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    track_number: Optional[int] = None
    disc_number: Optional[int] = None

    def editable_values(self) -> Dict[str, object]:
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}

    def to_record(self) -> Dict[str, object]:
        payload: Dict[str, object] = {f.name: getattr(self, f.name) for f in fields(self)}
        payload["path"] = str(self.path)
        return payload


@dataclass(slots=True)
class MetaData:
    """Tag values as stored inside one audio file."""

    artist: Optional[str] = None
    album_artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    track_number: Optional[int] = None
    disc_number: Optional[int] = None

    def overlay(self, values: NormalizedFields) -> "MetaData":
        return replace(self, **values.as_dict())


class OutcomeKind(Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class EditOutcome:
    kind: OutcomeKind
    extension: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def updated(cls) -> "EditOutcome":
        return cls(OutcomeKind.UPDATED)

    @classmethod
    def skipped(cls) -> "EditOutcome":
        return cls(OutcomeKind.SKIPPED)

    @classmethod
    def unsupported(cls, extension: str) -> "EditOutcome":
        return cls(OutcomeKind.UNSUPPORTED, extension=extension)

    @classmethod
    def failed(cls, exc: BaseException) -> "EditOutcome":
        return cls(OutcomeKind.FAILED, message=str(exc) or type(exc).__name__)

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.UPDATED, OutcomeKind.SKIPPED)

    def render(self) -> str:
        if self.kind is OutcomeKind.UPDATED:
            return UPDATED
        if self.kind is OutcomeKind.SKIPPED:
            return SKIPPED
        if self.kind is OutcomeKind.UNSUPPORTED:
            return f"Tag editing of {self.extension} files is not supported."
        return self.message or ""


class TagEditError(Exception):
    """Base class for failures the edit service reports back to the caller."""


class MediaNotFoundError(TagEditError):
    def __init__(self, media_id: int) -> None:
        super().__init__(f"Media file {media_id} not found.")
        self.media_id = media_id


class CodecError(TagEditError):
    """Raised when a codec cannot read the tags of a file."""


class TagWriteError(TagEditError):
    """Raised when tags could not be committed to a file."""


BARE_YEAR = re.compile(r"\s*([0-9]{1,4})\s*")
ANY_YEAR = re.compile(r"[0-9]{4}")


def parse_int(value: object) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        cleaned = str(value).strip()
    except Exception:
        return None
    if "/" in cleaned:
        cleaned = cleaned.split("/", 1)[0].strip()
    if cleaned.isascii() and cleaned.isdigit():
        return int(cleaned)
    return None


def parse_year(value: object) -> Optional[int]:
    """Year of a date tag: a bare number up to four digits, else the first four-digit run."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value)
    match = BARE_YEAR.fullmatch(text) or ANY_YEAR.search(text)
    if not match:
        return None
    return int(match.group(match.lastindex or 0))
