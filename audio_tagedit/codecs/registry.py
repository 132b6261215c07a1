from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from ..protocols import TagCodec
from .default import DefaultCodec
from .id3 import ID3Codec
from .mp4 import MP4Codec
from .vorbis import FLACCodec, OggOpusCodec, OggVorbisCodec

logger = logging.getLogger(__name__)

HEADER_SIZE = 40


def file_extension(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def sniff_format(header: bytes) -> Optional[str]:
    """Identify the container from the first bytes of a file."""
    if header.startswith(b"ID3"):
        return "id3"
    if header.startswith(b"fLaC"):
        return "flac"
    if header.startswith(b"OggS"):
        if b"OpusHead" in header:
            return "opus"
        if b"\x01vorbis" in header:
            return "ogg"
        return None
    if header[4:8] == b"ftyp":
        return "mp4"
    if header.startswith(b"RIFF") and header[8:12] == b"WAVE":
        return "wav"
    if header.startswith(b"FORM") and header[8:12] in (b"AIFF", b"AIFC"):
        return "aiff"
    if len(header) >= 2 and header[0] == 0xFF and (header[1] & 0xE0) == 0xE0:
        return "mp3"
    return None


class CodecRegistry:
    """Maps a file to the codec able to edit its tags.

    The file signature wins over the extension; an ID3 header is ambiguous
    (FLAC files occasionally carry one) so the extension decides in that
    case. Anything without a registered codec resolves to the read-only
    DefaultCodec.
    """

    def __init__(
        self,
        codecs: Iterable[TagCodec] = (),
        *,
        sniff_content: bool = True,
        disabled: Iterable[str] = (),
        fallback: Optional[TagCodec] = None,
    ) -> None:
        self.sniff_content = sniff_content
        self.disabled = {name.lower() for name in disabled}
        self.fallback: TagCodec = fallback or DefaultCodec()
        self._by_name: Dict[str, TagCodec] = {}
        self._by_extension: Dict[str, TagCodec] = {}
        for codec in codecs:
            self.register(codec)

    @classmethod
    def with_defaults(cls, **kwargs) -> "CodecRegistry":
        codecs = [ID3Codec(), FLACCodec(), OggVorbisCodec(), OggOpusCodec(), MP4Codec()]
        return cls(codecs, **kwargs)

    def register(self, codec: TagCodec) -> None:
        self._by_name[codec.name] = codec
        for ext in codec.extensions:
            self._by_extension[ext.lower()] = codec

    def codec_for(self, name: str) -> Optional[TagCodec]:
        if name.lower() in self.disabled:
            return None
        return self._by_name.get(name.lower())

    def resolve(self, path: Path) -> TagCodec:
        by_extension = self._by_extension.get(file_extension(path).lower())
        codec: Optional[TagCodec] = None
        detected = self._sniff(path) if self.sniff_content else None
        if detected == "id3":
            codec = by_extension if by_extension is not None else self._by_name.get("mp3")
        elif detected is not None:
            codec = self._by_name.get(detected)
        else:
            codec = by_extension
        if codec is None or codec.name in self.disabled:
            logger.debug("No tag codec for %s (detected=%s)", path, detected)
            return self.fallback
        logger.debug("Resolved %s to %r", path, codec)
        return codec

    @staticmethod
    def _sniff(path: Path) -> Optional[str]:
        try:
            with path.open("rb") as handle:
                header = handle.read(HEADER_SIZE)
        except OSError:
            return None
        return sniff_format(header)
