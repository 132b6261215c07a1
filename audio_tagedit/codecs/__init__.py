from .default import DefaultCodec
from .id3 import ID3Codec
from .mp4 import MP4Codec
from .registry import CodecRegistry, file_extension, sniff_format
from .vorbis import FLACCodec, OggOpusCodec, OggVorbisCodec

__all__ = [
    "CodecRegistry",
    "DefaultCodec",
    "FLACCodec",
    "ID3Codec",
    "MP4Codec",
    "OggOpusCodec",
    "OggVorbisCodec",
    "file_extension",
    "sniff_format",
]
