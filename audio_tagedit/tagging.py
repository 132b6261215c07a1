from __future__ import annotations

import logging
from pathlib import Path

from .fs_utils import atomic_rewrite
from .models import MetaData, NormalizedFields, TagEditError, TagWriteError
from .protocols import TagCodec

logger = logging.getLogger(__name__)


class TagWriter:
    """Merges requested values into a file's current tags and commits them."""

    def __init__(self, *, atomic: bool = True) -> None:
        self.atomic = atomic

    def merge(self, path: Path, codec: TagCodec, fields: NormalizedFields) -> MetaData:
        # Album artist, disc number and anything else outside NormalizedFields
        # comes from the file as read.
        base = codec.read(path)
        return base.overlay(fields)

    def apply(self, path: Path, codec: TagCodec, fields: NormalizedFields) -> MetaData:
        merged = self.merge(path, codec, fields)
        try:
            if self.atomic:
                with atomic_rewrite(path) as staging:
                    codec.write(staging, merged)
            else:
                codec.write(path, merged)
        except TagEditError:
            raise
        except OSError as exc:
            raise TagWriteError(f"Failed to write tags to {path.name}: {exc}") from exc
        logger.debug("Wrote %s tags to %s", codec.name, path)
        return merged
