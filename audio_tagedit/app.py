from __future__ import annotations

import logging
from dataclasses import dataclass

from .codecs import CodecRegistry
from .config import Settings
from .index import MediaIndex
from .service import TagEditService
from .tagging import TagWriter


@dataclass
class TagEditApp:
    settings: Settings
    codecs: CodecRegistry
    index: MediaIndex
    service: TagEditService

    @classmethod
    def create(cls, settings: Settings) -> "TagEditApp":
        codecs = CodecRegistry.with_defaults(
            sniff_content=settings.codecs.sniff_content,
            disabled=settings.codecs.disabled,
        )
        index = MediaIndex(settings.index.path, codecs)
        service = TagEditService(
            index,
            codecs,
            tag_writer=TagWriter(atomic=settings.codecs.atomic_writes),
            logger=logging.getLogger("audio_tagedit.service"),
        )
        return cls(settings=settings, codecs=codecs, index=index, service=service)

    def close(self) -> None:
        self.index.close()
