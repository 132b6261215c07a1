from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Tuple

from .models import MediaFileRecord, MetaData


class TagCodec(Protocol):
    name: str
    extensions: Tuple[str, ...]

    def editing_supported(self) -> bool: ...

    def read(self, path: Path) -> MetaData: ...

    def write(self, path: Path, meta: MetaData) -> None: ...


class CodecResolver(Protocol):
    def resolve(self, path: Path) -> TagCodec: ...


class MediaIndexProtocol(Protocol):
    def get_by_id(self, media_id: int) -> MediaFileRecord: ...

    def get_parent(self, record: MediaFileRecord) -> Optional[MediaFileRecord]: ...

    def refresh(self, record: MediaFileRecord) -> None: ...
