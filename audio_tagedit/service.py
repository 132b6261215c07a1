from __future__ import annotations

import logging
from typing import Dict, Optional

from . import change_detector
from .codecs import file_extension
from .models import EditOutcome, TagEditRequest
from .normalize import normalize_fields
from .protocols import CodecResolver, MediaIndexProtocol
from .refresher import IndexRefresher
from .tagging import TagWriter


class TagEditService:
    """Edits the descriptive tags of one indexed media file per call.

    A call normalizes the submitted values, resolves the file's codec,
    compares the values against the index and, only when something differs,
    writes the file and refreshes the file's and its parent's index entries.
    Every failure is contained here and reported through the outcome.
    """

    def __init__(
        self,
        index: MediaIndexProtocol,
        codecs: CodecResolver,
        *,
        tag_writer: Optional[TagWriter] = None,
        refresher: Optional[IndexRefresher] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.index = index
        self.codecs = codecs
        self.tag_writer = tag_writer or TagWriter()
        self.refresher = refresher or IndexRefresher(index)
        self.logger = logger or logging.getLogger(__name__)

    def set_tags(
        self,
        file_id: int,
        track: Optional[str] = None,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        title: Optional[str] = None,
        year: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> str:
        """Return "UPDATED", "SKIPPED" or a human readable error message."""
        request = TagEditRequest(
            file_id=file_id,
            track=track,
            artist=artist,
            album=album,
            title=title,
            year=year,
            genre=genre,
        )
        return self.edit(request).render()

    def edit(self, request: TagEditRequest) -> EditOutcome:
        fields = normalize_fields(request, self.logger)
        try:
            record = self.index.get_by_id(request.file_id)
            codec = self.codecs.resolve(record.path)
            if not codec.editing_supported():
                self.logger.debug("Tag editing not supported for %s", record.path)
                return EditOutcome.unsupported(file_extension(record.path))

            changes = change_detector.diff(fields, record)
            if not changes:
                self.logger.debug("Tags already up to date for %s", record.path)
                return EditOutcome.skipped()

            # Resolved before the write so a rewrite cannot move the file to
            # another container.
            parent = self.index.get_parent(record)
            self.tag_writer.apply(record.path, codec, fields)
            self.logger.info("Updated %s for %s", ", ".join(changes), record.path)
            self.refresher.refresh(record, parent)
            return EditOutcome.updated()
        except Exception as exc:
            self.logger.warning("Failed to update tags for %s: %s", request.file_id, exc)
            return EditOutcome.failed(exc)

    def preview(self, request: TagEditRequest) -> Dict[str, Dict[str, Optional[object]]]:
        """Return the field changes an edit would apply, without writing."""
        fields = normalize_fields(request, self.logger)
        record = self.index.get_by_id(request.file_id)
        return change_detector.diff(fields, record)
