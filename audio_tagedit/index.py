from __future__ import annotations

import logging
import sqlite3
from collections import Counter
from pathlib import Path
from threading import Lock
from typing import Optional

from .codecs import CodecRegistry
from .fs_utils import safe_stat
from .models import MediaFileRecord, MediaNotFoundError, MetaData

logger = logging.getLogger(__name__)

COLUMNS = (
    "id",
    "path",
    "parent_id",
    "is_directory",
    "artist",
    "album_artist",
    "album",
    "title",
    "year",
    "genre",
    "track_number",
    "disc_number",
)
SELECT = f"SELECT {', '.join(COLUMNS)} FROM media_files"


class MediaIndex:
    """SQLite-backed index of media files and the directories containing them.

    File rows cache the tags read through the codec registry. Directory rows
    hold aggregate values derived from their children's cached rows, so a
    directory must be refreshed after its children.
    """

    def __init__(self, path: Path, codecs: CodecRegistry) -> None:
        self.path = path
        self.codecs = codecs
        if str(path) != ":memory:":
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()
        self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS media_files (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                path TEXT NOT NULL UNIQUE,
                parent_id INTEGER REFERENCES media_files(id),
                is_directory INTEGER NOT NULL DEFAULT 0,
                artist TEXT,
                album_artist TEXT,
                album TEXT,
                title TEXT,
                year INTEGER,
                genre TEXT,
                track_number INTEGER,
                disc_number INTEGER,
                mtime_ns INTEGER,
                size_bytes INTEGER,
                updated_at TEXT NOT NULL
            )
            """
        )
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS media_files_parent ON media_files(parent_id)"
        )
        self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def get_by_id(self, media_id: int) -> MediaFileRecord:
        record = self._fetch_one(f"{SELECT} WHERE id = ?", (int(media_id),))
        if record is None:
            raise MediaNotFoundError(media_id)
        return record

    def get_by_path(self, path: Path) -> Optional[MediaFileRecord]:
        return self._fetch_one(f"{SELECT} WHERE path = ?", (str(path),))

    def get_parent(self, record: MediaFileRecord) -> Optional[MediaFileRecord]:
        if record.parent_id is None:
            return None
        return self.get_by_id(record.parent_id)

    def children(self, record: MediaFileRecord) -> list[MediaFileRecord]:
        with self._lock:
            cursor = self._conn.execute(
                f"{SELECT} WHERE parent_id = ? ORDER BY path", (record.id,)
            )
            rows = cursor.fetchall()
        return [self._to_record(row) for row in rows]

    def counts(self) -> tuple[int, int]:
        """Return (files, directories)."""
        with self._lock:
            cursor = self._conn.execute(
                "SELECT is_directory, COUNT(*) FROM media_files GROUP BY is_directory"
            )
            rows = cursor.fetchall()
        totals = {bool(is_dir): int(count) for is_dir, count in rows}
        return totals.get(False, 0), totals.get(True, 0)

    def missing_paths(self, limit: int = 100) -> list[Path]:
        with self._lock:
            cursor = self._conn.execute(
                "SELECT path FROM media_files WHERE is_directory = 0 ORDER BY path"
            )
            rows = cursor.fetchall()
        missing: list[Path] = []
        for (raw,) in rows:
            path = Path(raw)
            if not path.exists():
                missing.append(path)
                if len(missing) >= limit:
                    break
        return missing

    def register(self, path: Path) -> MediaFileRecord:
        """Index one audio file and its containing directory."""
        path = path.expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")
        directory = self._ensure_row(path.parent, parent_id=None, is_directory=True)
        record = self._ensure_row(path, parent_id=directory.id, is_directory=False)
        self.refresh(record)
        self.refresh(directory)
        return self.get_by_id(record.id)

    def refresh(self, record: MediaFileRecord) -> None:
        if record.is_directory:
            meta = self._aggregate(record)
        else:
            meta = self.codecs.resolve(record.path).read(record.path)
        self._store(record, meta)
        logger.debug("Refreshed index entry %s (%s)", record.id, record.path)

    def _aggregate(self, directory: MediaFileRecord) -> MetaData:
        # The first child (by path) names the album, like the per-album view
        # of most library servers; the most common genre wins.
        children = [child for child in self.children(directory) if not child.is_directory]
        if not children:
            return MetaData(title=directory.path.name or None)
        first = children[0]
        genres = Counter(child.genre for child in children if child.genre)
        return MetaData(
            artist=first.album_artist or first.artist,
            album_artist=first.album_artist,
            album=first.album,
            title=directory.path.name or None,
            year=first.year,
            genre=genres.most_common(1)[0][0] if genres else None,
        )

    def _ensure_row(self, path: Path, *, parent_id: Optional[int], is_directory: bool) -> MediaFileRecord:
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO media_files(path, parent_id, is_directory, updated_at)
                VALUES(?, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(path) DO UPDATE SET parent_id=excluded.parent_id
                """,
                (str(path), parent_id, 1 if is_directory else 0),
            )
            self._conn.commit()
        record = self.get_by_path(path)
        assert record is not None
        return record

    def _store(self, record: MediaFileRecord, meta: MetaData) -> None:
        stat = None if record.is_directory else safe_stat(record.path)
        with self._lock:
            self._conn.execute(
                """
                UPDATE media_files SET
                    artist=?, album_artist=?, album=?, title=?, year=?, genre=?,
                    track_number=?, disc_number=?, mtime_ns=?, size_bytes=?,
                    updated_at=CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    meta.artist,
                    meta.album_artist,
                    meta.album,
                    meta.title,
                    meta.year,
                    meta.genre,
                    meta.track_number,
                    meta.disc_number,
                    stat.st_mtime_ns if stat else None,
                    stat.st_size if stat else None,
                    record.id,
                ),
            )
            self._conn.commit()

    def _fetch_one(self, query: str, params: tuple) -> Optional[MediaFileRecord]:
        with self._lock:
            cursor = self._conn.execute(query, params)
            row = cursor.fetchone()
        if not row:
            return None
        return self._to_record(row)

    @staticmethod
    def _to_record(row: tuple) -> MediaFileRecord:
        values = dict(zip(COLUMNS, row))
        values["path"] = Path(values["path"])
        values["is_directory"] = bool(values["is_directory"])
        return MediaFileRecord(**values)
