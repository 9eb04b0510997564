"""
SQLite Store

Persists media and EXIF records in a SQLite database. Each transaction
uses its own connection, so one store may be shared between threads.
"""

import sqlite3
from contextlib import closing, contextmanager
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

from ..models.media import ExifRecord, MediaRecord


SCHEMA = """
CREATE TABLE IF NOT EXISTS media_exif (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    exposure REAL,
    aperture REAL,
    focal_length REAL,
    gps_latitude REAL,
    gps_longitude REAL,
    date_shot TEXT,
    camera TEXT,
    maker TEXT,
    lens TEXT,
    description TEXT,
    iso INTEGER,
    flash INTEGER,
    orientation INTEGER,
    exposure_program INTEGER
);

CREATE TABLE IF NOT EXISTS media (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    path TEXT NOT NULL UNIQUE,
    date_shot TEXT,
    exif_id INTEGER UNIQUE REFERENCES media_exif(id)
);
"""

EXIF_COLUMNS = (
    "exposure", "aperture", "focal_length", "gps_latitude", "gps_longitude",
    "date_shot", "camera", "maker", "lens", "description",
    "iso", "flash", "orientation", "exposure_program",
)


def _format_date(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class SqliteTransaction:
    """Store operations bound to one open SQLite connection"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def add_media(self, media: MediaRecord) -> MediaRecord:
        """Insert a new media row and set `media.id`"""
        cursor = self.conn.execute(
            "INSERT INTO media (path, date_shot, exif_id) VALUES (?, ?, ?)",
            (media.path, _format_date(media.date_shot), media.exif_id),
        )
        media.id = cursor.lastrowid
        return media

    def get_media(self, media_id: int) -> MediaRecord:
        row = self.conn.execute(
            "SELECT id, path, date_shot, exif_id FROM media WHERE id = ?",
            (media_id,),
        ).fetchone()
        if row is None:
            raise KeyError(f"media {media_id} not found")
        return MediaRecord(
            id=row["id"],
            path=row["path"],
            date_shot=_parse_date(row["date_shot"]),
            exif_id=row["exif_id"],
        )

    def get_exif(self, exif_id: int) -> ExifRecord:
        row = self.conn.execute(
            f"SELECT id, {', '.join(EXIF_COLUMNS)} FROM media_exif WHERE id = ?",
            (exif_id,),
        ).fetchone()
        if row is None:
            raise KeyError(f"media_exif {exif_id} not found")
        data = dict(row)
        data["date_shot"] = _parse_date(data["date_shot"])
        return ExifRecord.from_dict(data)

    def replace_exif(self, media: MediaRecord, exif: ExifRecord) -> ExifRecord:
        if media.id is None:
            raise ValueError(f"media {media.path} must be saved before linking EXIF")

        values = [getattr(exif, column) for column in EXIF_COLUMNS]
        values[EXIF_COLUMNS.index("date_shot")] = _format_date(exif.date_shot)
        cursor = self.conn.execute(
            f"INSERT INTO media_exif ({', '.join(EXIF_COLUMNS)}) "
            f"VALUES ({', '.join('?' for _ in EXIF_COLUMNS)})",
            values,
        )
        new_id = cursor.lastrowid

        row = self.conn.execute(
            "SELECT exif_id FROM media WHERE id = ?", (media.id,)
        ).fetchone()
        if row is None:
            raise KeyError(f"media {media.id} not found")

        self.conn.execute(
            "UPDATE media SET exif_id = ? WHERE id = ?", (new_id, media.id)
        )
        # The superseded record has no other owner
        if row["exif_id"] is not None:
            self.conn.execute("DELETE FROM media_exif WHERE id = ?", (row["exif_id"],))

        media.exif_id = new_id
        return replace(exif, id=new_id)

    def save_media(self, media: MediaRecord) -> None:
        cursor = self.conn.execute(
            "UPDATE media SET path = ?, date_shot = ?, exif_id = ? WHERE id = ?",
            (media.path, _format_date(media.date_shot), media.exif_id, media.id),
        )
        if cursor.rowcount == 0:
            raise KeyError(f"media {media.id} not found")


class SqliteStore:
    """SQLite-backed store for media and EXIF records"""

    def __init__(self, db_path: Union[str, Path] = "media.db"):
        self.db_path = str(db_path)
        with closing(self._connect()) as conn:
            conn.executescript(SCHEMA)
            conn.commit()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def transaction(self) -> Iterator[SqliteTransaction]:
        """
        Open a transaction.

        Commits when the block exits cleanly and rolls back when it raises.
        """
        conn = self._connect()
        try:
            yield SqliteTransaction(conn)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
