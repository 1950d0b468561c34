# common/storage.py
from __future__ import annotations
import logging
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from common.config import Settings

logger = logging.getLogger("reports.storage")


class StorageBackend(Protocol):
    """Somewhere to keep one named text blob (the serialized report list)."""

    def load(self) -> Optional[str]: ...

    def save(self, blob: str) -> None: ...


# -------------------- JSON file --------------------
class JsonFileBackend:
    """
    Keep the blob in a single UTF-8 file.
    Writes go to a temp file next to the target and are swapped in with
    os.replace; readers never see a half-written file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, blob: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(blob)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", len(blob), self.path)

    def __repr__(self) -> str:
        return f"JsonFileBackend({str(self.path)!r})"


# -------------------- SQLite key/value --------------------
class SqliteBackend:
    """
    Local-storage semantics on top of SQLite: one row per key in
    kv_store(key TEXT PRIMARY KEY, value TEXT).
    """

    def __init__(self, db_path: Path | str, key: str):
        self.db_path = Path(db_path)
        self.key = key

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        con = sqlite3.connect(self.db_path)
        con.execute("CREATE TABLE IF NOT EXISTS kv_store (key TEXT PRIMARY KEY, value TEXT NOT NULL)")
        return con

    def load(self) -> Optional[str]:
        if not self.db_path.exists():
            return None
        con = self._connect()
        try:
            row = con.execute("SELECT value FROM kv_store WHERE key = ?", (self.key,)).fetchone()
        finally:
            con.close()
        return row[0] if row else None

    def save(self, blob: str) -> None:
        con = self._connect()
        try:
            with con:
                con.execute(
                    "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (self.key, blob),
                )
        finally:
            con.close()
        logger.debug("Stored %d bytes under %r in %s", len(blob), self.key, self.db_path)

    def __repr__(self) -> str:
        return f"SqliteBackend({str(self.db_path)!r}, key={self.key!r})"


def make_backend(settings: Settings) -> StorageBackend:
    """Build the backend named in the settings."""
    if settings.storage_backend == "sqlite":
        return SqliteBackend(settings.data_dir / "reports.db", settings.storage_key)
    return JsonFileBackend(settings.data_dir / f"{settings.storage_key}.json")
