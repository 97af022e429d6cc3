"""SQLite database connection and schema management."""

import os
import sqlite3
from pathlib import Path

import structlog

logger = structlog.get_logger()

_DB_FILE_PERMISSIONS = 0o600
_MEMORY_PATH = ":memory:"
_SQLITE_SCHEME = "sqlite://"

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS games (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    data TEXT NOT NULL
);
"""


class StorageError(Exception):
    """Raised when the backing store cannot be reached or a query fails."""


def resolve_database_path(url: str) -> str:
    """Turn a connection string into a path sqlite3 can open.

    Accepts ``sqlite://`` (in-memory), ``sqlite:///relative.db``,
    ``sqlite:////absolute/path.db`` or a bare filesystem path.
    """
    url = url.strip()
    if not url:
        raise StorageError("Database URL must not be empty")
    if "://" not in url:
        return url
    if not url.startswith(_SQLITE_SCHEME):
        scheme = url.split("://", 1)[0]
        raise StorageError(f"Unsupported database URL scheme: {scheme!r}")
    rest = url.removeprefix(_SQLITE_SCHEME)
    if rest in ("", "/", f"/{_MEMORY_PATH}"):
        return _MEMORY_PATH
    if not rest.startswith("/"):
        raise StorageError(f"Malformed SQLite URL: {url!r}")
    return rest[1:]


class Database:
    """SQLite database wrapper holding game documents as JSON."""

    def __init__(self, url: str | Path) -> None:
        self._path = resolve_database_path(str(url))
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_memory(self) -> bool:
        return self._path == _MEMORY_PATH

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the active connection or raise if disconnected."""
        if self._conn is None:
            raise StorageError("Database is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the database, apply pragmas, create schema, and harden file permissions."""
        try:
            if not self.is_memory:
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._path, check_same_thread=False)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=5000")
            conn.executescript(_SCHEMA_SQL)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Could not open database at {self._path}: {exc}") from exc

        self._conn = conn
        self._harden_permissions()
        logger.info("connected to database", path=self._path)

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _harden_permissions(self) -> None:
        """Set restrictive file permissions on POSIX systems (best effort)."""
        if os.name != "posix" or self.is_memory:  # pragma: no cover
            return
        for suffix in ("", "-wal", "-shm"):
            p = Path(self._path + suffix)
            if p.exists():
                try:
                    p.chmod(_DB_FILE_PERMISSIONS)
                except OSError:
                    logger.warning("could not set file permissions", permissions=oct(_DB_FILE_PERMISSIONS), path=str(p))
