"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
SQL Archive storage implementation.

This module provides the ArchiveStore class, which owns the SQLite connection
to an archive file: schema creation, row insertion and row iteration.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Iterator, Optional

from .codec import compress, decompress
from .constants import COUNT_ENTRIES, INSERT_ENTRY, SCHEMA, SELECT_FULL, SELECT_METADATA
from .errors import (
    SqlarCompressionError,
    SqlarDuplicateEntryError,
    SqlarError,
    SqlarFormatError,
    SqlarOpenError,
)
from .structures import Entry

logger = logging.getLogger(__name__)


class ArchiveStore:
    """Connection to a single SQL Archive file.

    In read mode the database is opened read-only, so reading an archive can
    never modify it. In create mode the file is created and the ``sqlar``
    table is initialized. Inserted rows are committed when the store is
    closed, on every exit path.

    Example:
        with ArchiveStore("archive.sqlar") as store:
            for entry in store.iter_entries():
                print(entry.name, entry.size)
    """

    def __init__(self, path: str | Path, create: bool = False):
        """Open an archive file.

        Args:
            path: Path to the archive file (str or pathlib.Path).
            create: If True, create the file and initialize the schema.

        Raises:
            SqlarOpenError: If the file cannot be opened or initialized.
        """
        self._path = Path(path)
        self._writable = create
        self._closed: bool = False
        self._conn: Optional[sqlite3.Connection] = None

        if create:
            self._conn = self._connect(str(self._path), uri=False)
            try:
                self._conn.executescript(SCHEMA)
            except sqlite3.Error as e:
                self._conn.close()
                self._conn = None
                self._closed = True
                raise SqlarOpenError(f"Cannot initialize archive {self._path}: {e}") from e
        else:
            if not self._path.exists():
                raise SqlarOpenError(f"Archive not found: {self._path}")
            uri = f"{self._path.resolve().as_uri()}?mode=ro"
            self._conn = self._connect(uri, uri=True)

        logger.debug("Opened archive %s (%s)", self._path, "create" if create else "read-only")

    def _connect(self, database: str, uri: bool) -> sqlite3.Connection:
        try:
            return sqlite3.connect(database, uri=uri)
        except sqlite3.Error as e:
            raise SqlarOpenError(f"Cannot open archive {self._path}: {e}") from e

    @property
    def path(self) -> Path:
        return self._path

    def _connection(self) -> sqlite3.Connection:
        if self._closed or self._conn is None:
            raise SqlarError("Archive is closed")
        return self._conn

    def insert(self, entry: Entry) -> int:
        """Insert one entry as a row.

        File payloads pass through the codec; directories and unsupported
        entries are stored with a NULL payload.

        Args:
            entry: Entry with raw content in ``data`` (files only).

        Returns:
            Stored payload length in bytes.

        Raises:
            SqlarError: If the archive is closed or opened read-only.
            SqlarDuplicateEntryError: If an entry with the same name already exists.
        """
        conn = self._connection()
        if not self._writable:
            raise SqlarError(f"Archive {self._path} is opened read-only")

        if entry.is_file:
            payload: Optional[bytes] = compress(entry.data or b"")
        else:
            payload = None

        try:
            conn.execute(INSERT_ENTRY, (entry.name, entry.mode, entry.mtime, entry.size, payload))
        except sqlite3.IntegrityError as e:
            raise SqlarDuplicateEntryError(f"Duplicate entry name: {entry.name}") from e
        except sqlite3.Error as e:
            raise SqlarFormatError(f"Cannot insert {entry.name}: {e}") from e

        return len(payload) if payload is not None else 0

    def iter_entries(self, decompress_data: bool = False) -> Iterator[Entry]:
        """Iterate over all entries in statement order.

        No ordering is guaranteed; in particular a directory may be returned
        after its children.

        Args:
            decompress_data: If True, fetch and decode payloads (full mode).
                Otherwise only metadata and the stored length are read.

        Yields:
            Entry objects. ``compressed_size`` is always the stored length.

        Raises:
            SqlarFormatError: If the file is not a valid SQL Archive.
            SqlarCompressionError: If a payload cannot be decoded.
        """
        conn = self._connection()
        query = SELECT_FULL if decompress_data else SELECT_METADATA

        try:
            cursor = conn.execute(query)
            for row in cursor:
                yield self._row_to_entry(row, decompress_data)
        except sqlite3.Error as e:
            raise SqlarFormatError(f"Cannot read archive {self._path}: {e}") from e

    @staticmethod
    def _row_to_entry(row: tuple, decompress_data: bool) -> Entry:
        name = row[0]
        if isinstance(name, bytes):
            name = name.decode("utf-8", errors="replace")

        size = int(row[3] or 0)
        entry = Entry(
            name=str(name),
            mode=int(row[1] or 0),
            mtime=int(row[2] or 0),
            size=size,
            compressed_size=int(row[4]),
        )

        if not decompress_data:
            return entry

        if row[5] is None:
            if entry.is_file and size > 0:
                raise SqlarCompressionError(f"Missing payload for {entry.name} ({size} bytes expected)")
        else:
            stored = row[5]
            if isinstance(stored, str):
                stored = stored.encode("utf-8")
            entry.data = decompress(bytes(stored), size)

        return entry

    def count(self) -> int:
        """Number of entries in the archive."""
        conn = self._connection()
        try:
            return int(conn.execute(COUNT_ENTRIES).fetchone()[0])
        except sqlite3.Error as e:
            raise SqlarFormatError(f"Cannot read archive {self._path}: {e}") from e

    def close(self) -> None:
        """Commit pending inserts and close the connection."""
        if self._closed:
            return

        try:
            if self._writable and self._conn is not None:
                self._conn.commit()
        finally:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            self._closed = True

    def __enter__(self) -> "ArchiveStore":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
