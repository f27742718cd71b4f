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
SQL Archive listing.

Listing reads entries in metadata-only mode: payloads are never fetched or
decoded, and the archive is opened read-only.
"""

from pathlib import Path
from typing import Callable, Iterable, Iterator

from .store import ArchiveStore
from .structures import Entry, ListingRow
from .utils import format_ratio, format_timestamp

LISTING_HEADER = ("Name", "Type", "Mode", "Modified", "Size (Compressed)")


def with_each_entry(
    archive: str | Path, decompress: bool, callback: Callable[[Entry], None]
) -> None:
    """Call *callback* for every entry in the archive.

    Args:
        archive: Path to the archive file.
        decompress: If True, entries carry their decoded payload in ``data``.
        callback: Function invoked once per entry. Exceptions it raises stop
            the iteration and propagate.
    """
    with ArchiveStore(archive) as store:
        for entry in store.iter_entries(decompress_data=decompress):
            callback(entry)


def list_entries(archive: str | Path) -> Iterator[ListingRow]:
    """Yield one listing row per archive entry.

    Each call re-queries the archive; the connection is released once the
    iterator is exhausted or closed.

    Args:
        archive: Path to the archive file.

    Yields:
        ListingRow objects in statement order.
    """
    with ArchiveStore(archive) as store:
        for entry in store.iter_entries():
            yield ListingRow(
                name=entry.name,
                filetype=entry.filetype,
                mode=entry.permissions,
                mtime=entry.mtime,
                size=entry.size,
                compressed_size=entry.compressed_size,
            )


def format_listing(rows: Iterable[ListingRow]) -> list[str]:
    """Render listing rows as column-aligned text lines, header first."""
    table = [LISTING_HEADER, tuple("=" * len(title) for title in LISTING_HEADER)]
    for row in rows:
        table.append(
            (
                row.name,
                str(row.filetype),
                f"{row.mode:o}",
                format_timestamp(row.mtime),
                f"{row.size} ({format_ratio(row.ratio)})",
            )
        )

    widths = [max(len(line[i]) for line in table) for i in range(len(LISTING_HEADER))]
    lines = []
    for line in table:
        cells = [cell.ljust(width) for cell, width in zip(line, widths)]
        lines.append("  ".join(cells).rstrip())
    return lines
