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
SQL Archive extraction.

Entries are read in full mode and materialized below a destination directory.
Only regular files and directories are created; entries whose names are
absolute or contain ".." segments are never written.

Rows come back in no particular order, so parent directories are created on
demand, and directory modification times and permissions are applied after
every entry has been written.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .errors import SqlarExtractError, SqlarUnsafePathError
from .store import ArchiveStore
from .structures import Entry, FileType
from .utils import default_destination, safe_extract_path

logger = logging.getLogger(__name__)


def _set_metadata(target: Path, entry: Entry) -> None:
    os.utime(target, (entry.mtime, entry.mtime))
    os.chmod(target, entry.permissions)


def _materialize(target: Path, entry: Entry) -> bool:
    """Create the directory or file for *entry*.

    Returns:
        True if something was created, False for unsupported entries.
    """
    filetype = entry.filetype

    if filetype is FileType.DIRECTORY:
        target.mkdir(parents=True, exist_ok=True)
        return True

    if filetype is FileType.FILE:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(entry.data or b"")
        _set_metadata(target, entry)
        return True

    logger.warning("unsupported file type for %s (mode %o), skipping", entry.name, entry.mode)
    return False


def extract(
    archive: str | Path,
    destination: Optional[str | Path] = None,
    strict: bool = True,
) -> int:
    """Extract all entries of *archive* into *destination*.

    Args:
        archive: Path to the archive file.
        destination: Target directory. Defaults to the archive file name
            without its extension.
        strict: If True, the first filesystem error aborts extraction. If
            False, the failing entry is logged and skipped.

    Returns:
        Number of files and directories materialized.

    Raises:
        SqlarOpenError: If the archive cannot be opened.
        SqlarFormatError: If the archive is not a valid SQL Archive.
        SqlarCompressionError: If a payload cannot be decoded.
        SqlarExtractError: If the destination cannot be created, or (strict)
            an entry cannot be written.
    """
    archive = Path(archive)
    output_dir = Path(destination) if destination is not None else default_destination(archive)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SqlarExtractError(f"Cannot create destination {output_dir}: {e}") from e

    logger.info("Extracting %s to %s/", archive, output_dir)

    extracted = 0
    directories: list[tuple[Path, Entry]] = []

    with ArchiveStore(archive) as store:
        for entry in store.iter_entries(decompress_data=True):
            try:
                target = safe_extract_path(output_dir, entry.name)
            except SqlarUnsafePathError as e:
                logger.warning("%s, skipping", e)
                continue

            logger.info("Extracting: %s", entry.name)
            try:
                created = _materialize(target, entry)
            except OSError as e:
                if strict:
                    raise SqlarExtractError(f"Failed to extract {entry.name}: {e}") from e
                logger.warning("failed to extract %s: %s", entry.name, e)
                continue

            if not created:
                continue
            if entry.is_dir:
                directories.append((target, entry))
            extracted += 1

    # Deepest first, so restoring a parent's mtime happens after its children
    directories.sort(key=lambda item: len(item[0].parts), reverse=True)
    for target, entry in directories:
        try:
            _set_metadata(target, entry)
        except OSError as e:
            if strict:
                raise SqlarExtractError(f"Failed to set metadata on {entry.name}: {e}") from e
            logger.warning("failed to set metadata on %s: %s", entry.name, e)

    return extracted
