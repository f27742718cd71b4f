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
SQL Archive creation.

This module walks one or more filesystem roots and stores every regular file,
directory and unsupported object it finds as one archive row.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .store import ArchiveStore
from .structures import Entry, FileType
from .utils import stat_mtime

logger = logging.getLogger(__name__)


def _log_walk_error(error: OSError) -> None:
    logger.warning("failed to read entry: %s", error)


def iter_tree(root: str | Path) -> Iterator[tuple[str, bool]]:
    """Yield every path below *root*, the root itself first.

    Directories are yielded before their contents and siblings are sorted by
    name. Symbolic links are never followed below the root.

    Args:
        root: File or directory to walk.

    Yields:
        ``(path, is_root)`` pairs. Paths are built by joining the walk
        position as given, without canonicalization.
    """
    root = os.fspath(root)
    yield root, True

    if not os.path.isdir(root):
        return

    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(dirnames + filenames):
            yield os.path.join(dirpath, name), False


def _read_entry(path: str, is_root: bool) -> Optional[Entry]:
    """Build an Entry for *path*, or None if it cannot be read."""
    try:
        st = os.stat(path) if is_root else os.lstat(path)
    except OSError as e:
        logger.warning("failed to read metadata for %s: %s", path, e)
        return None

    # Names that are not valid UTF-8 are stored lossily
    name = os.fsencode(path).decode("utf-8", errors="replace")
    entry = Entry(name=name, mode=st.st_mode, mtime=stat_mtime(st), size=0)

    if entry.filetype is FileType.FILE:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.warning("could not read file %s: %s", path, e)
            return None
        entry.data = data
        entry.size = len(data)

    return entry


def create(archive: str | Path, paths: Iterable[str | Path]) -> bool:
    """Create a new archive and add all files and directories below *paths*.

    Objects that cannot be read are logged and skipped. Nothing is written
    if *archive* already exists.

    Args:
        archive: Path of the archive to create.
        paths: Files or directories to include, walked recursively.

    Returns:
        True if the archive was created, False if it already existed.

    Raises:
        SqlarOpenError: If the archive file cannot be created.
        SqlarDuplicateEntryError: If two walked objects have the same name.
    """
    archive = Path(archive)
    if archive.exists():
        logger.error("%s already exists. not creating a new one.", archive)
        return False

    with ArchiveStore(archive, create=True) as store:
        for root in paths:
            for path, is_root in iter_tree(root):
                entry = _read_entry(path, is_root)
                if entry is None:
                    continue

                logger.info(
                    "Adding: path=%s | type=%s | mode=%o | mtime=%d",
                    path,
                    entry.filetype,
                    entry.mode,
                    entry.mtime,
                )
                stored = store.insert(entry)
                logger.debug("Stored %s: %d -> %d bytes", path, entry.size, stored)

    return True
