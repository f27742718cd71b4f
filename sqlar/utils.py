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
Utility functions for the SQL Archive library.

This module provides helpers for extraction path validation, modification
time conversion and listing formatting.
"""

import os
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from .constants import TIMESTAMP_FORMAT
from .errors import SqlarExtractError, SqlarUnsafePathError


def safe_extract_path(output_dir: Path, name: str) -> Path:
    """Resolve the target path of an entry inside the extraction directory.

    Args:
        output_dir: Extraction root.
        name: Entry name as stored in the archive.

    Returns:
        ``output_dir`` joined with ``name``.

    Raises:
        SqlarUnsafePathError: If the name is empty, contains a NUL byte, is
            absolute or contains ".." segments.
    """
    if not name:
        raise SqlarUnsafePathError("Entry name is empty")

    if "\x00" in name:
        raise SqlarUnsafePathError(f"Entry name contains a NUL byte: {name!r}")

    # Archives may come from another platform, so check both flavours
    if PurePosixPath(name).is_absolute() or os.path.isabs(name):
        raise SqlarUnsafePathError(f"Entry name is an absolute path: {name}")

    relative = Path(name)
    if ".." in relative.parts or ".." in PurePosixPath(name).parts:
        raise SqlarUnsafePathError(f"Entry name escapes the destination: {name}")

    return output_dir / relative


def default_destination(archive: Path) -> Path:
    """Default extraction directory: the archive file name without extension.

    Args:
        archive: Path to the archive file.

    Returns:
        Relative path named after the archive's stem.

    Raises:
        SqlarExtractError: If the archive path has no file name to derive a destination from.
    """
    stem = Path(archive).stem
    if not stem:
        raise SqlarExtractError(f"Cannot derive a destination from {archive}")
    return Path(stem)


def stat_mtime(st: os.stat_result) -> int:
    """Whole seconds since the epoch, or 0 for times before the epoch."""
    mtime = int(st.st_mtime)
    if mtime < 0:
        return 0
    return mtime


def format_timestamp(mtime: int) -> str:
    """Format a modification time as ``YYYY-MM-DD HH:MM:SS UTC``."""
    dt = datetime.fromtimestamp(mtime, tz=timezone.utc)
    return f"{dt.strftime(TIMESTAMP_FORMAT)} UTC"


def format_ratio(ratio: float) -> str:
    """Format a compression ratio with one decimal place."""
    return f"{ratio:.1f}%"
