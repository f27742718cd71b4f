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
SQL Archive structure definitions.

This module defines the file type classification and the dataclasses for
archive entries and listing rows.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from .constants import (
    FILETYPE_DIRECTORY,
    FILETYPE_FILE,
    FILETYPE_UNSUPPORTED,
    PERMISSION_MASK,
    S_IFDIR,
    S_IFMT,
    S_IFREG,
)


class FileType(Enum):
    """Type of an archived object, derived from the type bits of its mode.

    Only regular files and directories are materialized; everything else
    (symlinks, devices, sockets, FIFOs) is Unsupported.
    """

    FILE = FILETYPE_FILE
    DIRECTORY = FILETYPE_DIRECTORY
    UNSUPPORTED = FILETYPE_UNSUPPORTED

    @classmethod
    def from_mode(cls, mode: int) -> "FileType":
        """Classify a ``st_mode`` style integer.

        Args:
            mode: Permission and file type bits.

        Returns:
            FileType for the type bits of ``mode``.
        """
        file_type = mode & S_IFMT
        if file_type == S_IFREG:
            return cls.FILE
        if file_type == S_IFDIR:
            return cls.DIRECTORY
        return cls.UNSUPPORTED

    def __str__(self) -> str:
        return self.value


@dataclass
class Entry:
    """A single archived filesystem object.

    On the write path ``data`` holds the raw file content. On the read path it
    holds the decoded content when the archive was read in full mode, and is
    None in metadata mode or for entries stored without a payload.
    """

    name: str
    mode: int
    mtime: int
    size: int
    compressed_size: int = 0
    data: Optional[bytes] = None

    @property
    def filetype(self) -> FileType:
        """File type derived from the mode's type bits."""
        return FileType.from_mode(self.mode)

    @property
    def permissions(self) -> int:
        """Permission bits of the mode."""
        return self.mode & PERMISSION_MASK

    @property
    def is_dir(self) -> bool:
        return self.filetype is FileType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.filetype is FileType.FILE


@dataclass
class ListingRow:
    """One line of an archive listing."""

    name: str
    filetype: FileType
    mode: int
    mtime: int
    size: int
    compressed_size: int

    @property
    def ratio(self) -> float:
        """Stored length as a percentage of the original size.

        Directories, unsupported entries and empty files have no payload and
        report 0.0.
        """
        if self.filetype is not FileType.FILE or self.size <= 0:
            return 0.0
        return self.compressed_size / self.size * 100.0

    @property
    def modified(self) -> datetime:
        """Modification time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.mtime, tz=timezone.utc)
