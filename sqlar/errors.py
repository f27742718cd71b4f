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
Custom exception classes for the SQL Archive library.

This module defines specific exception types for different error conditions
that can occur when creating, listing or extracting SQL archives.
"""


class SqlarError(Exception):
    """Base exception class for all SQL Archive errors."""

    pass


class SqlarOpenError(SqlarError):
    """Raised when the archive file cannot be opened or initialized.

    This exception is raised when:
    - The archive file does not exist (read mode)
    - The database cannot be created or its schema cannot be written
    """

    pass


class SqlarFormatError(SqlarError):
    """Raised when an archive file is not a valid SQL Archive.

    This exception is raised when:
    - The file is not an SQLite database
    - The sqlar table is missing or has an unexpected shape
    """

    pass


class SqlarCompressionError(SqlarError):
    """Raised when a stored payload cannot be decoded.

    This exception is raised when:
    - The zlib stream is corrupted
    - The inflated payload does not have the recorded original size
    """

    pass


class SqlarDuplicateEntryError(SqlarError):
    """Raised when two entries with the same name are inserted into an archive."""

    pass


class SqlarUnsafePathError(SqlarError):
    """Raised when an entry name would resolve outside the extraction directory.

    This exception is raised when:
    - The entry name is an absolute path
    - The entry name contains ".." segments
    - The entry name is empty
    """

    pass


class SqlarExtractError(SqlarError):
    """Raised when extraction cannot proceed.

    This exception is raised when:
    - The destination directory cannot be created
    - A directory, file or its metadata cannot be written (strict mode)
    """

    pass
