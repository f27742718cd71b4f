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
SQL Archive constants including mode bit masks, the table schema and codec settings.

This module defines the constants shared by the codec, the archive store and
the create/list/extract operations.
"""

import zlib

# stat.st_mode file type bits (see inode(7))
S_IFMT = 0o170000  # Bit mask for the file type bit field
S_IFREG = 0o100000  # Regular file
S_IFDIR = 0o040000  # Directory

# Permission bits restored on extraction and shown by list
PERMISSION_MASK = 0o777

# File type names (for display)
FILETYPE_FILE = "File"
FILETYPE_DIRECTORY = "Dir"
FILETYPE_UNSUPPORTED = "Unsupported"

# zlib stream compression level used for payloads
COMPRESSION_LEVEL = zlib.Z_DEFAULT_COMPRESSION

# Archive table
TABLE_NAME = "sqlar"

SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME}(
    name TEXT PRIMARY KEY,  -- name of the file
    mode INT,               -- access permissions
    mtime INT,              -- last modification time
    sz INT,                 -- original file size
    data BLOB               -- compressed content
);
"""

INSERT_ENTRY = f"INSERT INTO {TABLE_NAME} (name, mode, mtime, sz, data) VALUES (?, ?, ?, ?, ?)"

SELECT_METADATA = f"SELECT name, mode, mtime, sz, COALESCE(LENGTH(data), 0) FROM {TABLE_NAME}"

SELECT_FULL = f"SELECT name, mode, mtime, sz, COALESCE(LENGTH(data), 0), data FROM {TABLE_NAME}"

COUNT_ENTRIES = f"SELECT COUNT(*) FROM {TABLE_NAME}"

# Timestamp format used by the listing (always UTC)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
