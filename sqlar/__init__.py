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
SQLAR - SQLite Archive Python Library.

An "SQLite Archive" is a file container similar to a ZIP archive or tarball,
but stored as a single table in an SQLite database. This library lists,
creates and extracts such archives, using only Python standard library
modules. See https://www.sqlite.org/sqlar.html for the format.
"""

from .creator import create
from .errors import SqlarError
from .extractor import extract
from .lister import list_entries, with_each_entry
from .store import ArchiveStore
from .structures import Entry, FileType, ListingRow

__all__ = [
    "ArchiveStore",
    "Entry",
    "FileType",
    "ListingRow",
    "SqlarError",
    "create",
    "extract",
    "list_entries",
    "with_each_entry",
]

__version__ = "0.1.0"
