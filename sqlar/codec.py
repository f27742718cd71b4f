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
Payload compression for SQL archives.

SQL archives store payloads in the "zlib format": a two-byte identification
header, a raw deflate stream and a four-byte Adler-32 trailer. This differs
from ZIP, which stores the raw deflate stream only. A payload is kept
uncompressed when compression would not make it smaller, so a stored length
equal to the original size means "stored as-is".
"""

import zlib

from .constants import COMPRESSION_LEVEL
from .errors import SqlarCompressionError


def compress(blob: bytes) -> bytes:
    """Compress a payload, falling back to the original bytes.

    Args:
        blob: Original file content.

    Returns:
        The zlib stream if it is strictly smaller than ``blob``, otherwise ``blob`` unchanged.

    Raises:
        SqlarCompressionError: If compression fails.
    """
    try:
        compressed = zlib.compress(blob, COMPRESSION_LEVEL)
    except zlib.error as e:
        raise SqlarCompressionError(f"zlib compression failed: {e}") from e

    if len(compressed) < len(blob):
        return compressed
    return blob


def decompress(stored: bytes, original_size: int) -> bytes:
    """Decode a stored payload.

    Args:
        stored: Payload bytes as persisted in the archive.
        original_size: Original (pre-compression) size recorded for the entry.

    Returns:
        The original content.

    Raises:
        SqlarCompressionError: If the zlib stream is malformed or inflates to the wrong size.
    """
    # Never compressed
    if original_size <= 0 or len(stored) == original_size:
        return stored

    try:
        data = zlib.decompress(stored)
    except zlib.error as e:
        raise SqlarCompressionError(f"zlib decompression failed: {e}") from e

    if len(data) != original_size:
        raise SqlarCompressionError(
            f"Size mismatch: expected {original_size} bytes, inflated {len(data)} bytes"
        )
    return data
