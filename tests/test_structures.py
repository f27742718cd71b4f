from datetime import datetime, timezone

import pytest

from sqlar.structures import Entry, FileType, ListingRow


@pytest.mark.parametrize(
    "mode, expected",
    [
        (0o100644, FileType.FILE),
        (0o100755, FileType.FILE),
        (0o040755, FileType.DIRECTORY),
        (0o120777, FileType.UNSUPPORTED),  # symlink
        (0o020666, FileType.UNSUPPORTED),  # character device
        (0o010644, FileType.UNSUPPORTED),  # fifo
        (0o140755, FileType.UNSUPPORTED),  # socket
        (0o644, FileType.UNSUPPORTED),  # no type bits
    ],
)
def test_filetype_from_mode(mode: int, expected: FileType) -> None:
    assert FileType.from_mode(mode) is expected


def test_entry_derived_fields() -> None:
    entry = Entry(name="a.txt", mode=0o100640, mtime=0, size=5)
    assert entry.filetype is FileType.FILE
    assert entry.permissions == 0o640
    assert entry.is_file
    assert not entry.is_dir
    assert entry.data is None


def test_listing_ratio() -> None:
    row = ListingRow("f", FileType.FILE, 0o644, 0, size=1000, compressed_size=400)
    assert row.ratio == pytest.approx(40.0)


@pytest.mark.parametrize("filetype", [FileType.DIRECTORY, FileType.UNSUPPORTED])
def test_listing_ratio_without_payload(filetype: FileType) -> None:
    row = ListingRow("d", filetype, 0o755, 0, size=0, compressed_size=0)
    assert row.ratio == 0.0


def test_listing_ratio_empty_file() -> None:
    row = ListingRow("empty", FileType.FILE, 0o644, 0, size=0, compressed_size=0)
    assert row.ratio == 0.0


def test_listing_modified_is_utc() -> None:
    row = ListingRow("f", FileType.FILE, 0o644, 86400, size=1, compressed_size=1)
    assert row.modified == datetime(1970, 1, 2, tzinfo=timezone.utc)
