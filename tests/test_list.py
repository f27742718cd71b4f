import hashlib
import sqlite3
from pathlib import Path

import pytest

from sqlar.creator import create
from sqlar.errors import SqlarOpenError
from sqlar.lister import format_listing, list_entries, with_each_entry
from sqlar.store import ArchiveStore
from sqlar.structures import FileType


@pytest.fixture
def archive(sample_tree: Path) -> Path:
    path = Path("sample.sqlar")
    assert create(path, [sample_tree])
    return path


def test_list_reports_every_entry(archive: Path, tree_mtime: int) -> None:
    rows = {row.name: row for row in list_entries(archive)}
    assert set(rows) == {"tree", "tree/a.txt", "tree/sub", "tree/sub/b.bin"}

    a = rows["tree/a.txt"]
    assert a.filetype is FileType.FILE
    assert a.mode == 0o644
    assert a.mtime == tree_mtime
    assert a.size == 5
    assert a.compressed_size == 5
    assert a.ratio == pytest.approx(100.0)

    b = rows["tree/sub/b.bin"]
    assert b.size == 1024
    assert b.ratio < 10.0

    assert rows["tree/sub"].filetype is FileType.DIRECTORY
    assert rows["tree/sub"].mode == 0o755
    assert rows["tree/sub"].ratio == 0.0


def test_list_is_restartable(archive: Path) -> None:
    first = [row.name for row in list_entries(archive)]
    second = [row.name for row in list_entries(archive)]
    assert first == second
    assert len(first) == 4


def test_list_does_not_modify_archive(archive: Path) -> None:
    before = hashlib.sha256(archive.read_bytes()).hexdigest()
    list(list_entries(archive))
    format_listing(list_entries(archive))
    assert hashlib.sha256(archive.read_bytes()).hexdigest() == before


def test_ratio_uses_stored_length(tmp_path: Path) -> None:
    path = tmp_path / "ratio.sqlar"
    with ArchiveStore(path, create=True):
        pass
    conn = sqlite3.connect(path)
    conn.execute("INSERT INTO sqlar VALUES ('f', ?, 0, 1000, ?)", (0o100644, bytes(400)))
    conn.commit()
    conn.close()

    (row,) = list(list_entries(path))
    assert row.compressed_size == 400
    assert row.ratio == pytest.approx(40.0)
    assert format_listing([row])[-1].endswith("1000 (40.0%)")


def test_format_listing(archive: Path) -> None:
    lines = format_listing(list_entries(archive))
    assert lines[0].split() == ["Name", "Type", "Mode", "Modified", "Size", "(Compressed)"]
    assert set(lines[1].replace(" ", "")) == {"="}

    body = {line.split()[0]: line for line in lines[2:]}
    assert "File  644" in body["tree/a.txt"]
    assert "2020-09-13 12:26:40 UTC" in body["tree/a.txt"]
    assert body["tree/a.txt"].endswith("5 (100.0%)")
    assert "Dir" in body["tree/sub"]
    assert body["tree/sub"].endswith("0 (0.0%)")


def test_with_each_entry(archive: Path) -> None:
    seen = {}
    with_each_entry(archive, True, lambda entry: seen.setdefault(entry.name, entry.data))
    assert seen["tree/a.txt"] == b"hello"
    assert seen["tree/sub/b.bin"] == bytes(1024)
    assert seen["tree"] is None

    metadata_only = []
    with_each_entry(archive, False, lambda entry: metadata_only.append(entry.data))
    assert metadata_only == [None] * 4


def test_list_missing_archive(tmp_path: Path) -> None:
    with pytest.raises(SqlarOpenError):
        list(list_entries(tmp_path / "missing.sqlar"))
