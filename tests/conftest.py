"""Configuration for pytest."""

import os
from pathlib import Path

import pytest

MTIME = 1_600_000_000


@pytest.fixture
def tree_mtime() -> int:
    """Modification time of ``tree/a.txt``; the other sample paths follow one second apart."""
    return MTIME


@pytest.fixture
def sample_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create ``tree/a.txt`` and ``tree/sub/b.bin`` and chdir next to them.

    Returns the relative root path, so archived names are relative too.
    """
    monkeypatch.chdir(tmp_path)
    root = Path("tree")
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"hello")
    (root / "sub" / "b.bin").write_bytes(bytes(1024))

    for path in (root / "a.txt", root / "sub" / "b.bin"):
        os.chmod(path, 0o644)
    for path in (root / "sub", root):
        os.chmod(path, 0o755)

    for offset, path in enumerate((root / "a.txt", root / "sub" / "b.bin", root / "sub", root)):
        os.utime(path, (MTIME + offset, MTIME + offset))

    return root


def tree_snapshot(root: Path) -> dict:
    """Map every path below *root* (relative) to its type, permissions, mtime and content."""
    snapshot = {}
    for path in sorted(root.rglob("*")):
        st = path.lstat()
        content = path.read_bytes() if path.is_file() else None
        snapshot[path.relative_to(root).as_posix()] = (
            path.is_dir(),
            st.st_mode & 0o777,
            int(st.st_mtime),
            content,
        )
    return snapshot


@pytest.fixture
def snapshot():
    return tree_snapshot
