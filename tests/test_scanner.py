import os
from pathlib import Path

import pytest

from foldersort.classifier import CategoryTable
from foldersort.errors import CollectError
from foldersort.scanner import FolderScanner, collect

MANAGED = CategoryTable.default().managed_folders


def _touch(path: Path, text: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def _rels(records):
    return [r.rel_path.as_posix() for r in records]


def test_shallow_scan_lists_only_files(tmp_path):
    _touch(tmp_path / "a.txt")
    _touch(tmp_path / "sub" / "inner.jpg")

    assert _rels(collect(tmp_path, False, MANAGED)) == ["a.txt"]


def test_recursive_scan_prunes_managed_folders(tmp_path):
    _touch(tmp_path / "top.png")
    _touch(tmp_path / "images" / "old.png")
    _touch(tmp_path / "images" / "nested" / "deep.png")
    _touch(tmp_path / "others" / "x.bin")
    _touch(tmp_path / "projects" / "plan.pdf")
    _touch(tmp_path / "projects" / "videos" / "clip.mp4")
    _touch(tmp_path / "projects" / "drafts" / "draft.doc")

    rels = _rels(collect(tmp_path, True, MANAGED))

    assert rels == ["projects/drafts/draft.doc", "projects/plan.pdf", "top.png"]
    assert not any(r.startswith("images/") for r in rels)


def test_pruning_follows_custom_table(tmp_path):
    _touch(tmp_path / "images" / "kept.png")
    _touch(tmp_path / "notes" / "skip.md")
    table = CategoryTable({".md": "notes"})

    rels = _rels(collect(tmp_path, True, table.managed_folders))

    assert rels == ["images/kept.png"]


def test_scan_is_sorted(tmp_path):
    for name in ["b.txt", "a.txt", "C.txt", "a/z.txt"]:
        _touch(tmp_path / name)
    rels = _rels(collect(tmp_path, True, MANAGED))
    assert rels == sorted(rels)
    assert set(rels) == {"C.txt", "a.txt", "a/z.txt", "b.txt"}


def test_empty_folder(tmp_path):
    assert collect(tmp_path, True, MANAGED) == []


def test_symlinked_folder_is_reported_not_followed(tmp_path):
    target = tmp_path.parent / (tmp_path.name + "_target")
    _touch(target / "outside.txt")
    try:
        (tmp_path / "link").symlink_to(target, target_is_directory=True)
    except OSError:
        pytest.skip("symlinks not supported")

    assert _rels(collect(tmp_path, True, MANAGED)) == ["link"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(CollectError):
        collect(tmp_path / "missing", False, MANAGED)


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0,
                    reason="needs POSIX permissions and a non-root user")
def test_unreadable_subfolder_aborts_whole_scan(tmp_path):
    _touch(tmp_path / "ok.txt")
    locked = tmp_path / "locked"
    _touch(locked / "secret.txt")
    locked.chmod(0)
    try:
        with pytest.raises(CollectError):
            collect(tmp_path, True, MANAGED)
        # shallow scan never enters the folder
        assert _rels(collect(tmp_path, False, MANAGED)) == ["ok.txt"]
    finally:
        locked.chmod(0o755)


def test_failing_subfolder_read_aborts_whole_scan(tmp_path, monkeypatch):
    _touch(tmp_path / "ok.txt")
    _touch(tmp_path / "a" / "fine.txt")
    _touch(tmp_path / "locked" / "secret.txt")
    real_iterdir = Path.iterdir

    def iterdir(self):
        if self.name == "locked":
            raise PermissionError(13, "Permission denied", str(self))
        return real_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", iterdir)
    scanner = FolderScanner(tmp_path, recursive=True, managed_folders=MANAGED)

    with pytest.raises(CollectError, match="locked"):
        scanner.scan()
    # shallow scan never enters the folder
    assert _rels(collect(tmp_path, False, MANAGED)) == ["ok.txt"]
