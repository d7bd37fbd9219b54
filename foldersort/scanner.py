from pathlib import Path
from typing import AbstractSet, List

from .errors import CollectError
from .models import FileRecord


class FolderScanner:
    """Lists the files of a folder (optionally recursively) as FileRecords.

    In recursive mode any folder whose name is in ``managed_folders`` is
    skipped together with everything below it, so folders created by a
    previous run are never re-scanned. Symlinks are reported as files and
    never followed. Results are sorted by relative path.
    """

    def __init__(self, root: Path, recursive: bool = False,
                 managed_folders: AbstractSet[str] = frozenset()):
        self.root = root
        self.recursive = recursive
        self.managed_folders = managed_folders

    def scan(self) -> List[FileRecord]:
        """Return every candidate file, or raise CollectError for the whole call."""
        rel_paths: List[Path] = []
        pending = [self.root]
        while pending:
            folder = pending.pop()
            for p in self._list(folder):
                if self._is_dir(p):
                    if self.recursive and p.name not in self.managed_folders:
                        pending.append(p)
                    continue
                rel_paths.append(p.relative_to(self.root))

        rel_paths.sort(key=lambda rel: rel.as_posix())
        return [FileRecord(rel) for rel in rel_paths]

    def _list(self, folder: Path) -> List[Path]:
        try:
            return sorted(folder.iterdir())
        except OSError as e:
            raise CollectError(f"Cannot read folder {folder}: {e}") from e

    def _is_dir(self, p: Path) -> bool:
        try:
            return p.is_dir() and not p.is_symlink()
        except OSError as e:
            raise CollectError(f"Cannot inspect {p}: {e}") from e


def collect(root: Path, recursive: bool, managed_folders: AbstractSet[str]) -> List[FileRecord]:
    return FolderScanner(root, recursive=recursive, managed_folders=managed_folders).scan()
