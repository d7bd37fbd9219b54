from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Set, Union

from .classifier import CategoryTable
from .errors import DestinationCreateError, FolderSortError, RenameError
from .models import FileRecord, MoveResult
from .utils import unique_path


class SafeMover:
    """Moves files from ``root`` into ``root/<category>`` without overwriting.

    A failure on one file becomes a FAILED result and never stops the batch.
    With ``dry_run`` the destination is computed exactly as a real move
    would compute it, but nothing is created or renamed; destinations planned
    earlier in the same batch are treated as taken.
    """

    def __init__(self, root: Path, table: Union[CategoryTable, Mapping[str, str]],
                 dry_run: bool = True):
        self.root = root
        self.table = table if isinstance(table, CategoryTable) else CategoryTable(table)
        self.dry_run = dry_run
        self._planned: Set[Path] = set()

    def move_one(self, rec: FileRecord) -> MoveResult:
        try:
            dest_file = self._destination(rec)
            if self.dry_run:
                self._planned.add(dest_file)
                return MoveResult.planned(rec.rel_path, dest_file)
            self._rename(self.root / rec.rel_path, dest_file)
        except FolderSortError as e:
            return MoveResult.failed(rec.rel_path, e)
        return MoveResult.moved(rec.rel_path, dest_file)

    def iter_moves(self, records: Iterable[FileRecord]) -> Iterator[MoveResult]:
        """Yield one result per record, in order; stop iterating to cancel."""
        for rec in records:
            yield self.move_one(rec)

    def move_many(self, records: Iterable[FileRecord]) -> List[MoveResult]:
        return list(self.iter_moves(records))

    def _destination(self, rec: FileRecord) -> Path:
        dest_dir = self.root / self.table.classify(rec)
        if not self.dry_run:
            try:
                dest_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DestinationCreateError(f"cannot create {dest_dir}: {e}") from e
        try:
            return unique_path(dest_dir, rec.name, self._planned)
        except OSError as e:
            raise DestinationCreateError(f"cannot inspect {dest_dir}: {e}") from e

    @staticmethod
    def _rename(src: Path, dst: Path) -> None:
        try:
            src.rename(dst)
        except OSError as e:
            raise RenameError(f"cannot move {src} to {dst}: {e}") from e


def relocate(root: Path, rel_path: Path, table: Union[CategoryTable, Mapping[str, str]],
             dry_run: bool) -> MoveResult:
    return SafeMover(root, table, dry_run=dry_run).move_one(FileRecord(Path(rel_path)))


def summarize(results: Iterable[MoveResult]) -> Dict[str, int]:
    """Count results per status value, e.g. {'moved': 3, 'failed': 1}."""
    counts: Dict[str, int] = {}
    for r in results:
        counts[r.status.value] = counts.get(r.status.value, 0) + 1
    return counts
