from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


def split_name(name: str) -> Tuple[str, str]:
    """Split a base name at its last dot: 'photo.png' -> ('photo', '.png')."""
    idx = name.rfind(".")
    if idx == -1:
        return name, ""
    return name[:idx], name[idx:]


@dataclass(frozen=True)
class FileRecord:
    rel_path: Path  # relative to the scanned root

    @property
    def name(self) -> str:
        return self.rel_path.name


class MoveStatus(Enum):
    PLANNED = "planned"
    MOVED = "moved"
    FAILED = "failed"


@dataclass(frozen=True)
class MoveResult:
    rel_path: Path
    status: MoveStatus
    dst: Optional[Path] = None
    error: str = ""  # detail text, only set for FAILED

    @classmethod
    def planned(cls, rel_path: Path, dst: Path) -> "MoveResult":
        return cls(rel_path, MoveStatus.PLANNED, dst=dst)

    @classmethod
    def moved(cls, rel_path: Path, dst: Path) -> "MoveResult":
        return cls(rel_path, MoveStatus.MOVED, dst=dst)

    @classmethod
    def failed(cls, rel_path: Path, error: Exception) -> "MoveResult":
        return cls(rel_path, MoveStatus.FAILED, error=str(error))

    def describe(self) -> str:
        """Render the result as a single log line."""
        if self.status is MoveStatus.PLANNED:
            return f"[DRY RUN] {self.rel_path} -> {self.dst}"
        if self.status is MoveStatus.MOVED:
            return f"[MOVED] {self.rel_path} -> {self.dst}"
        return f"[ERROR] {self.rel_path}: {self.error}"
