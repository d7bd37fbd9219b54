from pathlib import Path
from typing import AbstractSet

from .errors import InvalidPathError
from .models import split_name


def resolve_root(path_str: str) -> Path:
    """Return the resolved folder to organize; blank means ~/Downloads."""
    path_str = path_str.strip()
    p = Path(path_str).expanduser() if path_str else Path.home() / "Downloads"
    p = p.resolve()
    if not p.exists():
        raise InvalidPathError(f"Path does not exist: {p}")
    if not p.is_dir():
        raise InvalidPathError(f"Path is not a folder: {p}")
    return p


def unique_path(dest_dir: Path, name: str, taken: AbstractSet[Path] = frozenset()) -> Path:
    """
    Return dest_dir/name, or the first free 'stem(2).ext', 'stem(3).ext', ...

    The counter is unbounded. Nothing is reserved, so a file created by
    someone else between this check and the move can still collide.
    Paths in ``taken`` count as occupied even if nothing exists there yet.
    """
    candidate = dest_dir / name
    if not _taken(candidate, taken):
        return candidate

    stem, suffix = split_name(name)
    i = 2
    while True:
        candidate = dest_dir / f"{stem}({i}){suffix}"
        if not _taken(candidate, taken):
            return candidate
        i += 1


def _taken(p: Path, taken: AbstractSet[Path]) -> bool:
    # a dangling symlink still occupies the name
    return p in taken or p.exists() or p.is_symlink()
