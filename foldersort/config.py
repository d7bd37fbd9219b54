import json
from pathlib import Path
from typing import Dict, Optional, Tuple

from .classifier import CategoryTable
from .errors import CategoryFileError


def load_categories(path: Optional[Path] = None) -> CategoryTable:
    """Build the table from a flat JSON object {".ext": "folder"}; defaults if no path."""
    if not path:
        return CategoryTable.default()
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CategoryFileError(f"Cannot read category file {path}: {e}") from e
    except ValueError as e:
        raise CategoryFileError(f"Invalid JSON in category file {path}: {e}") from e

    if not isinstance(data, dict):
        raise CategoryFileError(f"Category file must hold a JSON object: {path}")

    mapping: Dict[str, str] = {}
    for ext, folder in data.items():
        if not isinstance(folder, str):
            raise CategoryFileError(f"Folder for {ext!r} must be a string, got {folder!r}")
        if not _valid_folder_name(folder):
            raise CategoryFileError(f"Invalid folder name for {ext!r}: {folder!r}")
        if ext and not ext.startswith("."):
            # Be kind: auto-fix missing dot
            ext = "." + ext
        mapping[ext.lower()] = folder
    return CategoryTable(mapping)


def read_categories(path: Optional[Path] = None) -> Tuple[CategoryTable, Optional[CategoryFileError]]:
    """Like load_categories, but fall back to the defaults and hand back the error."""
    try:
        return load_categories(path), None
    except CategoryFileError as e:
        return CategoryTable.default(), e


def _valid_folder_name(name: str) -> bool:
    return bool(name.strip()) and name not in {".", ".."} and "/" not in name and "\\" not in name
