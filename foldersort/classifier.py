from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from .default_rules import DEFAULT_CATEGORIES, OTHERS_FOLDER
from .models import FileRecord, split_name


class CategoryTable:
    """Read-only extension→folder mapping used for one run.

    Keys are lowercased on construction so lookups only have to lowercase
    the probe extension.
    """
    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        source = DEFAULT_CATEGORIES if mapping is None else mapping
        self.map: Mapping[str, str] = MappingProxyType(
            {ext.lower(): folder for ext, folder in source.items()}
        )
        self.managed_folders: FrozenSet[str] = derive_managed_folders(self.map)

    @classmethod
    def default(cls) -> "CategoryTable":
        return cls()

    def folder_for(self, name: str) -> str:
        return resolve_category(name, self.map)

    def classify(self, rec: FileRecord) -> str:
        return self.folder_for(rec.name)

    def __repr__(self) -> str:
        return f"CategoryTable({dict(self.map)!r})"


def resolve_category(file_name: str, table: Mapping[str, str]) -> str:
    """Return the category folder for ``file_name``, or ``others``."""
    ext = split_name(file_name)[1].lower()
    return table.get(ext, OTHERS_FOLDER)


def derive_managed_folders(table: Mapping[str, str]) -> FrozenSet[str]:
    """Folders the organizer owns: every category plus the fallback."""
    return frozenset({OTHERS_FOLDER, *table.values()})

