class FolderSortError(Exception):
    """Base error for the project."""

class InvalidPathError(FolderSortError):
    pass

class CategoryFileError(FolderSortError):
    pass

class CollectError(FolderSortError):
    """Enumeration of the root (or a folder below it) failed."""

class DestinationCreateError(FolderSortError):
    pass

class RenameError(FolderSortError):
    pass
