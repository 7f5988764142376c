# Package initialization for fileenum.
# Re-exports the enumerator API so callers can import from the package root.

from fileenum.enumerator import FileEnumerator, append_path, iter_entries
from fileenum.models import (
    EMPTY_FILE_INFO,
    FileInfo,
    FileType,
    FolderSearchPolicy,
    MetadataKind,
    Win32FindData,
)
from fileenum.pattern import matches

__all__ = [
    "__version__",
    "EMPTY_FILE_INFO",
    "FileEnumerator",
    "FileInfo",
    "FileType",
    "FolderSearchPolicy",
    "MetadataKind",
    "Win32FindData",
    "append_path",
    "iter_entries",
    "matches",
]

# Package version.
# This is duplicated in pyproject.toml; keep them in sync.
__version__ = "0.1.0"
