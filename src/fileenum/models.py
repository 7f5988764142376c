# Shared data models for fileenum.
# Lives in its own module so the reader, the enumerator and the cli
# can share types without importing each other.

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum, IntFlag
from pathlib import Path
from typing import Optional, Union, cast


class FileType(IntFlag):
    # Bit values match the historical enumerator flags; 8 is unused.
    FILES = 1 << 0
    DIRECTORIES = 1 << 1
    INCLUDE_DOT_DOT = 1 << 2
    SHOW_SYM_LINKS = 1 << 4


class FolderSearchPolicy(str, Enum):
    # MATCH_ONLY: only folders whose names match the pattern are entered,
    # and everything inside them is returned.
    # ALL: every folder is entered and the pattern is applied inside each one.
    MATCH_ONLY = "match-only"
    ALL = "all"


class MetadataKind(str, Enum):
    none = "none"
    posix_stat = "posix_stat"
    win32_find_data = "win32_find_data"


class Backend(str, Enum):
    auto = "auto"
    posix = "posix"
    windows = "windows"


@dataclass(frozen=True)
class Win32FindData:
    # Subset of WIN32_FIND_DATA that a find-handle listing reports.
    # Times are POSIX timestamps; the short 8.3 name is never populated.
    file_attributes: int
    file_size: int
    creation_time: float
    last_access_time: float
    last_write_time: float
    reparse_tag: int = 0


RawMetadata = Union[os.stat_result, Win32FindData, None]


@dataclass(frozen=True)
class FileInfo:
    # Snapshot of one directory entry.
    # `name` never carries path information, unlike the paths returned
    # by FileEnumerator.next().
    name: str = ""
    is_directory: bool = False
    size: int = 0
    is_symlink: bool = False
    kind: MetadataKind = MetadataKind.none
    raw_metadata: RawMetadata = None

    @property
    def is_empty(self) -> bool:
        return not self.name

    def stat(self) -> os.stat_result:
        # Native record of the open/read/stat backend.
        if self.kind is not MetadataKind.posix_stat:
            raise ValueError(f"no POSIX stat record for {self.name!r} ({self.kind.value})")
        return cast(os.stat_result, self.raw_metadata)

    def find_data(self) -> Win32FindData:
        # Native record of the find-handle backend.
        if self.kind is not MetadataKind.win32_find_data:
            raise ValueError(f"no find data for {self.name!r} ({self.kind.value})")
        return cast(Win32FindData, self.raw_metadata)


# Returned by FileEnumerator.get_info() when no entry is current.
EMPTY_FILE_INFO = FileInfo()


@dataclass(frozen=True)
class ListOptions:
    root: Path
    recursive: bool
    file_type: FileType
    pattern: str
    policy: FolderSearchPolicy
    backend: Backend

    long: bool
    verbose: bool

    max_results: Optional[int] = None
