# Single-directory readers for fileenum.
# A reader lists exactly one directory and turns each raw entry into a
# FileInfo. Two variants exist; they differ only in how per-entry metadata
# is obtained and which native record they store.
#
# Readers never raise on I/O failure: an unreadable directory simply ends.

from __future__ import annotations

import logging
import os
import stat
from abc import ABC, abstractmethod
from collections import deque
from pathlib import Path
from typing import Deque, Iterator, Optional, Tuple, Type, Union

from fileenum.models import Backend, FileInfo, MetadataKind, Win32FindData

logger = logging.getLogger(__name__)

ReadResult = Tuple[FileInfo, Path]

# readdir() and FindFirstFile() both report these before real entries.
_DOT_ENTRIES = (".", "..")

# IsReparseTagNameSurrogate() in the Windows SDK.
_NAME_SURROGATE_BIT = 0x20000000


class DirectoryReader(ABC):
    """Lazily opened listing of one directory.

    Nothing happens at construction. The first read() opens the directory,
    and the handle is released once, either on exhaustion or on close().
    """

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = Path(path)
        self._iterator: Optional[Iterator[os.DirEntry[str]]] = None
        self._pending: Deque[ReadResult] = deque()
        self._opened = False
        self._closed = False

    def __enter__(self) -> "DirectoryReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[ReadResult]:
        while True:
            item = self.read()
            if item is None:
                return
            yield item

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self) -> Optional[ReadResult]:
        # Pull the next entry, or None at end of directory.
        if self._closed:
            return None
        if not self._opened:
            self._open()
            if self._closed:
                return None

        if self._pending:
            return self._pending.popleft()

        iterator = self._iterator
        if iterator is None:
            return None
        while True:
            try:
                entry = next(iterator)
            except StopIteration:
                self.close()
                return None
            except OSError as exc:
                logger.debug("Listing of %s ended early: %s", self.path, exc)
                self.close()
                return None

            try:
                st = self._stat_entry(entry)
            except OSError as exc:
                # Deleted or made inaccessible after it was listed.
                logger.debug("Skipping %s: %s", entry.path, exc)
                continue

            return self._build_info(entry.name, st), Path(entry.path)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pending.clear()
        if self._iterator is not None:
            self._iterator.close()
            self._iterator = None

    def _open(self) -> None:
        self._opened = True
        try:
            self._iterator = os.scandir(self.path)
        except OSError as exc:
            logger.debug("Cannot read directory %s: %s", self.path, exc)
            self._closed = True
            return

        for name in _DOT_ENTRIES:
            dot_path = self.path / name
            try:
                st = os.stat(dot_path)
            except OSError as exc:
                logger.debug("Cannot stat %s: %s", dot_path, exc)
                continue
            self._pending.append((self._build_info(name, st), dot_path))

    @abstractmethod
    def _stat_entry(self, entry: os.DirEntry[str]) -> os.stat_result:
        ...

    @abstractmethod
    def _build_info(self, name: str, st: os.stat_result) -> FileInfo:
        ...


class PosixStatReader(DirectoryReader):
    # open/read/stat iteration: the listing yields names only and every
    # entry costs one lstat() call.

    def _stat_entry(self, entry: os.DirEntry[str]) -> os.stat_result:
        return os.lstat(entry.path)

    def _build_info(self, name: str, st: os.stat_result) -> FileInfo:
        return FileInfo(
            name=name,
            is_directory=stat.S_ISDIR(st.st_mode),
            size=st.st_size,
            is_symlink=stat.S_ISLNK(st.st_mode),
            kind=MetadataKind.posix_stat,
            raw_metadata=st,
        )


class WindowsFindReader(DirectoryReader):
    # Find-handle iteration: type, size and times come with the listing
    # itself (DirEntry.stat() is served from the find data on Windows).

    def _stat_entry(self, entry: os.DirEntry[str]) -> os.stat_result:
        return entry.stat(follow_symlinks=False)

    def _build_info(self, name: str, st: os.stat_result) -> FileInfo:
        data = _find_data_from_stat(st)
        is_dir = bool(data.file_attributes & stat.FILE_ATTRIBUTE_DIRECTORY)
        return FileInfo(
            name=name,
            is_directory=is_dir,
            size=data.file_size,
            is_symlink=_is_name_surrogate(data),
            kind=MetadataKind.win32_find_data,
            raw_metadata=data,
        )


def _find_data_from_stat(st: os.stat_result) -> Win32FindData:
    # Off Windows there are no attribute bits; derive them from the mode.
    attributes = getattr(st, "st_file_attributes", None)
    if attributes is None:
        if stat.S_ISDIR(st.st_mode):
            attributes = stat.FILE_ATTRIBUTE_DIRECTORY
        elif stat.S_ISLNK(st.st_mode):
            attributes = stat.FILE_ATTRIBUTE_REPARSE_POINT
        else:
            attributes = stat.FILE_ATTRIBUTE_NORMAL

    # Find data reports no size for directories.
    size = 0 if attributes & stat.FILE_ATTRIBUTE_DIRECTORY else st.st_size

    return Win32FindData(
        file_attributes=attributes,
        file_size=size,
        creation_time=getattr(st, "st_birthtime", st.st_ctime),
        last_access_time=st.st_atime,
        last_write_time=st.st_mtime,
        reparse_tag=getattr(st, "st_reparse_tag", 0),
    )


def _is_name_surrogate(data: Win32FindData) -> bool:
    # Symlinks and junctions are reparse points whose tag has the
    # name-surrogate bit. Cloud placeholders and dedup files do not.
    if not data.file_attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT:
        return False
    if data.reparse_tag:
        return bool(data.reparse_tag & _NAME_SURROGATE_BIT)
    return True


def default_reader_class() -> Type[DirectoryReader]:
    # The only place where the platform decides the backend.
    if os.name == "nt":
        return WindowsFindReader
    return PosixStatReader


def reader_class_for(backend: Backend) -> Type[DirectoryReader]:
    if backend is Backend.posix:
        return PosixStatReader
    if backend is Backend.windows:
        return WindowsFindReader
    return default_reader_class()
