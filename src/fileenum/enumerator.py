# Breadth-first filesystem enumeration for fileenum.
# This module owns traversal order, type filtering and pattern matching.
# Reading a directory is delegated to a DirectoryReader so that nothing
# here depends on the platform.
#
# Enumeration is blocking. Do not drive it from latency-sensitive code.

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, Union

from fileenum.models import EMPTY_FILE_INFO, FileInfo, FileType, FolderSearchPolicy
from fileenum.pattern import compile_pattern
from fileenum.reader import DirectoryReader, default_reader_class

PathArg = Union[str, os.PathLike]
ReaderFactory = Callable[[Path], DirectoryReader]


def append_path(base: PathArg, component: PathArg) -> Path:
    # Join one component onto a base path; an empty base yields the component.
    if not os.fspath(base):
        return Path(component)
    return Path(base) / component


class FileEnumerator:
    """Enumerates the entries below a root directory.

    Results are returned one at a time by next(), which yields None once
    enumeration is finished. With `recursive`, every entry of a directory is
    returned before any entry of its subdirectories. Order inside a single
    directory is whatever the filesystem reports.

    Example:

        enum = FileEnumerator(my_dir, False, FileType.FILES, "*.txt")
        for path in enum:
            ...
    """

    def __init__(
        self,
        root_path: PathArg,
        recursive: bool,
        file_type: FileType,
        pattern: Optional[str] = None,
        folder_search_policy: FolderSearchPolicy = FolderSearchPolicy.MATCH_ONLY,
        reader_factory: Optional[ReaderFactory] = None,
    ) -> None:
        self._root_path = Path(root_path)
        self._recursive = recursive
        self._file_type = FileType(file_type)
        self._pattern = compile_pattern(pattern)
        self._folder_search_policy = folder_search_policy
        self._reader_factory: ReaderFactory = reader_factory or default_reader_class()

        # Directories still to be read. Popped from the end.
        self._pending_paths: List[Path] = [self._root_path]
        self._root_read = False

        self._current_dir = self._root_path
        self._current_pattern: Optional[re.Pattern[str]] = self._pattern
        self._entries: List[FileInfo] = []
        self._cursor = 0

        self._info: FileInfo = EMPTY_FILE_INFO

    @staticmethod
    def append(base: PathArg, component: PathArg) -> Path:
        return append_path(base, component)

    def __iter__(self) -> "FileEnumerator":
        return self

    def __next__(self) -> Path:
        path = self.next()
        if path is None:
            raise StopIteration
        return path

    def __enter__(self) -> "FileEnumerator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def next(self) -> Optional[Path]:
        # Returns the next matching path, or None when there are no more.
        # Returned paths are "<root_path>/<...>/<name>", so an absolute root
        # gives absolute results.
        while True:
            if self._cursor >= len(self._entries):
                if not self._pending_paths:
                    self._finish()
                    return None
                self._read_next_directory()
                continue

            info = self._entries[self._cursor]
            self._cursor += 1

            if self._should_skip(info):
                continue

            pattern_matched = self._is_pattern_matched(info.name)

            if self._recursive and info.is_directory and not info.is_symlink and info.name != "..":
                if self._folder_search_policy is FolderSearchPolicy.ALL or pattern_matched:
                    self._pending_paths.append(append_path(self._current_dir, info.name))

            if pattern_matched and self._is_type_matched(info.is_directory):
                self._info = info
                return append_path(self._current_dir, info.name)

    def get_info(self) -> FileInfo:
        # Info for the path most recently returned by next().
        # EMPTY_FILE_INFO before the first result and after exhaustion.
        return self._info

    def close(self) -> None:
        # Abandon the enumeration; subsequent next() calls return None.
        self._pending_paths.clear()
        self._finish()

    def _finish(self) -> None:
        self._entries = []
        self._cursor = 0
        self._info = EMPTY_FILE_INFO

    def _read_next_directory(self) -> None:
        path = self._pending_paths.pop()

        # The whole directory is read and its handle released here, so an
        # abandoned enumerator never holds an open directory.
        with self._reader_factory(path) as reader:
            entries = [info for info, _ in reader]

        self._current_dir = path
        self._entries = entries
        self._cursor = 0

        # MATCH_ONLY applies the pattern to the root's entries only. Folders
        # entered because their name matched are listed in full.
        if self._root_read and self._folder_search_policy is FolderSearchPolicy.MATCH_ONLY:
            self._current_pattern = None
        else:
            self._current_pattern = self._pattern
        self._root_read = True

    def _should_skip(self, info: FileInfo) -> bool:
        if info.name == ".":
            return True
        if info.name == "..":
            return not (self._file_type & FileType.INCLUDE_DOT_DOT)
        if info.is_symlink:
            return not (self._file_type & FileType.SHOW_SYM_LINKS)
        return False

    def _is_type_matched(self, is_dir: bool) -> bool:
        if is_dir:
            return bool(self._file_type & FileType.DIRECTORIES)
        return bool(self._file_type & FileType.FILES)

    def _is_pattern_matched(self, name: str) -> bool:
        return self._current_pattern is None or self._current_pattern.fullmatch(name) is not None


def iter_entries(
    root_path: PathArg,
    recursive: bool,
    file_type: FileType,
    pattern: Optional[str] = None,
    folder_search_policy: FolderSearchPolicy = FolderSearchPolicy.MATCH_ONLY,
    reader_factory: Optional[ReaderFactory] = None,
) -> Iterator[Tuple[Path, FileInfo]]:
    # Yield (path, info) pairs for every result of a FileEnumerator.
    enumerator = FileEnumerator(
        root_path,
        recursive,
        file_type,
        pattern=pattern,
        folder_search_policy=folder_search_policy,
        reader_factory=reader_factory,
    )
    with enumerator:
        for path in enumerator:
            yield path, enumerator.get_info()
