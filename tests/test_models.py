# Unit tests for fileenum.models.
# These tests validate the FileInfo value type and the flag values.

from __future__ import annotations

import dataclasses
import os

import pytest

from fileenum.models import (
    EMPTY_FILE_INFO,
    FileInfo,
    FileType,
    FolderSearchPolicy,
    MetadataKind,
    Win32FindData,
)


def test_file_type_bits_match_flag_layout() -> None:
    assert int(FileType.FILES) == 1
    assert int(FileType.DIRECTORIES) == 2
    assert int(FileType.INCLUDE_DOT_DOT) == 4
    assert int(FileType.SHOW_SYM_LINKS) == 16


def test_folder_search_policy_values() -> None:
    assert FolderSearchPolicy("match-only") is FolderSearchPolicy.MATCH_ONLY
    assert FolderSearchPolicy("all") is FolderSearchPolicy.ALL


def test_empty_file_info_sentinel() -> None:
    assert EMPTY_FILE_INFO.is_empty
    assert EMPTY_FILE_INFO.name == ""
    assert EMPTY_FILE_INFO.size == 0
    assert not EMPTY_FILE_INFO.is_directory
    assert EMPTY_FILE_INFO.kind is MetadataKind.none
    assert EMPTY_FILE_INFO == FileInfo()
    with pytest.raises(ValueError):
        EMPTY_FILE_INFO.stat()
    with pytest.raises(ValueError):
        EMPTY_FILE_INFO.find_data()


def test_file_info_is_immutable() -> None:
    info = FileInfo(name="a.txt", size=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        info.name = "b.txt"  # type: ignore[misc]


def test_file_info_exposes_stat_record(tmp_path) -> None:
    path = tmp_path / "a.txt"
    path.write_text("abc", encoding="utf-8")
    st = os.stat(path)

    info = FileInfo(name="a.txt", size=st.st_size, kind=MetadataKind.posix_stat, raw_metadata=st)

    assert info.stat() is st
    assert not info.is_empty


def test_file_info_exposes_find_data() -> None:
    data = Win32FindData(
        file_attributes=0x80,
        file_size=10,
        creation_time=1.0,
        last_access_time=2.0,
        last_write_time=3.0,
    )
    info = FileInfo(name="a.txt", size=10, kind=MetadataKind.win32_find_data, raw_metadata=data)

    assert info.find_data() is data
    assert info.find_data().reparse_tag == 0
    assert dataclasses.replace(info) == info
