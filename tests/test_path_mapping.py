"""Tests for archive entry naming and extraction path safety."""

from __future__ import annotations

import os
import sys
from pathlib import Path, PurePosixPath

import pytest

from ziparchiver import (
    ArchiverError,
    NonUtf8PathError,
    UnsafeEntryNameError,
    archive_entry_name,
    enclosed_name,
    require_enclosed_name,
    resolve_output_path,
    single_file_entry_name,
)


posix_utf8_only = pytest.mark.skipif(
    os.name != "posix" or sys.getfilesystemencoding().lower() not in ("utf-8", "utf8"),
    reason="needs a POSIX filesystem with UTF-8 path decoding",
)


def test_root_maps_to_empty_name(tmp_path: Path) -> None:
    assert archive_entry_name(tmp_path, tmp_path) == ""


def test_nested_path_uses_forward_slashes(tmp_path: Path) -> None:
    assert archive_entry_name(tmp_path, tmp_path / "sub" / "b.txt") == "sub/b.txt"
    assert archive_entry_name(tmp_path, tmp_path / "sub") == "sub"


def test_path_outside_root_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ArchiverError):
        archive_entry_name(tmp_path / "a", tmp_path / "b" / "c.txt")


@posix_utf8_only
def test_undecodable_segment_raises_non_utf8_error(tmp_path: Path) -> None:
    bad = tmp_path / os.fsdecode(b"bad\xff.txt")

    with pytest.raises(NonUtf8PathError) as info:
        archive_entry_name(tmp_path, bad)

    assert info.value.path == bad


@posix_utf8_only
def test_single_file_name_rejects_undecodable_path() -> None:
    with pytest.raises(NonUtf8PathError):
        single_file_entry_name(Path(os.fsdecode(b"dir/\xfe")))


def test_single_file_name_keeps_the_path_as_given() -> None:
    path = Path("data") / "a.txt"
    assert single_file_entry_name(path) == str(path)


@pytest.mark.parametrize(
    "name",
    [
        "",
        "../../etc/passwd",
        "..",
        "a/../../b",
        "/etc/passwd",
        "\\windows\\system32",
        "C:\\evil.txt",
        "C:evil.txt",
        "\\\\server\\share\\x",
        "a\x00b",
        "./",
    ],
)
def test_unsafe_names_are_not_enclosed(name: str) -> None:
    assert enclosed_name(name) is None


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.txt", "a.txt"),
        ("sub/", "sub"),
        ("sub/b.txt", "sub/b.txt"),
        ("./sub/./b.txt", "sub/b.txt"),
        ("a/../b.txt", "b.txt"),
        ("sub\\b.txt", "sub/b.txt"),
        ("sub//b.txt", "sub/b.txt"),
    ],
)
def test_safe_names_resolve_inside_root(name: str, expected: str) -> None:
    assert enclosed_name(name) == PurePosixPath(expected)


def test_require_enclosed_name_raises_for_escape() -> None:
    with pytest.raises(UnsafeEntryNameError) as info:
        require_enclosed_name("../outside.txt")

    assert info.value.name == "../outside.txt"


def test_resolve_output_path_with_and_without_output_dir(tmp_path: Path) -> None:
    rel = PurePosixPath("sub/b.txt")

    assert resolve_output_path(None, rel) == Path("sub") / "b.txt"
    assert resolve_output_path(tmp_path, rel) == tmp_path / "sub" / "b.txt"
