import errno
import os

import pytest

from shared import path_utils
from shared.path_utils import copy_overwrite, ensure_directory, get_extension, move_overwrite, normalize_path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.TXT", ".TXT"),
        ("archive.tar.gz", ".gz"),
        ("README", ""),
        (".profile", ".profile"),
        ("trailing.", "."),
        ("dir.d/file", ""),
    ],
)
def test_get_extension(name, expected):
    assert get_extension(name) == expected


def test_ensure_directory_creates_parents(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_directory(str(target))
    ensure_directory(str(target))
    assert target.is_dir()


def test_normalize_path_expands_user_and_strips():
    assert normalize_path("  ~/x/../y  ") == os.path.join(os.path.expanduser("~"), "y")


def test_copy_overwrite_replaces_destination(tmp_path):
    src = tmp_path / "src.txt"
    dst = tmp_path / "dst.txt"
    src.write_text("new", encoding="utf-8")
    dst.write_text("old", encoding="utf-8")

    copy_overwrite(src, dst)

    assert dst.read_text(encoding="utf-8") == "new"
    assert src.exists()


def test_move_overwrite_replaces_destination(tmp_path):
    src = tmp_path / "src.txt"
    dst = tmp_path / "dst.txt"
    src.write_text("new", encoding="utf-8")
    dst.write_text("old", encoding="utf-8")

    move_overwrite(src, dst)

    assert dst.read_text(encoding="utf-8") == "new"
    assert not src.exists()


def test_move_across_devices_copies_then_removes(tmp_path, monkeypatch):
    src = tmp_path / "src.txt"
    dst = tmp_path / "dst.txt"
    src.write_text("data", encoding="utf-8")

    def cross_device(a, b):
        raise OSError(errno.EXDEV, "Invalid cross-device link")

    monkeypatch.setattr(path_utils.os, "replace", cross_device)

    move_overwrite(src, dst)

    assert dst.read_text(encoding="utf-8") == "data"
    assert not src.exists()
