"""Unit tests for filesystem helpers in ``ingot.fs_utils``."""

from pathlib import Path

import pytest

import ingot.fs_utils as fs_utils


def test_create_safe_path_denies_root(tmp_path: Path):
    with pytest.raises(PermissionError):
        fs_utils.create_safe_path(tmp_path, tmp_path)


def test_create_safe_path_denies_outside(tmp_path: Path):
    inside = tmp_path / "work"
    inside.mkdir()
    with pytest.raises(PermissionError):
        fs_utils.create_safe_path(tmp_path / "elsewhere", inside)
    with pytest.raises(PermissionError):
        fs_utils.create_safe_path(inside / ".." / "elsewhere", inside)


def test_create_safe_path_and_safe_rmtree(tmp_path: Path):
    target = tmp_path / "vonk-import.R4" / "nested"
    target.mkdir(parents=True)
    (target / "f.txt").write_text("1", encoding="utf-8")
    vp = fs_utils.create_safe_path(target.parent, tmp_path)
    assert isinstance(vp, Path)
    fs_utils.safe_rmtree(vp, tmp_path)
    assert not target.parent.exists()


def test_safe_rmtree_missing_is_noop(tmp_path: Path):
    fs_utils.safe_rmtree(tmp_path / "missing", tmp_path)
    assert tmp_path.exists()
