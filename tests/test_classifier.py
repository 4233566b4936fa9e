"""Tests for marker file checks and project classification."""

import os
import tempfile
from pathlib import Path

import pytest

from projinfo.classifier import RULES, classify
from projinfo.models import ProjectType
from projinfo.markers import dir_exists, exists, file_exists


def touch(root: Path, *parts: str) -> Path:
    path = root.joinpath(*parts)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


MARKERS = [
    (("MODULE.bazel",), ProjectType.BAZEL),
    (("CMakeLists.txt",), ProjectType.CMAKE),
    (("Cargo.toml",), ProjectType.RUST),
    (("build.zig",), ProjectType.ZIG),
    (("project.godot",), ProjectType.GODOT),
    (("ProjectSettings", "ProjectVersion.txt"), ProjectType.UNITY),
]


def test_marker_checks():
    """Test file, directory and combined existence checks."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        file_path = touch(root, "a.txt")
        (root / "sub").mkdir()

        assert file_exists(file_path)
        assert not file_exists(root / "sub")
        assert not file_exists(root / "missing")
        assert dir_exists(root / "sub")
        assert not dir_exists(file_path)
        assert exists(file_path)
        assert exists(root / "sub")
        assert not exists(root / "missing")


@pytest.mark.parametrize("parts,expected", MARKERS)
def test_single_marker(parts, expected):
    """Test that each marker file maps to its project type."""
    with tempfile.TemporaryDirectory() as tmpdir:
        touch(Path(tmpdir), *parts)
        assert classify(tmpdir) == expected


def test_unreal_uses_directory_name():
    """Test that only a .uproject named after the directory counts."""
    with tempfile.TemporaryDirectory() as tmpdir:
        project = Path(tmpdir) / "Shooter"
        project.mkdir()
        touch(project, "Other.uproject")
        assert classify(project) is None

        touch(project, "Shooter.uproject")
        assert classify(project) == ProjectType.UNREAL


def test_neovim_plugin_by_suffix():
    """Test that a directory ending in .nvim is a plugin without markers."""
    with tempfile.TemporaryDirectory() as tmpdir:
        plugin = Path(tmpdir) / "telescope.nvim"
        plugin.mkdir()
        assert classify(plugin) == ProjectType.NEOVIM_PLUGIN


def test_neovim_plugin_by_layout():
    """Test that vim.toml needs a lua directory next to it."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        touch(root, "vim.toml")
        assert classify(root) is None

        (root / "lua").mkdir()
        assert classify(root) == ProjectType.NEOVIM_PLUGIN


def test_git_directory_and_file():
    """Test that .git may be a directory or a worktree file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        checkout = Path(tmpdir) / "checkout"
        (checkout / ".git").mkdir(parents=True)
        assert classify(checkout) == ProjectType.GIT

        worktree = Path(tmpdir) / "worktree"
        worktree.mkdir()
        touch(worktree, ".git")
        assert classify(worktree) == ProjectType.GIT


def test_priority_on_overlapping_markers():
    """Test that the higher priority rule wins when markers overlap."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / ".git").mkdir()
        touch(root, "MODULE.bazel")
        assert classify(root) == ProjectType.BAZEL

    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / ".git").mkdir()
        touch(root, "ProjectSettings", "ProjectVersion.txt")
        assert classify(root) == ProjectType.UNITY

    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        touch(root, "Cargo.toml")
        touch(root, "CMakeLists.txt")
        assert classify(root) == ProjectType.CMAKE


def test_rule_order():
    """Test the fixed rule order."""
    assert [project_type for _, project_type in RULES] == [
        ProjectType.BAZEL,
        ProjectType.CMAKE,
        ProjectType.RUST,
        ProjectType.ZIG,
        ProjectType.GODOT,
        ProjectType.UNITY,
        ProjectType.UNREAL,
        ProjectType.NEOVIM_PLUGIN,
        ProjectType.GIT,
    ]


def test_no_marker():
    """Test that an unrecognized directory has no type."""
    with tempfile.TemporaryDirectory() as tmpdir:
        touch(Path(tmpdir), "notes.txt")
        assert classify(tmpdir) is None


def test_relative_path(tmp_path, monkeypatch):
    """Test that relative paths are resolved against the working directory."""
    touch(tmp_path, "build.zig")
    monkeypatch.chdir(tmp_path)
    assert classify(".") == ProjectType.ZIG
    assert classify(os.curdir + os.sep) == ProjectType.ZIG
