"""Project type classification by marker files."""

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .models import ProjectType
from .markers import dir_exists, exists, file_exists

logger = logging.getLogger(__name__)

NEOVIM_PLUGIN_SUFFIX = ".nvim"


def _has_file(*parts: str) -> Callable[[str], bool]:
    return lambda directory: file_exists(os.path.join(directory, *parts))


def _is_unreal(directory: str) -> bool:
    name = os.path.basename(directory)
    return file_exists(os.path.join(directory, f"{name}.uproject"))


def _is_neovim_plugin(directory: str) -> bool:
    if directory.endswith(NEOVIM_PLUGIN_SUFFIX):
        return True
    return file_exists(os.path.join(directory, "vim.toml")) and dir_exists(
        os.path.join(directory, "lua")
    )


def _is_git(directory: str) -> bool:
    # .git is a file in worktrees and submodules
    return exists(os.path.join(directory, ".git"))


# Order matters: a Unity project is usually also a git checkout, etc.
RULES: List[Tuple[Callable[[str], bool], ProjectType]] = [
    (_has_file("MODULE.bazel"), ProjectType.BAZEL),
    (_has_file("CMakeLists.txt"), ProjectType.CMAKE),
    (_has_file("Cargo.toml"), ProjectType.RUST),
    (_has_file("build.zig"), ProjectType.ZIG),
    (_has_file("project.godot"), ProjectType.GODOT),
    (_has_file("ProjectSettings", "ProjectVersion.txt"), ProjectType.UNITY),
    (_is_unreal, ProjectType.UNREAL),
    (_is_neovim_plugin, ProjectType.NEOVIM_PLUGIN),
    (_is_git, ProjectType.GIT),
]


def normalize_dir(directory: Union[str, Path]) -> str:
    """Return ``directory`` as an absolute path without a trailing separator."""
    return os.path.abspath(os.fspath(directory))


def classify(directory: Union[str, Path]) -> Optional[ProjectType]:
    """Return the type of the first rule that matches ``directory``."""
    directory = normalize_dir(directory)
    for matches, project_type in RULES:
        if matches(directory):
            logger.debug(f"Classified {directory} as {project_type.value}")
            return project_type
    return None
