"""Marker file checks used by the classifier."""

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def file_exists(path: PathLike) -> bool:
    """Check that ``path`` can be opened for reading."""
    try:
        # stat() is unreliable for special files on some mounts
        with open(path, "rb"):
            return True
    except OSError:
        return False


def dir_exists(path: PathLike) -> bool:
    """Check that ``path`` is a directory."""
    return os.path.isdir(path)


def exists(path: PathLike) -> bool:
    """Check for either a readable file or a directory at ``path``."""
    return file_exists(path) or dir_exists(path)
