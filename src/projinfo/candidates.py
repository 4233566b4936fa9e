"""Candidate directories for the project picker."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import PurePath
from typing import IO, Iterable, Iterator, List, Optional, Sequence

from .classifier import classify
from .models import ProjectType, icon_for

logger = logging.getLogger(__name__)


class ExcludeRegistry:
    """Append-only set of path prefixes the picker skips."""

    def __init__(self, prefixes: Iterable[str] = ()):
        self._prefixes: List[str] = []
        for prefix in prefixes:
            self.add_exclude_dir(prefix)

    def add_exclude_dir(self, prefix: str):
        if prefix and prefix not in self._prefixes:
            self._prefixes.append(prefix)

    def get_exclude_dirs(self) -> List[str]:
        return list(self._prefixes)

    def is_excluded(self, path: str) -> bool:
        """Plain string prefix test against every registered prefix."""
        return any(path.startswith(prefix) for prefix in self._prefixes)


@dataclass(frozen=True)
class PickerEntry:
    """A directory the picker can offer."""

    value: str
    project_type: ProjectType
    display: str


def make_entry(directory: str, excludes: Optional[ExcludeRegistry] = None) -> Optional[PickerEntry]:
    """Turn a candidate path into a picker entry, or None if it should be hidden."""
    if excludes is not None and excludes.is_excluded(directory):
        return None

    project_type = classify(directory)
    if project_type is None:
        return None

    normalized = PurePath(directory).as_posix().replace("\\", "/")
    return PickerEntry(
        value=directory,
        project_type=project_type,
        display=f"{icon_for(project_type)}  {normalized}",
    )


def read_candidates(stream: IO[str]) -> Iterator[str]:
    """Yield non-empty lines of ``stream`` as candidate paths."""
    for line in stream:
        line = line.strip()
        if line:
            yield line


def filter_entries(candidates: Iterable[str], excludes: Optional[ExcludeRegistry] = None) -> Iterator[PickerEntry]:
    """Yield picker entries for the candidates that are projects."""
    for candidate in candidates:
        entry = make_entry(candidate, excludes)
        if entry is not None:
            yield entry


class CandidateSource:
    """Directory candidates from an external ranking tool such as zoxide."""

    def __init__(self, command: Sequence[str]):
        self.command = list(command)

    def query(self, prompt: str = "", cwd: Optional[str] = None) -> List[str]:
        """Return candidate directories matching ``prompt``, best first."""
        cmd = [*self.command, prompt] if prompt else list(self.command)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                cwd=cwd,
            )
        except OSError as e:
            logger.warning(f"Cannot run {cmd[0]}: {e}")
            return []

        if result.returncode != 0:
            logger.debug(f"{cmd[0]} exited with status {result.returncode}")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]
