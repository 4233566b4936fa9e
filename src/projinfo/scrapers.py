"""Text extraction utilities for project metadata files."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_README_NAMES = ("README.md",)


class TextScraper:
    """Pulls loosely structured values out of config and readme files."""

    @staticmethod
    def extract_values(path: PathLike, keys: Iterable[str], delimiter: str) -> Dict[str, str]:
        """Return the first value seen for each requested key.

        Each line is split at the first ``delimiter``; key and value are
        trimmed. Reading stops as soon as every key has a value. A file that
        cannot be opened yields an empty mapping.
        """
        wanted = set(keys)
        values: Dict[str, str] = {}
        if not wanted:
            return values

        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    key, sep, value = line.partition(delimiter)
                    if not sep:
                        continue
                    key = key.strip()
                    if key in wanted and key not in values:
                        values[key] = value.strip()
                        if len(values) == len(wanted):
                            break
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            return {}

        return values

    @staticmethod
    def extract_colon_values(path: PathLike, keys: Iterable[str]) -> Dict[str, str]:
        """Extract ``key: value`` pairs (Unity YAML-ish assets)."""
        return TextScraper.extract_values(path, keys, ":")

    @staticmethod
    def extract_equals_values(path: PathLike, keys: Iterable[str]) -> Dict[str, str]:
        """Extract ``key=value`` pairs (INI and Godot config files)."""
        return TextScraper.extract_values(path, keys, "=")

    @staticmethod
    def extract_readme_description(
        directory: PathLike,
        readme_names: Sequence[str] = DEFAULT_README_NAMES,
    ) -> Tuple[str, ...]:
        """Return the paragraph lines under the first heading of the readme."""
        readme = TextScraper._find_readme(Path(directory), readme_names)
        if readme is None:
            return ()

        lines: List[str] = []
        past_title = False
        try:
            with open(readme, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    line = line.strip()
                    if line.startswith("#"):
                        if past_title:
                            break
                        past_title = True
                    elif past_title:
                        lines.append(line)
        except OSError as e:
            logger.debug(f"Cannot read {readme}: {e}")
            return ()

        # Blank lines only matter between paragraphs
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        return tuple(lines)

    @staticmethod
    def _find_readme(directory: Path, readme_names: Sequence[str]) -> Optional[Path]:
        for name in readme_names:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None
