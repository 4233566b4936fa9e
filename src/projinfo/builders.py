"""Per project type enrichment strategies."""

import json
import logging
import os
from typing import Callable, Optional, Sequence

from .models import (
    BazelInfo,
    GodotInfo,
    ProjectInfo,
    ProjectType,
    UnityInfo,
    UnrealInfo,
    icon_for,
)
from .runner import ProcessRunner
from .scrapers import DEFAULT_README_NAMES, TextScraper

logger = logging.getLogger(__name__)

Emit = Callable[[ProjectInfo], object]


class InfoBuilder:
    """Turns a classified directory into one or more ProjectInfo snapshots.

    Subclasses override :meth:`enrich`. The first snapshot must be emitted
    synchronously so the consumer always sees something.
    """

    def __init__(
        self,
        project_type: ProjectType,
        readme_names: Sequence[str] = DEFAULT_README_NAMES,
    ):
        self.project_type = project_type
        self.readme_names = tuple(readme_names)
        self.scraper = TextScraper()

    def baseline(self, directory: str) -> ProjectInfo:
        """Build the snapshot every project type starts from."""
        return ProjectInfo(
            dir=directory,
            icon=icon_for(self.project_type),
            name=os.path.basename(directory),
            description=self.scraper.extract_readme_description(directory, self.readme_names),
        )

    def enrich(self, directory: str, emit: Emit):
        """Emit the baseline snapshot."""
        emit(self.baseline(directory))


class BaselineBuilder(InfoBuilder):
    """Projects with nothing to learn beyond the readme."""


class BazelBuilder(InfoBuilder):
    """Bazel modules, refined with the module name and version from buildozer."""

    def __init__(
        self,
        runner: ProcessRunner,
        command: str = "buildozer",
        readme_names: Sequence[str] = DEFAULT_README_NAMES,
    ):
        super().__init__(ProjectType.BAZEL, readme_names)
        self.runner = runner
        self.command = command

    def enrich(self, directory: str, emit: Emit):
        info = self.baseline(directory)
        emit(info)

        def on_complete(stdout: str):
            refined = self.parse_module(info, stdout)
            if refined is not None:
                emit(refined)

        self.runner.run(
            self.command,
            ["print name version", "//MODULE.bazel:%module"],
            cwd=directory,
            on_complete=on_complete,
        )

    @staticmethod
    def parse_module(info: ProjectInfo, stdout: str) -> Optional[ProjectInfo]:
        """Merge ``name version`` output into ``info``, or None if malformed."""
        tokens = stdout.split()
        if len(tokens) != 2:
            logger.debug(f"Unexpected buildozer output for {info.dir}: {stdout!r}")
            return None

        name, version = tokens
        return info.merge(
            name=name,
            version=version,
            bazel=BazelInfo(module_name=name, module_version=version),
        )


def _non_empty(value: Optional[str]) -> Optional[str]:
    return value or None


class UnityBuilder(InfoBuilder):
    """Unity projects, read from ProjectSettings."""

    def __init__(self, readme_names: Sequence[str] = DEFAULT_README_NAMES):
        super().__init__(ProjectType.UNITY, readme_names)

    def enrich(self, directory: str, emit: Emit):
        settings_dir = os.path.join(directory, "ProjectSettings")
        project_version = self.scraper.extract_colon_values(
            os.path.join(settings_dir, "ProjectVersion.txt"),
            ["m_EditorVersion"],
        )
        project_settings = self.scraper.extract_colon_values(
            os.path.join(settings_dir, "ProjectSettings.asset"),
            ["companyName", "productName"],
        )

        product_name = _non_empty(project_settings.get("productName"))
        info = self.baseline(directory).merge(
            name=product_name,
            unity=UnityInfo(
                editor_version=_non_empty(project_version.get("m_EditorVersion")),
                company_name=_non_empty(project_settings.get("companyName")),
                product_name=product_name,
            ),
        )
        emit(info)


def _unquote(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


class GodotBuilder(InfoBuilder):
    """Godot projects, read from project.godot and the editor metadata."""

    def __init__(self, readme_names: Sequence[str] = DEFAULT_README_NAMES):
        super().__init__(ProjectType.GODOT, readme_names)

    def enrich(self, directory: str, emit: Emit):
        project_config = self.scraper.extract_equals_values(
            os.path.join(directory, "project.godot"),
            ["config/name"],
        )
        project_metadata = self.scraper.extract_equals_values(
            os.path.join(directory, ".godot", "editor", "project_metadata.cfg"),
            ["executable_path"],
        )

        info = self.baseline(directory).merge(
            name=_non_empty(_unquote(project_config.get("config/name"))),
            godot=GodotInfo(
                executable_path=_non_empty(_unquote(project_metadata.get("executable_path")))
            ),
        )
        emit(info)


class UnrealBuilder(InfoBuilder):
    """Unreal projects, read from DefaultGame.ini and the .uproject file."""

    def __init__(self, readme_names: Sequence[str] = DEFAULT_README_NAMES):
        super().__init__(ProjectType.UNREAL, readme_names)

    def enrich(self, directory: str, emit: Emit):
        default_game = self.scraper.extract_equals_values(
            os.path.join(directory, "Config", "DefaultGame.ini"),
            ["ProjectName"],
        )

        project_name = _non_empty(default_game.get("ProjectName"))
        info = self.baseline(directory).merge(
            name=project_name,
            unreal=UnrealInfo(
                project_name=project_name,
                engine_association=self._engine_association(directory),
            ),
        )
        emit(info)

    @staticmethod
    def _engine_association(directory: str) -> Optional[str]:
        uproject = os.path.join(directory, f"{os.path.basename(directory)}.uproject")
        try:
            with open(uproject, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot read {uproject}: {e}")
            return None

        if not isinstance(data, dict):
            return None
        association = data.get("EngineAssociation")
        return str(association) if association else None
