"""Dispatch from project type to enrichment strategy."""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from .builders import (
    BaselineBuilder,
    BazelBuilder,
    GodotBuilder,
    InfoBuilder,
    UnityBuilder,
    UnrealBuilder,
)
from .classifier import classify, normalize_dir
from .emit import GuardedEmitter, InfoCallback, RequestToken
from .models import ProjectType
from .runner import ProcessRunner
from .scrapers import DEFAULT_README_NAMES

logger = logging.getLogger(__name__)


class BuilderRegistry:
    """Maps project types to the builders that describe them."""

    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or ProcessRunner()
        self.builders: Dict[ProjectType, InfoBuilder] = {}

    def register(self, project_type: ProjectType, builder: InfoBuilder):
        """Register ``builder`` for ``project_type``, replacing any previous one."""
        self.builders[ProjectType(project_type)] = builder

    def build_info(
        self,
        directory: Union[str, Path],
        callback: InfoCallback,
        token: Optional[RequestToken] = None,
    ) -> bool:
        """Classify ``directory`` and start describing it.

        Returns False, without calling ``callback``, when the directory is
        not a project or no builder handles its type.
        """
        directory = normalize_dir(directory)
        project_type = classify(directory)
        if project_type is None:
            return False

        builder = self.builders.get(project_type)
        if builder is None:
            logger.debug(f"No builder registered for {project_type.value} ({directory})")
            return False

        builder.enrich(directory, GuardedEmitter(callback, token))
        return True


def default_registry(
    runner: Optional[ProcessRunner] = None,
    readme_names: Sequence[str] = DEFAULT_README_NAMES,
    buildozer_command: str = "buildozer",
) -> BuilderRegistry:
    """Create a registry with a builder for every known project type."""
    registry = BuilderRegistry(runner)
    registry.register(
        ProjectType.BAZEL,
        BazelBuilder(registry.runner, command=buildozer_command, readme_names=readme_names),
    )
    registry.register(ProjectType.UNITY, UnityBuilder(readme_names))
    registry.register(ProjectType.GODOT, GodotBuilder(readme_names))
    registry.register(ProjectType.UNREAL, UnrealBuilder(readme_names))
    for project_type in (
        ProjectType.CMAKE,
        ProjectType.RUST,
        ProjectType.ZIG,
        ProjectType.NEOVIM_PLUGIN,
        ProjectType.GIT,
    ):
        registry.register(project_type, BaselineBuilder(project_type, readme_names))
    return registry


_registry: Optional[BuilderRegistry] = None


def get_registry() -> BuilderRegistry:
    """Return the process wide default registry."""
    global _registry
    if _registry is None:
        _registry = default_registry()
    return _registry


def register_builder(project_type: ProjectType, builder: InfoBuilder):
    """Register a builder on the default registry."""
    get_registry().register(project_type, builder)


def build_info(
    directory: Union[str, Path],
    callback: InfoCallback,
    token: Optional[RequestToken] = None,
) -> bool:
    """Describe ``directory`` using the default registry."""
    return get_registry().build_info(directory, callback, token)
