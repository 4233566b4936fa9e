"""Data models for projinfo."""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ProjectType(str, Enum):
    """Kinds of project a directory can be classified as."""

    BAZEL = "bazel"
    CMAKE = "cmake"
    RUST = "rust"
    ZIG = "zig"
    UNITY = "unity"
    UNREAL = "unreal"
    GODOT = "godot"
    NEOVIM_PLUGIN = "neovim"
    GIT = "git"


# Nerd Font glyphs
PROJECT_ICONS = {
    ProjectType.BAZEL: "\ue63a",
    ProjectType.CMAKE: "\U000f0537",
    ProjectType.RUST: "\uf323",
    ProjectType.ZIG: "\ue6a9",
    ProjectType.UNITY: "\U000f06af",
    ProjectType.UNREAL: "\U000f09b1",
    ProjectType.GODOT: "\ue65f",
    ProjectType.NEOVIM_PLUGIN: "\ue6ae",
    ProjectType.GIT: "\ue702",
}


def icon_for(project_type: Optional[ProjectType]) -> str:
    """Return the glyph for a project type, or an empty string."""
    if project_type is None:
        return ""
    return PROJECT_ICONS.get(project_type, "")


@dataclass(frozen=True)
class BazelInfo:
    """Module metadata reported by buildozer."""

    module_name: Optional[str] = None
    module_version: Optional[str] = None


@dataclass(frozen=True)
class UnityInfo:
    """Editor and player settings of a Unity project."""

    editor_version: Optional[str] = None
    company_name: Optional[str] = None
    product_name: Optional[str] = None


@dataclass(frozen=True)
class GodotInfo:
    """Editor metadata of a Godot project."""

    executable_path: Optional[str] = None


@dataclass(frozen=True)
class UnrealInfo:
    """Game config of an Unreal project."""

    project_name: Optional[str] = None
    engine_association: Optional[str] = None


@dataclass(frozen=True)
class ProjectInfo:
    """Snapshot of everything known about a project directory.

    Snapshots are immutable. Enrichment stages produce new snapshots with
    :func:`merge` so a field seen once is never dropped later.
    """

    dir: str
    icon: str = ""
    name: Optional[str] = None
    version: Optional[str] = None
    description: Tuple[str, ...] = field(default_factory=tuple)
    bazel: Optional[BazelInfo] = None
    unity: Optional[UnityInfo] = None
    godot: Optional[GodotInfo] = None
    unreal: Optional[UnrealInfo] = None

    def merge(self, **changes) -> "ProjectInfo":
        """Return a new snapshot with ``changes`` merged on top of this one."""
        return merge(self, ProjectInfo(dir=self.dir, **changes))

    def details(self) -> Optional[object]:
        """Return the type-specific sub-record, if any."""
        for sub in (self.bazel, self.unity, self.godot, self.unreal):
            if sub is not None:
                return sub
        return None


def _is_empty(value) -> bool:
    return value is None or value == "" or value == ()


def merge(base, update):
    """Merge two snapshots of the same dataclass type.

    Non-empty values from ``update`` win; nested sub-records are merged
    field by field. ``dir`` always comes from ``base``.
    """
    if base is None:
        return update
    if update is None:
        return base

    changes = {}
    for f in dataclasses.fields(base):
        if f.name == "dir":
            continue
        new = getattr(update, f.name)
        if _is_empty(new):
            continue
        old = getattr(base, f.name)
        if dataclasses.is_dataclass(new) and old is not None:
            new = merge(old, new)
        changes[f.name] = new
    return dataclasses.replace(base, **changes)
