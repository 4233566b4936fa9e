"""
Projinfo - project classification and metadata for directories.

Recognizes build system, engine and plugin projects by their marker files
and describes them incrementally as local and external sources report in.
"""

__version__ = "0.1.0"

from .classifier import classify
from .models import ProjectInfo, ProjectType
from .registry import BuilderRegistry, build_info, default_registry, register_builder

__all__ = [
    "BuilderRegistry",
    "ProjectInfo",
    "ProjectType",
    "build_info",
    "classify",
    "default_registry",
    "register_builder",
    "__version__",
]
