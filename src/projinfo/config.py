"""Configuration management for projinfo using platformdirs."""

import json
import logging
import shlex
from pathlib import Path
from typing import Annotated, List, Optional

from platformdirs import user_config_dir, user_state_dir
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .candidates import ExcludeRegistry

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Global settings for projinfo."""

    model_config = SettingsConfigDict(
        env_prefix="PROJINFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    exclude_dirs: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Path prefixes never offered as projects",
    )
    readme_names: Annotated[List[str], NoDecode] = Field(
        default=["README.md"],
        description="Files searched, in order, for a project description",
    )
    buildozer_command: str = Field(default="buildozer", description="buildozer executable")
    candidate_command: Annotated[List[str], NoDecode] = Field(
        default=["zoxide", "query", "--list"],
        description="Command printing candidate directories, one per line",
    )
    log_level: str = Field(default="WARNING", description="Default logging level")
    config_dir: Optional[Path] = Field(default=None, description="Override for the config directory")
    state_dir: Optional[Path] = Field(default=None, description="Override for the state directory")

    @field_validator("exclude_dirs", "readme_names", mode="before")
    @classmethod
    def split_list(cls, value):
        """Accept a JSON list or a comma separated string."""
        if isinstance(value, str):
            if value.lstrip().startswith("["):
                return json.loads(value)
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("candidate_command", mode="before")
    @classmethod
    def split_command(cls, value):
        """Accept a JSON list or a shell style command line."""
        if isinstance(value, str):
            if value.lstrip().startswith("["):
                return json.loads(value)
            return shlex.split(value)
        return value


class ConfigManager:
    """Manages projinfo settings and persisted exclusions."""

    def __init__(self, config_dir: Optional[Path] = None, state_dir: Optional[Path] = None):
        self.settings = Settings()
        self.config_dir = Path(
            config_dir or self.settings.config_dir or user_config_dir("projinfo", "projinfo")
        )
        self.state_dir = Path(
            state_dir or self.settings.state_dir or user_state_dir("projinfo", "projinfo")
        )

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.state_dir.mkdir(parents=True, exist_ok=True)

        self.config_file = self.config_dir / "config.json"
        self.log_file = self.state_dir / "projinfo.log"

        self.saved_exclude_dirs: List[str] = self._load_exclude_dirs()

    def _load_exclude_dirs(self) -> List[str]:
        """Load persisted exclusions from the config file."""
        if not self.config_file.exists():
            return []

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [str(d) for d in data.get("exclude_dirs", [])]
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")
            return []

    def save(self):
        """Save persisted exclusions to the config file."""
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump({"exclude_dirs": self.saved_exclude_dirs}, f, indent=2)

    def add_exclude_dir(self, prefix: str) -> bool:
        """Persist an exclusion prefix; return False if it was already saved."""
        if prefix in self.saved_exclude_dirs:
            return False
        self.saved_exclude_dirs.append(prefix)
        self.save()
        return True

    def exclusions(self) -> ExcludeRegistry:
        """Build the exclusion set from settings and persisted prefixes."""
        registry = ExcludeRegistry()
        for prefix in [*self.settings.exclude_dirs, *self.saved_exclude_dirs]:
            registry.add_exclude_dir(prefix)
        return registry
