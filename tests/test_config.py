"""Tests for settings and persisted exclusions."""

import json
import tempfile
from pathlib import Path

from projinfo.config import ConfigManager, Settings


def test_settings_defaults(monkeypatch):
    """Test default settings."""
    for name in ("EXCLUDE_DIRS", "README_NAMES", "BUILDOZER_COMMAND", "CANDIDATE_COMMAND"):
        monkeypatch.delenv(f"PROJINFO_{name}", raising=False)
    settings = Settings()

    assert settings.exclude_dirs == []
    assert settings.readme_names == ["README.md"]
    assert settings.buildozer_command == "buildozer"
    assert settings.candidate_command == ["zoxide", "query", "--list"]


def test_settings_from_environment(monkeypatch):
    """Test PROJINFO_ environment overrides."""
    monkeypatch.setenv("PROJINFO_EXCLUDE_DIRS", '["/mnt", "/proc"]')
    monkeypatch.setenv("PROJINFO_BUILDOZER_COMMAND", "/opt/bin/buildozer")
    settings = Settings()

    assert settings.exclude_dirs == ["/mnt", "/proc"]
    assert settings.buildozer_command == "/opt/bin/buildozer"


def test_config_manager_initialization():
    """Test that directories are created."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = Path(tmpdir) / "config"
        state_dir = Path(tmpdir) / "state"
        config_manager = ConfigManager(config_dir, state_dir)

        assert config_manager.config_dir.exists()
        assert config_manager.state_dir.exists()
        assert config_manager.saved_exclude_dirs == []


def test_config_manager_add_exclude_dir(monkeypatch):
    """Test persisting exclusions across instances."""
    monkeypatch.setenv("PROJINFO_EXCLUDE_DIRS", '["/mnt"]')
    with tempfile.TemporaryDirectory() as tmpdir:
        config_manager = ConfigManager(Path(tmpdir), Path(tmpdir))

        assert config_manager.add_exclude_dir("/home/me/.cache") is True
        assert config_manager.add_exclude_dir("/home/me/.cache") is False

        reloaded = ConfigManager(Path(tmpdir), Path(tmpdir))
        assert reloaded.saved_exclude_dirs == ["/home/me/.cache"]

        excludes = reloaded.exclusions()
        assert excludes.get_exclude_dirs() == ["/mnt", "/home/me/.cache"]
        assert excludes.is_excluded("/home/me/.cache/pip")


def test_config_manager_corrupt_file():
    """Test that an unreadable config file falls back to defaults."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "config.json").write_text("{broken")
        assert ConfigManager(Path(tmpdir), Path(tmpdir)).saved_exclude_dirs == []

        (Path(tmpdir) / "config.json").write_text(json.dumps(["not", "a", "dict"]))
        assert ConfigManager(Path(tmpdir), Path(tmpdir)).saved_exclude_dirs == []


def test_settings_plain_strings_from_environment(monkeypatch):
    """Test that list settings accept plain and comma separated values."""
    monkeypatch.setenv("PROJINFO_EXCLUDE_DIRS", "/mnt")
    monkeypatch.setenv("PROJINFO_README_NAMES", "README.md, README.rst,")
    monkeypatch.setenv("PROJINFO_CANDIDATE_COMMAND", "fd --type d '.' '/home/me/src dirs'")
    settings = Settings()

    assert settings.exclude_dirs == ["/mnt"]
    assert settings.readme_names == ["README.md", "README.rst"]
    assert settings.candidate_command == ["fd", "--type", "d", ".", "/home/me/src dirs"]

    monkeypatch.setenv("PROJINFO_EXCLUDE_DIRS", "/mnt,/proc")
    monkeypatch.setenv("PROJINFO_CANDIDATE_COMMAND", '["zoxide", "query", "-l"]')
    settings = Settings()

    assert settings.exclude_dirs == ["/mnt", "/proc"]
    assert settings.candidate_command == ["zoxide", "query", "-l"]
