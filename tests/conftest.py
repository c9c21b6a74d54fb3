# ABOUTME: Shared fixtures for installer tests
# ABOUTME: Every test gets a fake home and project dir under tmp_path
from pathlib import Path

import pytest

from jira_mcp_installer.config import InstallerSettings
from jira_mcp_installer.models import Credentials, RuntimeContext


@pytest.fixture
def ctx(tmp_path: Path) -> RuntimeContext:
    """Runtime context rooted in tmp_path with an empty search path."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    return RuntimeContext(home=home, cwd=project, platform="linux", search_path="")


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(base_url="https://j.example.com", username="u", password="p")


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    return tmp_path / "backups"


@pytest.fixture
def settings(backup_dir: Path) -> InstallerSettings:
    return InstallerSettings(backup_dir=backup_dir)
