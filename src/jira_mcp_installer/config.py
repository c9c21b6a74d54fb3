# Installer settings and the generated service entry
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from jira_mcp_installer.models import Credentials, ServiceEntry
from jira_mcp_installer.utils.backup import get_backup_dir
from jira_mcp_installer.utils.validation import validate_url

logger = logging.getLogger(__name__)

# ABOUTME: Environment variables read once at session start
ENV_PREFILL_URL = "JIRA_MCP_URL"
ENV_BACKUP_DIR = "JIRA_MCP_BACKUP_DIR"
ENV_RUNNER = "JIRA_MCP_RUNNER"
ENV_PACKAGE = "JIRA_MCP_PACKAGE"

# ABOUTME: Defaults for the server launch command written into each target
DEFAULT_RUNNER = "npx"
DEFAULT_PACKAGE = "@khanglvm/jira-mcp"

# ABOUTME: Keys of the environment block consumed by the Jira server
ENV_BASE_URL = "JIRA_BASE_URL"
ENV_USERNAME = "JIRA_USERNAME"
ENV_PASSWORD = "JIRA_PASSWORD"


@dataclass(frozen=True)
class InstallerSettings:
    """Installer configuration loaded from the environment.

    ABOUTME: prefill_url is already validated; invalid values are dropped
    """
    prefill_url: str | None = None
    backup_dir: Path | None = None
    runner: str = DEFAULT_RUNNER
    package: str = DEFAULT_PACKAGE

    @property
    def resolved_backup_dir(self) -> Path:
        return self.backup_dir or get_backup_dir()


def clean_prefill_url(value: str | None) -> str | None:
    """Return a usable pre-fill URL or None.

    ABOUTME: Empty values count as unset
    ABOUTME: Invalid values are discarded with a warning so the user types one
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    error = validate_url(value)
    if error:
        logger.warning(f"Ignoring pre-filled Jira URL: {error}")
        return None
    return value


def load_settings(
    environ: Mapping[str, str] | None = None,
    url_override: str | None = None,
) -> InstallerSettings:
    """Build InstallerSettings from environment variables.

    Args:
        environ: Environment mapping (defaults to os.environ)
        url_override: Value of --url, which wins over JIRA_MCP_URL

    Returns:
        Frozen settings for the session
    """
    environ = os.environ if environ is None else environ

    raw_url = url_override if url_override is not None else environ.get(ENV_PREFILL_URL)
    backup_dir = environ.get(ENV_BACKUP_DIR)

    return InstallerSettings(
        prefill_url=clean_prefill_url(raw_url),
        backup_dir=Path(backup_dir).expanduser() if backup_dir else None,
        runner=environ.get(ENV_RUNNER) or DEFAULT_RUNNER,
        package=environ.get(ENV_PACKAGE) or DEFAULT_PACKAGE,
    )


def build_service_entry(credentials: Credentials, settings: InstallerSettings | None = None) -> ServiceEntry:
    """Create the Jira MCP server entry for a target.

    ABOUTME: Environment block has exactly the three credential keys
    """
    settings = settings or InstallerSettings()
    return ServiceEntry(
        command=settings.runner,
        args=["-y", settings.package] if settings.runner == "npx" else [settings.package],
        env={
            ENV_BASE_URL: credentials.base_url,
            ENV_USERNAME: credentials.username,
            ENV_PASSWORD: credentials.password,
        },
    )
