# ABOUTME: Utility modules for jira-mcp-installer
# ABOUTME: Exports backup and validation functions

from jira_mcp_installer.utils.backup import cleanup_old_backups, create_backup, get_backup_dir
from jira_mcp_installer.utils.validation import (
    URL_PATTERN,
    validate_credentials,
    validate_targets,
    validate_url,
)

__all__ = [
    "URL_PATTERN",
    "cleanup_old_backups",
    "create_backup",
    "get_backup_dir",
    "validate_credentials",
    "validate_targets",
    "validate_url",
]
