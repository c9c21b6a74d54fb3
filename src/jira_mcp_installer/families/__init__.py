# Config family registry
from jira_mcp_installer.families.base import (
    ConfigParseError,
    dump_config,
    read_config_file,
    write_config_file,
)
from jira_mcp_installer.families.codex import CodexFamily
from jira_mcp_installer.families.mcp_servers import McpServersFamily
from jira_mcp_installer.families.opencode import OpenCodeFamily
from jira_mcp_installer.families.vscode import VsCodeFamily
from jira_mcp_installer.families.zed import ContextServersFamily
from jira_mcp_installer.models import ConfigFamily

# Registry of all config families, keyed by family name
FAMILIES: dict[str, ConfigFamily] = {
    family.name: family
    for family in (
        McpServersFamily(),
        ContextServersFamily(),
        VsCodeFamily(),
        OpenCodeFamily(),
        CodexFamily(),
    )
}

__all__ = [
    "FAMILIES",
    "CodexFamily",
    "ConfigFamily",
    "ConfigParseError",
    "ContextServersFamily",
    "McpServersFamily",
    "OpenCodeFamily",
    "VsCodeFamily",
    "dump_config",
    "get_family",
    "read_config_file",
    "write_config_file",
]


def get_family(name: str) -> ConfigFamily:
    """Look up a config family by name.

    ABOUTME: Raises KeyError naming the known families
    """
    try:
        return FAMILIES[name]
    except KeyError:
        known = ", ".join(sorted(FAMILIES))
        raise KeyError(f"Unknown config family '{name}' (known: {known})") from None
