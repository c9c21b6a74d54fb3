# Codex CLI config family
from typing import Any

from jira_mcp_installer.families.base import entry_from_stdio_fields, stdio_fields
from jira_mcp_installer.models import ConfigFamily, FileFormat, ServiceEntry


class CodexFamily(ConfigFamily):
    """Family for Codex CLI (~/.codex/config.toml).

    ABOUTME: Uses snake_case mcp_servers key (not mcpServers)
    ABOUTME: TOML file; other tables (model, profiles) are preserved by the engine
    """

    @property
    def name(self) -> str:
        return "codex"

    @property
    def wrapper_key(self) -> str:
        return "mcp_servers"

    @property
    def file_format(self) -> FileFormat:
        return "toml"

    def encode(self, entry: ServiceEntry) -> dict[str, Any]:
        return stdio_fields(entry)

    def decode(self, name: str, data: dict[str, Any]) -> ServiceEntry:
        return entry_from_stdio_fields(name, data)
