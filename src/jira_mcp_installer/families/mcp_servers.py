# mcpServers config family (Claude, Cursor, Windsurf, Roo, Factory, Gemini)
from typing import Any

from jira_mcp_installer.families.base import entry_from_stdio_fields, stdio_fields
from jira_mcp_installer.models import ConfigFamily, FileFormat, ServiceEntry


class McpServersFamily(ConfigFamily):
    """Family for JSON files with a top-level 'mcpServers' map.

    ABOUTME: Implements ConfigFamily protocol for the most common schema
    ABOUTME: Entries are plain {command, args, env} objects
    """

    @property
    def name(self) -> str:
        return "mcp-servers"

    @property
    def wrapper_key(self) -> str:
        return "mcpServers"

    @property
    def file_format(self) -> FileFormat:
        return "json"

    def encode(self, entry: ServiceEntry) -> dict[str, Any]:
        return stdio_fields(entry)

    def decode(self, name: str, data: dict[str, Any]) -> ServiceEntry:
        return entry_from_stdio_fields(name, data)
