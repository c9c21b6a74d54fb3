# VS Code / GitHub Copilot config family
from typing import Any

from jira_mcp_installer.families.base import entry_from_stdio_fields, stdio_fields
from jira_mcp_installer.models import ConfigFamily, FileFormat, ServiceEntry


class VsCodeFamily(ConfigFamily):
    """Family for VS Code mcp.json files ('servers').

    ABOUTME: VS Code requires an explicit transport type on each entry
    """

    @property
    def name(self) -> str:
        return "vscode"

    @property
    def wrapper_key(self) -> str:
        return "servers"

    @property
    def file_format(self) -> FileFormat:
        return "json"

    def encode(self, entry: ServiceEntry) -> dict[str, Any]:
        return {"type": "stdio", **stdio_fields(entry)}

    def decode(self, name: str, data: dict[str, Any]) -> ServiceEntry:
        server_type = data.get("type", "stdio")
        if server_type != "stdio":
            raise ValueError(
                f"Server '{name}' has unsupported type '{server_type}'. Expected 'stdio'."
            )
        return entry_from_stdio_fields(name, data)
