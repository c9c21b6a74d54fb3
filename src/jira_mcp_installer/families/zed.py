# Zed context_servers config family
from typing import Any

from jira_mcp_installer.families.base import entry_from_stdio_fields, stdio_fields
from jira_mcp_installer.models import ConfigFamily, FileFormat, ServiceEntry


class ContextServersFamily(ConfigFamily):
    """Family for Zed settings.json ('context_servers').

    ABOUTME: Zed marks user-defined servers with source = "custom"
    ABOUTME: settings.json also holds editor settings that must survive
    """

    @property
    def name(self) -> str:
        return "context-servers"

    @property
    def wrapper_key(self) -> str:
        return "context_servers"

    @property
    def file_format(self) -> FileFormat:
        return "json"

    def encode(self, entry: ServiceEntry) -> dict[str, Any]:
        return {"source": "custom", **stdio_fields(entry)}

    def decode(self, name: str, data: dict[str, Any]) -> ServiceEntry:
        # Older Zed releases nested the command as {"path": ..., "args": ..., "env": ...}
        command = data.get("command")
        if isinstance(command, dict):
            return entry_from_stdio_fields(
                name,
                {
                    "command": command.get("path"),
                    "args": command.get("args", []),
                    "env": command.get("env", {}),
                },
            )
        return entry_from_stdio_fields(name, data)
