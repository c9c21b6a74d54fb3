# OpenCode config family
from typing import Any

from jira_mcp_installer.families.base import string_map
from jira_mcp_installer.models import ConfigFamily, FileFormat, ServiceEntry


class OpenCodeFamily(ConfigFamily):
    """Family for opencode.json ('mcp').

    ABOUTME: OpenCode stores the command line as one list of tokens
    ABOUTME: and names the environment block 'environment'
    """

    @property
    def name(self) -> str:
        return "opencode"

    @property
    def wrapper_key(self) -> str:
        return "mcp"

    @property
    def file_format(self) -> FileFormat:
        return "json"

    def encode(self, entry: ServiceEntry) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": "local",
            "command": [entry.command, *entry.args],
            "enabled": True,
        }
        if entry.env:
            result["environment"] = dict(entry.env)
        return result

    def decode(self, name: str, data: dict[str, Any]) -> ServiceEntry:
        tokens = data.get("command")
        if not isinstance(tokens, list) or not tokens:
            raise ValueError(f"Server '{name}' missing required 'command' list")

        return ServiceEntry(
            command=str(tokens[0]),
            args=[str(token) for token in tokens[1:]],
            env=string_map(name, "environment", data.get("environment", {})),
        )
