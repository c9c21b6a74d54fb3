# Config family base utilities
import json
import os
import stat
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from jira_mcp_installer.models import FileFormat, ServiceEntry

# Created config files hold credentials
NEW_FILE_MODE = 0o600


class ConfigParseError(ValueError):
    """Raised when an existing config file cannot be parsed.

    ABOUTME: Injection reports this instead of overwriting the file
    """


def read_config_file(path: Path, file_format: FileFormat) -> dict[str, Any]:
    """Read a JSON or TOML config file with error handling.

    ABOUTME: Returns empty dict if file doesn't exist or is blank
    ABOUTME: Raises ConfigParseError for invalid syntax or non-mapping roots

    Args:
        path: Config file to read
        file_format: "json" or "toml"

    Returns:
        Parsed top-level mapping

    Raises:
        ConfigParseError: If the file exists but is not a parseable mapping
        OSError: If the file cannot be read
    """
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"{path} is not valid UTF-8: {e}") from e
    if not text.strip():
        return {}

    if file_format == "toml":
        try:
            data: Any = tomli.loads(text)
        except tomli.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML in {path}: {e}") from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Expected an object at the top level of {path}, got {type(data).__name__}"
        )
    return data


def dump_config(data: dict[str, Any], file_format: FileFormat) -> str:
    """Serialize config data in the given format.

    ABOUTME: JSON keeps insertion order with 2-space indentation
    """
    if file_format == "toml":
        return tomli_w.dumps(data)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_config_file(path: Path, data: dict[str, Any], file_format: FileFormat) -> None:
    """Write a config file atomically.

    ABOUTME: Serializes fully before touching disk, then swaps a sibling .tmp in
    ABOUTME: Symlinks are followed so the link target is updated, not the link
    ABOUTME: Keeps an existing file's mode; new files are created owner-only
    ABOUTME: Does not create parent directories; callers do that explicitly
    """
    content = dump_config(data, file_format)
    path = path.resolve()
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = NEW_FILE_MODE

    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, NEW_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def stdio_fields(entry: ServiceEntry) -> dict[str, Any]:
    """Build the command/args/env trio shared by most families."""
    result: dict[str, Any] = {
        "command": entry.command,
        "args": list(entry.args),
    }
    if entry.env:
        result["env"] = dict(entry.env)
    return result


def string_list(name: str, key: str, value: Any) -> list[str]:
    """Coerce a list field of a server entry, rejecting other shapes."""
    if not isinstance(value, list):
        raise ValueError(f"Server '{name}' has invalid '{key}': expected a list, got {type(value).__name__}")
    return [str(item) for item in value]


def string_map(name: str, key: str, value: Any) -> dict[str, str]:
    """Coerce a mapping field of a server entry, rejecting other shapes."""
    if not isinstance(value, dict):
        raise ValueError(f"Server '{name}' has invalid '{key}': expected an object, got {type(value).__name__}")
    return {str(k): str(v) for k, v in value.items()}


def entry_from_stdio_fields(name: str, data: dict[str, Any]) -> ServiceEntry:
    """Convert a command/args/env mapping to a ServiceEntry.

    ABOUTME: Missing args/env default to empty; present ones must be list/object
    ABOUTME: Validates the required command field

    Raises:
        ValueError: If the entry has no command or a malformed args/env field
    """
    command = data.get("command")
    if not isinstance(command, str) or not command:
        raise ValueError(f"Server '{name}' missing required 'command' field")

    return ServiceEntry(
        command=command,
        args=string_list(name, "args", data.get("args", [])),
        env=string_map(name, "env", data.get("env", {})),
    )
