# Config injection engine
import logging
from pathlib import Path
from typing import Any

from jira_mcp_installer.config import InstallerSettings, build_service_entry
from jira_mcp_installer.families import ConfigParseError, get_family, read_config_file, write_config_file
from jira_mcp_installer.models import (
    Credentials,
    InjectionResult,
    RuntimeContext,
    Scope,
    ServiceEntry,
)
from jira_mcp_installer.registry import UnknownTargetError, get_target, resolve_config_location
from jira_mcp_installer.utils.backup import create_backup

logger = logging.getLogger(__name__)


def merge_entry(data: dict[str, Any], wrapper_key: str, entry_key: str, entry: dict[str, Any]) -> bool:
    """Upsert one entry under the wrapper map, in place.

    ABOUTME: Creates the wrapper map if absent
    ABOUTME: Leaves every other top-level key and sibling entry untouched
    ABOUTME: Returns True if an entry with entry_key was replaced

    Raises:
        ValueError: If the existing wrapper value is not a mapping
    """
    wrapper = data.get(wrapper_key)
    if wrapper is None:
        wrapper = {}
        data[wrapper_key] = wrapper
    elif not isinstance(wrapper, dict):
        raise ValueError(
            f"'{wrapper_key}' is a {type(wrapper).__name__}, expected an object; refusing to overwrite it"
        )

    existed = entry_key in wrapper
    wrapper[entry_key] = entry
    return existed


def inject(
    target_id: str,
    scope: Scope,
    credentials: Credentials,
    *,
    ctx: RuntimeContext | None = None,
    settings: InstallerSettings | None = None,
    backup_dir: Path | None = None,
) -> InjectionResult:
    """Add or update the Jira entry in one target's config file.

    ABOUTME: Read-merge-write against the file system; nothing is cached between calls
    ABOUTME: Existing files are backed up before modification
    ABOUTME: Every failure is returned as a result, never raised

    Args:
        target_id: Registered target id
        scope: "user" or "project"
        credentials: Jira credentials for the environment block
        ctx: Runtime context for path resolution
        settings: Installer settings (runner command, backup dir)
        backup_dir: Overrides settings' backup directory

    Returns:
        InjectionResult describing the outcome
    """
    settings = settings or InstallerSettings()

    try:
        target = get_target(target_id)
    except UnknownTargetError as e:
        return InjectionResult(target_id=target_id, success=False, message=str(e.args[0]))

    location = resolve_config_location(target_id, scope, ctx)
    if location is None:
        supported = ", ".join(target.supported_scopes)
        return InjectionResult(
            target_id=target_id,
            success=False,
            message=f"{target.display_name} does not support {scope} scope configuration (supports: {supported})",
        )

    family = get_family(location.family)
    path = location.path
    logger.debug(f"{target.display_name}: injecting into {path}")

    try:
        existed = path.exists()
        data = read_config_file(path, family.file_format)
    except ConfigParseError as e:
        logger.warning(f"{target.display_name}: leaving unparseable config untouched: {e}")
        return InjectionResult(
            target_id=target_id,
            success=False,
            config_path=path,
            message=f"Could not parse existing config, file left unchanged: {e}",
        )
    except OSError as e:
        return InjectionResult(
            target_id=target_id,
            success=False,
            config_path=path,
            message=f"Could not read {path}: {e}",
        )

    entry = family.encode(build_service_entry(credentials, settings))
    try:
        updated_existing = merge_entry(data, location.wrapper_key, location.entry_key, entry)
    except ValueError as e:
        return InjectionResult(target_id=target_id, success=False, config_path=path, message=str(e))

    if updated_existing:
        logger.info(f"{target.display_name}: existing '{location.entry_key}' entry found, updating")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return InjectionResult(
            target_id=target_id,
            success=False,
            config_path=path,
            message=f"Could not create directory {path.parent}: {e}",
        )

    backup_name: str | None = None
    if existed:
        try:
            backup_path = create_backup(
                path,
                backup_dir or settings.resolved_backup_dir,
                f"{target_id}-{scope}",
            )
        except OSError as e:
            return InjectionResult(
                target_id=target_id,
                success=False,
                config_path=path,
                message=f"Could not back up {path}, file left unchanged: {e}",
            )
        backup_name = backup_path.name

    try:
        write_config_file(path, data, family.file_format)
    except (OSError, TypeError, ValueError) as e:
        return InjectionResult(
            target_id=target_id,
            success=False,
            config_path=path,
            backup_name=backup_name,
            message=f"Error writing config: {e}",
        )

    logger.info(f"{target.display_name}: configured {path}")
    return InjectionResult(
        target_id=target_id,
        success=True,
        config_path=path,
        backup_name=backup_name,
        message=f"Configured {target.display_name} ({scope} scope)",
        updated_existing=updated_existing,
    )


def read_installed_entry(
    target_id: str,
    scope: Scope,
    ctx: RuntimeContext | None = None,
) -> ServiceEntry | None:
    """Decode the Jira entry currently configured for a target, if any.

    ABOUTME: Returns None when the scope is unsupported, the file is missing,
    ABOUTME: or no entry exists under the entry key

    Raises:
        ConfigParseError: If the config file exists but does not parse
        ValueError: If the entry exists but has an unexpected shape
    """
    location = resolve_config_location(target_id, scope, ctx)
    if location is None:
        return None

    family = get_family(location.family)
    data = read_config_file(location.path, family.file_format)
    wrapper = data.get(location.wrapper_key)
    if not isinstance(wrapper, dict):
        return None

    raw_entry = wrapper.get(location.entry_key)
    if not isinstance(raw_entry, dict):
        return None
    return family.decode(location.entry_key, raw_entry)
