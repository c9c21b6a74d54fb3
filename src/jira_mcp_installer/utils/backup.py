# ABOUTME: Backup utilities for target configuration files.
# ABOUTME: Handles timestamped backups with automatic retention cleanup (keep last 5 per target).
import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_BACKUPS_PER_LABEL = 5

# Pattern matches: {label}_{YYYYMMDD}_{HHMMSS}[_{n}].{ext}
# e.g., claude-code-user_20260108_143022.json, codex-user_20260108_143022_1.toml
BACKUP_PATTERN = re.compile(r"^(.+?)_(\d{8}_\d{6})(?:_(\d+))?\.(.+)$")


def create_backup(source_path: Path, backup_dir: Path, label: str) -> Path:
    """Create a timestamped backup of a file.

    ABOUTME: Backup format: {label}_{YYYYMMDD}_{HHMMSS}.{ext}
    ABOUTME: A counter suffix is added when a backup with that second already exists
    ABOUTME: Uses shutil.copy2() to preserve file metadata

    Args:
        source_path: Path to file to backup
        backup_dir: Directory where backup should be created
        label: Prefix identifying the target and scope, e.g. "cursor-project"

    Returns:
        Path to created backup file

    Raises:
        FileNotFoundError: If source_path doesn't exist
        OSError: If backup creation fails

    Examples:
        >>> source = Path("~/.claude.json").expanduser()
        >>> backup_path = create_backup(source, get_backup_dir(), "claude-code-user")
        >>> backup_path.name
        'claude-code-user_20260108_143022.json'
    """
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    extension = source_path.suffix or ".bak"

    backup_path = backup_dir / f"{label}_{timestamp}{extension}"
    counter = 1
    while backup_path.exists():
        backup_path = backup_dir / f"{label}_{timestamp}_{counter}{extension}"
        counter += 1

    shutil.copy2(source_path, backup_path)
    logger.info(f"Backed up {source_path} to {backup_path}")

    cleanup_old_backups(backup_dir)

    return backup_path


def get_backup_dir() -> Path:
    """Get the default backup directory path.

    ABOUTME: Returns ~/.jira-mcp/backups
    ABOUTME: Does not create the directory
    """
    return Path.home() / ".jira-mcp" / "backups"


def cleanup_old_backups(backup_dir: Path, max_backups_per_label: int = MAX_BACKUPS_PER_LABEL) -> list[Path]:
    """Remove old backup files, keeping only the most recent per label.

    ABOUTME: Groups backups by label prefix (before _timestamp)
    ABOUTME: Sorts by timestamp then counter, newest first
    ABOUTME: Logs warnings on errors but does not raise exceptions

    Args:
        backup_dir: Directory containing backup files
        max_backups_per_label: Maximum backups to keep per label (default 5)

    Returns:
        List of paths that were deleted
    """
    deleted_files: list[Path] = []

    if not backup_dir.exists():
        return deleted_files

    backups_by_label: dict[str, list[tuple[str, int, Path]]] = {}

    for file_path in backup_dir.iterdir():
        if not file_path.is_file():
            continue

        match = BACKUP_PATTERN.match(file_path.name)
        if not match:
            continue

        label = match.group(1)
        timestamp = match.group(2)
        counter = int(match.group(3) or 0)
        backups_by_label.setdefault(label, []).append((timestamp, counter, file_path))

    for backups in backups_by_label.values():
        backups.sort(key=lambda item: (item[0], item[1]), reverse=True)

        for _timestamp, _counter, file_path in backups[max_backups_per_label:]:
            try:
                file_path.unlink()
                deleted_files.append(file_path)
                logger.debug(f"Deleted old backup: {file_path}")
            except OSError as e:
                logger.warning(f"Failed to delete old backup {file_path}: {e}")

    return deleted_files
