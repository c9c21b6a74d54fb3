# Installed-tool detection
import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from jira_mcp_installer.models import DetectedTarget, RuntimeContext, TargetDescriptor
from jira_mcp_installer.registry import list_targets

logger = logging.getLogger(__name__)


def find_evidence(target: TargetDescriptor, ctx: RuntimeContext) -> Path | None:
    """Return the first piece of evidence that a target is installed.

    ABOUTME: Binaries on the search path are checked before marker paths
    ABOUTME: Read-only probes; never raises for missing tools
    """
    for binary in target.binaries:
        found = shutil.which(binary, path=ctx.search_path)
        if found:
            return Path(found)

    for marker in target.markers:
        path = marker.resolve(ctx)
        try:
            if path.exists():
                return path
        except OSError as e:
            logger.debug(f"Could not probe {path}: {e}")

    return None


def detect_installed_targets(
    targets: Iterable[TargetDescriptor] | None = None,
    ctx: RuntimeContext | None = None,
) -> list[DetectedTarget]:
    """Probe the machine for every target, preserving registry order.

    ABOUTME: Point-in-time snapshot; callers do not re-probe mid-session

    Args:
        targets: Targets to probe (defaults to the whole registry)
        ctx: Runtime context (defaults to the current process environment)

    Returns:
        One DetectedTarget per input target
    """
    ctx = ctx or RuntimeContext.current()
    detected: list[DetectedTarget] = []

    for target in targets if targets is not None else list_targets():
        evidence = find_evidence(target, ctx)
        if evidence is None:
            logger.debug(f"{target.display_name}: not detected")
        else:
            logger.debug(f"{target.display_name}: detected via {evidence}")
        detected.append(
            DetectedTarget(target=target, installed=evidence is not None, evidence_path=evidence)
        )

    return detected
