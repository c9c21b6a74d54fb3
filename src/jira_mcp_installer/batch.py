# Batch installation across selected targets
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from jira_mcp_installer.config import InstallerSettings
from jira_mcp_installer.inject import inject
from jira_mcp_installer.models import Credentials, InjectionResult, RuntimeContext, Scope

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Report from one batch run.

    ABOUTME: One result per selected target, in selection order
    ABOUTME: Partial success is normal; callers summarize it
    """
    scope: Scope
    results: list[InjectionResult] = field(default_factory=list)

    def add_result(self, result: InjectionResult) -> None:
        self.results.append(result)

    @property
    def succeeded(self) -> list[InjectionResult]:
        return [result for result in self.results if result.success]

    @property
    def failed(self) -> list[InjectionResult]:
        return [result for result in self.results if not result.success]

    @property
    def all_succeeded(self) -> bool:
        return bool(self.results) and not self.failed

    def summary(self) -> str:
        """One-line summary, e.g. '2/3 targets configured, 1 failed'."""
        text = f"{len(self.succeeded)}/{len(self.results)} targets configured"
        if self.failed:
            text += f", {len(self.failed)} failed"
        return text


def run_batch(
    target_ids: Iterable[str],
    scope: Scope,
    credentials: Credentials,
    *,
    ctx: RuntimeContext | None = None,
    settings: InstallerSettings | None = None,
    backup_dir: Path | None = None,
) -> BatchReport:
    """Inject the Jira entry into every selected target.

    ABOUTME: Sequential, in input order; each target's file is independent
    ABOUTME: Continues on target errors, records them in report
    ABOUTME: No cross-target rollback

    Args:
        target_ids: Selected target ids
        scope: Scope applied to every target
        credentials: Jira credentials
        ctx: Runtime context for path resolution
        settings: Installer settings
        backup_dir: Overrides settings' backup directory

    Returns:
        BatchReport with one result per target
    """
    ctx = ctx or RuntimeContext.current()
    report = BatchReport(scope=scope)

    for target_id in target_ids:
        try:
            result = inject(
                target_id,
                scope,
                credentials,
                ctx=ctx,
                settings=settings,
                backup_dir=backup_dir,
            )
        except Exception as e:
            # Record error but continue with other targets
            logger.exception(f"{target_id}: unexpected injection failure")
            result = InjectionResult(target_id=target_id, success=False, message=f"Unexpected error: {e}")

        if not result.success:
            logger.warning(f"{target_id}: {result.message}")
        report.add_result(result)

    logger.info(f"Batch complete: {report.summary()}")
    return report
