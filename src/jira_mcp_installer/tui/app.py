# Interactive installer event loop
import logging
import sys
from pathlib import Path

from jira_mcp_installer.batch import run_batch
from jira_mcp_installer.config import InstallerSettings
from jira_mcp_installer.detect import detect_installed_targets
from jira_mcp_installer.models import RuntimeContext
from jira_mcp_installer.registry import list_targets
from jira_mcp_installer.tui.keys import RawTerminal
from jira_mcp_installer.tui.render import render
from jira_mcp_installer.tui.state import Session, finish_install, handle_event, new_session

logger = logging.getLogger(__name__)


def run_install_step(
    session: Session,
    settings: InstallerSettings,
    ctx: RuntimeContext,
    backup_dir: Path | None = None,
) -> Session:
    """Run the batch for a session sitting in the installing view.

    ABOUTME: Synchronous; input is not read until the batch finishes
    ABOUTME: Targets that failed validation are still attempted and reported
    """
    report = run_batch(
        session.selected,
        session.scope,
        session.form,
        ctx=ctx,
        settings=settings,
        backup_dir=backup_dir,
    )
    return finish_install(session, report)


def run_interactive(
    settings: InstallerSettings,
    ctx: RuntimeContext | None = None,
    show_all: bool = False,
) -> int:
    """Drive the interactive installer until the user quits.

    ABOUTME: Detects tools once at startup; the snapshot is never refreshed
    ABOUTME: Returns 1 when no tools are detected, 0 on quit

    Args:
        settings: Installer settings (URL pre-fill, backup dir)
        ctx: Runtime context (defaults to the current process environment)
        show_all: List undetected tools as well

    Returns:
        Process exit code
    """
    ctx = ctx or RuntimeContext.current()
    detected = detect_installed_targets(list_targets(), ctx)
    session = new_session(detected, prefill_url=settings.prefill_url, show_all=show_all)

    if not session.targets:
        names = ", ".join(target.display_name for target in list_targets())
        print("No supported AI tools detected.", file=sys.stderr)
        print(f"Supported: {names}", file=sys.stderr)
        print("Run with --all to configure a tool that was not detected.", file=sys.stderr)
        return 1

    with RawTerminal() as terminal:
        while not session.quit:
            terminal.write(render(session, ctx))

            if session.view == "installing":
                session = run_install_step(session, settings, ctx)
                continue

            for event in terminal.read_events():
                session = handle_event(session, event)
                if session.quit or session.view == "installing":
                    break

    # The alternate screen is gone now; leave a plain record of what happened
    for result in session.results:
        if result.success:
            print(f"  ✓ {result.target_id} - {result.config_path}")
        else:
            print(f"  ✗ {result.target_id} - {result.message}")
            logger.debug(f"{result.target_id}: {result.message}")
    return 0
