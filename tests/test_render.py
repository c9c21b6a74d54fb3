# ABOUTME: Tests for screen rendering
# ABOUTME: Checks what each view shows, not exact layout
from dataclasses import replace

from jira_mcp_installer.models import Credentials, DetectedTarget, InjectionResult
from jira_mcp_installer.registry import get_target
from jira_mcp_installer.tui.render import render
from jira_mcp_installer.tui.state import new_session
from jira_mcp_installer.utils.validation import validate_targets


def make_session(show_all: bool = False):
    targets = [
        DetectedTarget(target=get_target("cursor"), installed=True),
        DetectedTarget(target=get_target("codex"), installed=False),
    ]
    return new_session(targets, show_all=show_all)


def test_menu_lists_targets(ctx):
    frame = render(make_session(show_all=True), ctx)
    assert frame.startswith("\033[2J\033[H")
    assert "Jira MCP Quick Setup" in frame
    assert "1. Cursor" in frame
    assert "Codex CLI" in frame
    assert "(not detected)" in frame


def test_password_is_masked(ctx):
    session = replace(
        make_session(),
        view="credentials",
        selected=("cursor",),
        form=Credentials("https://jira.example.com", "bob", "hunter2"),
    )
    frame = render(session, ctx)
    assert "hunter2" not in frame
    assert "*******" in frame
    assert "bob" in frame


def test_confirm_flags_unsupported_targets(ctx):
    session = replace(
        make_session(show_all=True),
        view="confirm",
        scope="project",
        selected=("cursor", "codex"),
        validation=tuple(validate_targets(["cursor", "codex"], "project")),
        form=Credentials("https://jira.example.com", "bob", "x"),
    )
    frame = render(session, ctx)
    assert str(ctx.cwd / ".cursor" / "mcp.json") in frame
    assert "Codex CLI does not support project scope" in frame
    assert "[y/n]" in frame
    assert "last write wins" in frame


def test_results_summary(ctx):
    session = replace(
        make_session(show_all=True),
        view="results",
        results=(
            InjectionResult("cursor", True, config_path=ctx.home / ".cursor" / "mcp.json", backup_name="b.json"),
            InjectionResult("codex", False, message="Could not parse existing config"),
        ),
    )
    frame = render(session, ctx)
    assert "1/2 tools configured" in frame
    assert "Backup: b.json" in frame
    assert "Could not parse existing config" in frame
