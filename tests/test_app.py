# ABOUTME: Tests for the interactive app glue that runs without a terminal
# ABOUTME: run_interactive is only tested for the no-targets exit path
import json
from dataclasses import replace

from jira_mcp_installer.config import InstallerSettings
from jira_mcp_installer.models import Credentials, DetectedTarget
from jira_mcp_installer.registry import get_target
from jira_mcp_installer.tui.app import run_install_step, run_interactive
from jira_mcp_installer.tui.state import new_session


def test_run_install_step_writes_config(ctx, settings):
    """Test that the installing step runs the batch and lands on results."""
    session = new_session([
        DetectedTarget(target=get_target("cursor"), installed=True),
        DetectedTarget(target=get_target("gemini"), installed=True),
    ])
    session = replace(
        session,
        view="installing",
        flow="batch",
        selected=("cursor", "gemini"),
        form=Credentials("https://jira.example.com", "bob", "x"),
    )

    session = run_install_step(session, settings, ctx)

    assert session.view == "results"
    assert all(result.success for result in session.results)
    data = json.loads((ctx.home / ".gemini" / "settings.json").read_text())
    assert data["mcpServers"]["jira"]["env"]["JIRA_USERNAME"] == "bob"


def test_no_targets_detected(ctx, capsys):
    """Test that an empty detection result exits with 1 before touching the terminal."""
    assert run_interactive(InstallerSettings(), ctx=ctx) == 1
    err = capsys.readouterr().err
    assert "No supported AI tools detected." in err
    assert "Claude Code" in err
