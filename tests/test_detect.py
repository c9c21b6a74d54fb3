# ABOUTME: Tests for installed-tool detection
# ABOUTME: Uses marker paths and fake executables under tmp_path
import os
import stat
from dataclasses import replace

from jira_mcp_installer.detect import detect_installed_targets, find_evidence
from jira_mcp_installer.registry import get_target, list_targets


def test_nothing_installed(ctx):
    """Test that an empty home and search path detect nothing."""
    detected = detect_installed_targets(ctx=ctx)
    assert [d.id for d in detected] == [target.id for target in list_targets()]
    assert not any(d.installed for d in detected)


def test_marker_directory(ctx):
    """Test detection through a config directory marker."""
    (ctx.home / ".cursor").mkdir()

    detected = {d.id: d for d in detect_installed_targets(ctx=ctx)}

    assert detected["cursor"].installed
    assert detected["cursor"].evidence_path == ctx.home / ".cursor"
    assert not detected["windsurf"].installed


def test_marker_file(ctx):
    (ctx.home / ".claude.json").write_text("{}")
    assert find_evidence(get_target("claude-code"), ctx) == ctx.home / ".claude.json"


def test_binary_on_search_path(ctx, tmp_path):
    """Test detection through an executable on the search path."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    droid = bin_dir / "droid"
    droid.write_text("#!/bin/sh\n")
    droid.chmod(droid.stat().st_mode | stat.S_IXUSR)

    evidence = find_evidence(get_target("factory-droid"), replace(ctx, search_path=str(bin_dir)))

    assert evidence is not None
    assert os.path.samefile(evidence, droid)


def test_subset_preserves_order(ctx):
    """Test that only the given targets are probed, in input order."""
    targets = [get_target("codex"), get_target("zed")]
    assert [d.id for d in detect_installed_targets(targets, ctx)] == ["codex", "zed"]
