# ABOUTME: Tests for the interactive installer state machine
# ABOUTME: Drives sessions with synthetic key and paste events; no terminal needed
from dataclasses import replace

import pytest

from jira_mcp_installer.batch import BatchReport
from jira_mcp_installer.models import Credentials, DetectedTarget, InjectionResult
from jira_mcp_installer.registry import get_target
from jira_mcp_installer.tui.state import (
    KeyEvent,
    PasteEvent,
    Session,
    clean_text,
    delete_word,
    finish_install,
    handle_event,
    new_session,
)


def detected(*ids: str, installed: bool = True) -> list[DetectedTarget]:
    return [DetectedTarget(target=get_target(target_id), installed=installed) for target_id in ids]


def press(session: Session, *names: str) -> Session:
    for name in names:
        session = handle_event(session, KeyEvent(name))
    return session


def type_text(session: Session, text: str) -> Session:
    for ch in text:
        session = handle_event(session, KeyEvent("space" if ch == " " else ch))
    return session


@pytest.fixture
def session() -> Session:
    return new_session(detected("claude-code", "claude-desktop", "cursor", "codex"))


class TestNewSession:
    """Tests for new_session function."""

    def test_hides_undetected_targets(self):
        targets = detected("cursor") + detected("zed", installed=False)
        assert [t.id for t in new_session(targets).targets] == ["cursor"]

    def test_show_all_lists_undetected(self):
        targets = detected("cursor") + detected("zed", installed=False)
        assert [t.id for t in new_session(targets, show_all=True).targets] == ["cursor", "zed"]

    def test_prefill_moves_focus_to_username(self):
        session = new_session(detected("cursor"), prefill_url="https://jira.example.com")
        assert session.form.base_url == "https://jira.example.com"
        assert session.field == "username"

    def test_initial_state(self, session):
        assert session.view == "menu"
        assert session.cursor == 0
        assert session.selected == ()
        assert session.field == "base_url"


class TestMenu:
    """Tests for the menu view."""

    def test_navigation_is_clamped(self, session):
        assert press(session, "up").cursor == 0
        assert press(session, "down", "j", "down", "down", "down").cursor == 3
        assert press(session, "down", "k").cursor == 0

    def test_enter_starts_single_flow(self, session):
        """Test that Enter configures the highlighted target alone."""
        session = press(session, "down", "return")
        assert session.view == "credentials"
        assert session.flow == "single"
        assert session.selected == ("claude-desktop",)
        assert session.scope == "user"

    def test_digit_selects_target(self, session):
        session = press(session, "3")
        assert session.selected == ("cursor",)
        assert session.cursor == 2
        assert session.view == "credentials"

    def test_digit_out_of_range_is_ignored(self, session):
        assert press(session, "9") == session

    def test_m_opens_multi_select_with_cursor_target(self, session):
        session = press(session, "down", "down", "m")
        assert session.view == "multi-select"
        assert session.selected == ("cursor",)
        assert session.flow == "batch"

    @pytest.mark.parametrize("key", ["q", "Q", "escape"])
    def test_quit_keys(self, session, key):
        assert press(session, key).quit

    def test_ctrl_c_quits(self, session):
        assert handle_event(session, KeyEvent("c", ctrl=True)).quit

    def test_empty_menu_only_quits(self):
        session = new_session([])
        assert press(session, "return", "down", "m") == session
        assert press(session, "q").quit

    def test_paste_is_ignored(self, session):
        assert handle_event(session, PasteEvent("hello")) == session


class TestMultiSelect:
    """Tests for the multi-select view."""

    def test_toggle_keeps_menu_order(self, session):
        session = press(session, "m", "down", "down", "down", "space", "up", "up", "space")
        assert session.selected == ("claude-code", "claude-desktop", "codex")
        session = press(session, "space")
        assert session.selected == ("claude-code", "codex")

    def test_select_all_and_none(self, session):
        session = press(session, "m", "a")
        assert session.selected == ("claude-code", "claude-desktop", "cursor", "codex")
        assert press(session, "n").selected == ()

    def test_enter_requires_a_selection(self, session):
        session = press(session, "m", "n", "return")
        assert session.view == "multi-select"

    def test_enter_goes_to_scope_select_with_validation(self, session):
        session = press(session, "m", "a", "return")
        assert session.view == "scope-select"
        assert len(session.validation) == 4
        assert all(v.scope_supported for v in session.validation)

    def test_escape_returns_to_menu(self, session):
        assert press(session, "m", "escape").view == "menu"


class TestScopeSelect:
    """Tests for the scope-select view."""

    def test_project_scope_flags_user_only_targets(self, session):
        """Test validation gating for targets without project config."""
        session = press(session, "m", "a", "return", "space")
        assert session.scope == "project"
        flags = {v.target_id: v.scope_supported for v in session.validation}
        assert flags == {
            "claude-code": True,
            "claude-desktop": False,
            "cursor": True,
            "codex": False,
        }

    def test_confirm_still_reachable_with_unsupported_targets(self, session):
        session = press(session, "m", "a", "return", "right", "return")
        session = type_text(session, "https://jira.example.com")
        session = press(session, "tab")
        session = type_text(session, "bob")
        session = press(session, "tab")
        session = type_text(session, "x")
        session = press(session, "return")

        assert session.view == "confirm"
        assert session.scope == "project"
        assert not all(v.scope_supported for v in session.validation)
        assert session.selected == ("claude-code", "claude-desktop", "cursor", "codex")

    def test_toggle_twice_returns_to_user(self, session):
        assert press(session, "m", "return", "left", "left").scope == "user"

    def test_revalidates_after_selection_change(self, session):
        """Test that going back and changing the selection re-runs validation."""
        session = press(session, "m", "return", "space")
        assert [v.target_id for v in session.validation] == ["claude-code"]

        session = press(session, "escape", "down", "down", "down", "space", "return")
        assert session.view == "scope-select"
        assert [v.target_id for v in session.validation] == ["claude-code", "codex"]
        assert session.validation[1].scope_supported is False

    def test_escape_returns_to_multi_select(self, session):
        session = press(session, "m", "return", "escape")
        assert session.view == "multi-select"
        assert session.validation == ()


class TestCredentials:
    """Tests for the credentials form."""

    @pytest.fixture
    def form(self, session) -> Session:
        return press(session, "return")

    def fill(self, form: Session, url: str, username: str, password: str) -> Session:
        form = type_text(form, url)
        form = press(form, "down")
        form = type_text(form, username)
        form = press(form, "down")
        return type_text(form, password)

    def test_valid_form_advances(self, form):
        session = self.fill(form, "https://jira.example.com/bob/x", "bob", "x")
        session = press(session, "return")
        assert session.view == "confirm"
        assert session.form == Credentials("https://jira.example.com/bob/x", "bob", "x")

    def test_empty_password_blocks(self, form):
        session = self.fill(form, "https://jira.example.com", "bob", "")
        assert press(session, "return").view == "credentials"

    def test_invalid_url_blocks(self, form):
        session = self.fill(form, "not-a-url", "bob", "x")
        assert press(session, "return").view == "credentials"

    def test_field_navigation_is_clamped(self, form):
        assert press(form, "up").field == "base_url"
        assert press(form, "tab", "tab", "tab").field == "password"
        assert handle_event(press(form, "tab"), KeyEvent("tab", shift=True)).field == "base_url"

    def test_paste_strips_whitespace_and_control_chars(self, form):
        session = handle_event(form, PasteEvent("  https://jira.\x07example.com\n"))
        assert session.form.base_url == "https://jira.example.com"

    def test_paste_appends_to_current_field(self, form):
        session = type_text(form, "https://")
        session = handle_event(session, PasteEvent("jira.example.com"))
        assert session.form.base_url == "https://jira.example.com"

    def test_backspace(self, form):
        session = press(type_text(form, "abc"), "backspace")
        assert session.form.base_url == "ab"

    def test_ctrl_w_deletes_word(self, form):
        session = type_text(form, "hello big world")
        session = handle_event(session, KeyEvent("w", ctrl=True))
        assert session.form.base_url == "hello big "

    def test_ctrl_u_clears_field(self, form):
        session = type_text(form, "hello")
        session = handle_event(session, KeyEvent("u", ctrl=True))
        assert session.form.base_url == ""

    def test_other_control_and_named_keys_insert_nothing(self, form):
        session = handle_event(form, KeyEvent("a", ctrl=True))
        session = handle_event(session, KeyEvent("x", meta=True))
        session = press(session, "left", "home", "delete", "f5")
        assert session.form.base_url == ""

    def test_q_is_text_not_quit(self, form):
        session = type_text(form, "q")
        assert not session.quit
        assert session.form.base_url == "q"

    def test_escape_clears_form_and_returns_to_menu(self, form):
        session = press(type_text(form, "https://x"), "escape")
        assert session.view == "menu"
        assert session.form == Credentials("", "", "")
        assert session.selected == ()
        assert session.field == "base_url"


class TestConfirmAndInstall:
    """Tests for confirm, installing and the result views."""

    @pytest.fixture
    def confirm(self, session) -> Session:
        session = press(session, "return")
        session = replace(session, form=Credentials("https://jira.example.com", "bob", "x"))
        return press(session, "return")

    def test_yes_starts_installing(self, confirm):
        assert press(confirm, "y").view == "installing"
        assert press(confirm, "Y").view == "installing"

    @pytest.mark.parametrize("key", ["n", "N", "escape"])
    def test_no_returns_to_credentials(self, confirm, key):
        session = press(confirm, key)
        assert session.view == "credentials"
        assert session.form.username == "bob"

    def test_other_keys_ignored(self, confirm):
        assert press(confirm, "q", "x") == confirm

    def test_installing_ignores_input(self, confirm):
        installing = press(confirm, "y")
        assert press(installing, "q", "escape") == installing
        assert handle_event(installing, KeyEvent("c", ctrl=True)) == installing

    def test_single_flow_success(self, confirm):
        installing = press(confirm, "y")
        report = BatchReport(scope="user", results=[InjectionResult("claude-code", True)])
        assert finish_install(installing, report).view == "success"

    def test_single_flow_error(self, confirm):
        installing = press(confirm, "y")
        report = BatchReport(scope="user", results=[InjectionResult("claude-code", False, message="nope")])
        session = finish_install(installing, report)
        assert session.view == "error"
        assert session.results[0].message == "nope"

    def test_batch_flow_lands_on_results(self, session):
        installing = replace(session, view="installing", flow="batch", selected=("cursor",))
        report = BatchReport(scope="user", results=[InjectionResult("cursor", True)])
        assert finish_install(installing, report).view == "results"

    @pytest.mark.parametrize("view", ["results", "success", "error"])
    def test_result_views_only_quit(self, session, view):
        done = replace(session, view=view)
        assert press(done, "return", "y", "m") == done
        assert press(done, "q").quit

    def test_quit_is_terminal(self, session):
        quit_session = press(session, "q")
        assert press(quit_session, "m") == quit_session


def test_delete_word():
    assert delete_word("foo bar") == "foo "
    assert delete_word("foo bar  ") == "foo "
    assert delete_word("foo") == ""
    assert delete_word("") == ""


def test_clean_text():
    assert clean_text("a\x1bb\tc\x7f") == "abc"
