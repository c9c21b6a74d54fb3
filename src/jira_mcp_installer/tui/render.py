# Screen rendering for the interactive installer
from jira_mcp_installer import __version__
from jira_mcp_installer.models import RuntimeContext
from jira_mcp_installer.registry import resolve_config_location
from jira_mcp_installer.tui.state import Session

# ABOUTME: Terminal codes for interactive UI
CLEAR_SCREEN = "\033[2J\033[H"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
CYAN = "\033[96m"

CURSOR = f"{CYAN}>>>{RESET} "
NO_CURSOR = "    "

FIELD_LABELS = {
    "base_url": "Jira URL",
    "username": "Username",
    "password": "Password",
}

SHORTCUTS: dict[str, list[tuple[str, str]]] = {
    "menu": [("↑/k", "Up"), ("↓/j", "Down"), ("Enter", "Select"), ("m", "Multi-select"), ("q", "Quit")],
    "multi-select": [("Space", "Toggle"), ("a", "All"), ("n", "None"), ("Enter", "Next"), ("Esc", "Back")],
    "scope-select": [("Space/←/→", "Toggle scope"), ("Enter", "Next"), ("Esc", "Back")],
    "credentials": [
        ("Tab/↓", "Next"), ("↑", "Prev"), ("Paste", "Insert"), ("Ctrl+W", "Delete word"),
        ("Ctrl+U", "Clear"), ("Enter", "Proceed"), ("Esc", "Back"),
    ],
    "confirm": [("y", "Confirm"), ("n", "Cancel")],
    "installing": [],
}


def _header() -> list[str]:
    return [f"{BOLD}Jira MCP Quick Setup{RESET} {DIM}v{__version__}{RESET}", ""]


def _footer(session: Session) -> list[str]:
    shortcuts = SHORTCUTS.get(session.view, [("q", "Exit")])
    if not shortcuts:
        return []
    return ["", DIM + "  ".join(f"{key} {label}" for key, label in shortcuts) + RESET]


def _config_path(target_id: str, session: Session, ctx: RuntimeContext) -> str | None:
    location = resolve_config_location(target_id, session.scope, ctx)
    return str(location.path) if location else None


def _display_name(session: Session, target_id: str) -> str:
    for detected in session.targets:
        if detected.id == target_id:
            return detected.display_name
    return target_id


def _render_menu(session: Session) -> list[str]:
    lines = [f"{BOLD}Select a tool to configure:{RESET}", ""]
    if not session.targets:
        lines.append(f"{YELLOW}No supported AI tools detected.{RESET}")
        return lines

    for idx, detected in enumerate(session.targets):
        cursor = CURSOR if idx == session.cursor else NO_CURSOR
        number = f"{idx + 1}." if idx < 9 else "  "
        status = "" if detected.installed else f" {DIM}(not detected){RESET}"
        lines.append(f"{cursor}{number} {detected.display_name}{status}")
    return lines


def _render_multi_select(session: Session) -> list[str]:
    lines = [f"{BOLD}Select tools to configure:{RESET}", ""]
    for idx, detected in enumerate(session.targets):
        prefix = "[x]" if detected.id in session.selected else "[ ]"
        cursor = CURSOR if idx == session.cursor else NO_CURSOR
        lines.append(f"{cursor}{prefix} {detected.display_name}")
    lines.append("")
    lines.append(f"{len(session.selected)} selected")
    return lines


def _render_validation(session: Session, ctx: RuntimeContext) -> list[str]:
    lines: list[str] = []
    for result in session.validation:
        name = _display_name(session, result.target_id)
        if result.scope_supported:
            path = _config_path(result.target_id, session, ctx)
            lines.append(f"  {GREEN}✓{RESET} {name} {DIM}{path}{RESET}")
        else:
            lines.append(f"  {YELLOW}⚠{RESET} {name} - {result.reason}")
    return lines


def _render_scope_select(session: Session, ctx: RuntimeContext) -> list[str]:
    lines = [f"{BOLD}Configuration scope:{RESET}", ""]
    descriptions = {
        "user": "all projects for this user",
        "project": f"this project only ({ctx.cwd})",
    }
    for scope, description in descriptions.items():
        mark = "(•)" if scope == session.scope else "( )"
        lines.append(f"  {mark} {scope:<8} {DIM}{description}{RESET}")
    lines.append("")
    lines.extend(_render_validation(session, ctx))
    return lines


def _render_credentials(session: Session) -> list[str]:
    names = ", ".join(_display_name(session, target_id) for target_id in session.selected)
    lines = [f"{BOLD}Jira credentials for {names}{RESET}", ""]
    for field_name, label in FIELD_LABELS.items():
        value = getattr(session.form, field_name)
        if field_name == "password":
            value = "*" * len(value)
        cursor = CURSOR if field_name == session.field else NO_CURSOR
        caret = "█" if field_name == session.field else ""
        lines.append(f"{cursor}{label:<9} {value}{caret}")
    lines.append("")
    lines.append(f"{DIM}All fields are required. The URL must start with http:// or https://{RESET}")
    return lines


def _render_confirm(session: Session, ctx: RuntimeContext) -> list[str]:
    lines = [f"{BOLD}Review configuration ({session.scope} scope){RESET}", ""]
    lines.extend(_render_validation(session, ctx))
    lines.append("")
    lines.append(f"  Jira URL  {session.form.base_url}")
    lines.append(f"  Username  {session.form.username}")
    lines.append(f"  Password  {'*' * len(session.form.password)}")
    lines.append("")
    lines.append(f"{DIM}Each file is written independently: a failure on one tool does not roll back the others.{RESET}")
    lines.append(f"{DIM}Existing files are backed up first. If another program edits a file at the same time, the last write wins.{RESET}")
    lines.append("")
    lines.append(f"{BOLD}Write configuration? [y/n]{RESET}")
    return lines


def _render_installing(session: Session) -> list[str]:
    return [f"Writing configuration for {len(session.selected)} tool(s)..."]


def _render_result_line(session: Session, index: int) -> list[str]:
    result = session.results[index]
    name = _display_name(session, result.target_id)
    if result.success:
        lines = [f"  {GREEN}✓{RESET} {name}"]
        if result.config_path:
            lines.append(f"      Config file: {result.config_path}")
        if result.backup_name:
            lines.append(f"      Backup: {result.backup_name}")
        if result.updated_existing:
            lines.append(f"      {DIM}Existing Jira entry updated{RESET}")
    else:
        lines = [f"  {RED}✗{RESET} {name}: {result.message}"]
    return lines


def _render_results(session: Session) -> list[str]:
    succeeded = sum(1 for result in session.results if result.success)
    failed = len(session.results) - succeeded
    if session.view == "success":
        title = f"{GREEN}{BOLD}Configuration complete{RESET}"
    elif session.view == "error":
        title = f"{RED}{BOLD}Configuration failed{RESET}"
    else:
        title = f"{BOLD}Results{RESET}"

    lines = [title, ""]
    for index in range(len(session.results)):
        lines.extend(_render_result_line(session, index))
    if session.view == "results":
        lines.append("")
        summary = f"{succeeded}/{len(session.results)} tools configured"
        if failed:
            summary += f", {RED}{failed} failed{RESET}"
        lines.append(summary)
    if succeeded:
        lines.append("")
        lines.append("Restart the configured tools to load the Jira MCP server.")
    return lines


def render(session: Session, ctx: RuntimeContext) -> str:
    """Build a full-screen frame for the current view.

    ABOUTME: Lines are joined with CRLF because the terminal is in raw mode
    """
    view = session.view
    if view == "menu":
        body = _render_menu(session)
    elif view == "multi-select":
        body = _render_multi_select(session)
    elif view == "scope-select":
        body = _render_scope_select(session, ctx)
    elif view == "credentials":
        body = _render_credentials(session)
    elif view == "confirm":
        body = _render_confirm(session, ctx)
    elif view == "installing":
        body = _render_installing(session)
    else:
        body = _render_results(session)

    lines = _header() + body + _footer(session)
    return CLEAR_SCREEN + "\r\n".join(lines) + "\r\n"
