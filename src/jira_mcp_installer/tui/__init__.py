# ABOUTME: Interactive terminal installer
# ABOUTME: state.py is terminal-free; keys.py/render.py/app.py own the terminal
from jira_mcp_installer.tui.state import (
    KeyEvent,
    PasteEvent,
    Session,
    finish_install,
    handle_event,
    new_session,
)

__all__ = [
    "KeyEvent",
    "PasteEvent",
    "Session",
    "finish_install",
    "handle_event",
    "new_session",
]
