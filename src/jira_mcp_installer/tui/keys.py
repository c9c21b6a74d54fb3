# Terminal key input for the interactive installer
import os
import select
import sys

from jira_mcp_installer.tui.state import Event, KeyEvent, PasteEvent

# ABOUTME: Terminal codes for raw input handling
ESC = "\x1b"
PASTE_START = "\x1b[200~"
PASTE_END = "\x1b[201~"
ENABLE_BRACKETED_PASTE = "\x1b[?2004h"
DISABLE_BRACKETED_PASTE = "\x1b[?2004l"
ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"

# CSI / SS3 sequences -> (name, shift)
ESCAPE_SEQUENCES: dict[str, tuple[str, bool]] = {
    "\x1b[A": ("up", False),
    "\x1b[B": ("down", False),
    "\x1b[C": ("right", False),
    "\x1b[D": ("left", False),
    "\x1bOA": ("up", False),
    "\x1bOB": ("down", False),
    "\x1bOC": ("right", False),
    "\x1bOD": ("left", False),
    "\x1b[H": ("home", False),
    "\x1b[F": ("end", False),
    "\x1bOH": ("home", False),
    "\x1bOF": ("end", False),
    "\x1b[1~": ("home", False),
    "\x1b[2~": ("insert", False),
    "\x1b[3~": ("delete", False),
    "\x1b[4~": ("end", False),
    "\x1b[5~": ("pageup", False),
    "\x1b[6~": ("pagedown", False),
    "\x1b[Z": ("tab", True),
}


def _decode_char(ch: str) -> KeyEvent:
    if ch in ("\r", "\n"):
        return KeyEvent("return")
    if ch == "\t":
        return KeyEvent("tab")
    if ch in ("\x7f", "\x08"):
        return KeyEvent("backspace")
    if ch == " ":
        return KeyEvent("space")
    code = ord(ch)
    if 1 <= code <= 26:
        # Ctrl+A .. Ctrl+Z
        return KeyEvent(chr(code + 96), ctrl=True)
    return KeyEvent(ch)


def decode_input(data: str) -> list[Event]:
    """Decode raw terminal input into key and paste events.

    ABOUTME: Bracketed paste blocks become a single PasteEvent
    ABOUTME: A lone ESC is the escape key; ESC + char is Alt/Meta + char
    ABOUTME: Unknown escape sequences are dropped
    """
    events: list[Event] = []
    i = 0

    while i < len(data):
        if data.startswith(PASTE_START, i):
            start = i + len(PASTE_START)
            end = data.find(PASTE_END, start)
            if end == -1:
                events.append(PasteEvent(data[start:]))
                break
            events.append(PasteEvent(data[start:end]))
            i = end + len(PASTE_END)
            continue

        ch = data[i]
        if ch != ESC:
            events.append(_decode_char(ch))
            i += 1
            continue

        for sequence, (name, shift) in ESCAPE_SEQUENCES.items():
            if data.startswith(sequence, i):
                events.append(KeyEvent(name, shift=shift))
                i += len(sequence)
                break
        else:
            rest = data[i + 1:i + 2]
            if not rest or rest == ESC:
                events.append(KeyEvent("escape"))
                i += 1
            elif rest in ("[", "O"):
                # Skip an unrecognised CSI/SS3 sequence up to its final byte
                j = i + 2
                while j < len(data) and not ("@" <= data[j] <= "~"):
                    j += 1
                i = j + 1
            else:
                key = _decode_char(rest)
                events.append(KeyEvent(key.name, ctrl=key.ctrl, meta=True))
                i += 2

    return events


class RawTerminal:
    """Context manager that puts the terminal in raw mode.

    ABOUTME: Uses termios/tty; enables bracketed paste and the alternate screen
    ABOUTME: Restores the original terminal settings on exit, even on errors
    """

    def __init__(self, stdin_fd: int | None = None, stdout=None) -> None:
        self._fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._out = stdout or sys.stdout
        self._saved_attrs: list | None = None
        self._pending = ""

    def __enter__(self) -> "RawTerminal":
        import termios
        import tty

        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
        self._out.write(ENTER_ALT_SCREEN + HIDE_CURSOR + ENABLE_BRACKETED_PASTE)
        self._out.flush()
        return self

    def __exit__(self, *exc_info) -> None:
        import termios

        self._out.write(DISABLE_BRACKETED_PASTE + SHOW_CURSOR + LEAVE_ALT_SCREEN)
        self._out.flush()
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)

    def write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _read_chunk(self, timeout: float | None) -> str:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return ""
        return os.read(self._fd, 4096).decode("utf-8", errors="replace")

    def read_events(self) -> list[Event]:
        """Block until at least one event is available and return it decoded.

        ABOUTME: Keeps reading while a paste block is unterminated
        ABOUTME: Waits briefly after a lone ESC so arrow keys are not split
        """
        data = self._pending + self._read_chunk(None)
        self._pending = ""

        while PASTE_START in data and PASTE_END not in data[data.rfind(PASTE_START):]:
            chunk = self._read_chunk(1.0)
            if not chunk:
                break
            data += chunk

        if data == ESC:
            data += self._read_chunk(0.05)

        return decode_input(data)
