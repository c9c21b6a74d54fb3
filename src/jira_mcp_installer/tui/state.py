# Interactive installer state machine
"""Terminal-free state machine for the interactive installer.

Every transition takes the current ``Session`` and one input event and
returns the next ``Session``. Sessions are frozen, so each handler builds a
new one with ``dataclasses.replace``; nothing here reads the keyboard, writes
the screen or touches config files. The one side-effecting step, running the
batch, happens outside: the app loop sees ``view == "installing"``, runs the
batch and hands the report to ``finish_install``.

Modal priority: result views accept only quit, ``confirm`` accepts only
yes/no/escape, and ``installing`` accepts nothing at all.
"""
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Literal

from jira_mcp_installer.batch import BatchReport
from jira_mcp_installer.models import (
    Credentials,
    DetectedTarget,
    InjectionResult,
    Scope,
    SCOPES,
    ValidationResult,
)
from jira_mcp_installer.utils.validation import validate_credentials, validate_targets

View = Literal[
    "menu",
    "multi-select",
    "scope-select",
    "credentials",
    "confirm",
    "installing",
    "results",
    "success",
    "error",
]
Field = Literal["base_url", "username", "password"]
Flow = Literal["single", "batch"]

FIELDS: tuple[Field, ...] = ("base_url", "username", "password")

QUIT_KEYS = frozenset({"q", "Q", "escape"})
UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})

# Keys that never insert text in the credentials form
NAMED_KEYS = frozenset({
    "up", "down", "left", "right", "home", "end", "pageup", "pagedown",
    "delete", "insert", "tab", "return", "escape", "backspace",
})
FUNCTION_KEY = re.compile(r"^f\d{1,2}$")
CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

EMPTY_FORM = Credentials(base_url="", username="", password="")


@dataclass(frozen=True)
class KeyEvent:
    """One key press, already decoded from terminal bytes."""
    name: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False


@dataclass(frozen=True)
class PasteEvent:
    """Text delivered by a bracketed paste."""
    text: str


Event = KeyEvent | PasteEvent


@dataclass(frozen=True)
class Session:
    """Mutable-by-replacement session state owned by the state machine.

    ABOUTME: targets is the detection snapshot shown in the menu
    ABOUTME: selected keeps menu order so batches run in a stable order
    """
    targets: tuple[DetectedTarget, ...]
    view: View = "menu"
    cursor: int = 0
    selected: tuple[str, ...] = ()
    scope: Scope = "user"
    flow: Flow = "batch"
    form: Credentials = EMPTY_FORM
    field: Field = "base_url"
    validation: tuple[ValidationResult, ...] = ()
    results: tuple[InjectionResult, ...] = ()
    quit: bool = False

    @property
    def current_value(self) -> str:
        return getattr(self.form, self.field)


def new_session(
    detected: Sequence[DetectedTarget],
    prefill_url: str | None = None,
    show_all: bool = False,
) -> Session:
    """Create the initial session from a detection snapshot.

    ABOUTME: Undetected targets are only listed when show_all is set
    ABOUTME: A pre-filled URL moves the initial focus to the username field
    """
    targets = tuple(d for d in detected if show_all or d.installed)
    form = replace(EMPTY_FORM, base_url=prefill_url or "")
    return Session(
        targets=targets,
        form=form,
        field="username" if prefill_url else "base_url",
    )


def _order_selection(session: Session, ids: set[str]) -> tuple[str, ...]:
    return tuple(t.id for t in session.targets if t.id in ids)


def _validated(session: Session) -> Session:
    return replace(session, validation=tuple(validate_targets(session.selected, session.scope)))


def _set_field_value(session: Session, value: str) -> Session:
    return replace(session, form=replace(session.form, **{session.field: value}))


def _move_field(session: Session, step: int) -> Session:
    index = FIELDS.index(session.field) + step
    index = max(0, min(len(FIELDS) - 1, index))
    return replace(session, field=FIELDS[index])


def delete_word(value: str) -> str:
    """Drop the last word, like Ctrl+W in a shell."""
    trimmed = value.rstrip()
    last_space = trimmed.rfind(" ")
    return "" if last_space == -1 else trimmed[: last_space + 1]


def clean_text(text: str) -> str:
    """Strip control characters from typed or pasted text."""
    return CONTROL_CHARS.sub("", text)


def _start_single(session: Session, index: int) -> Session:
    target = session.targets[index].target
    scope: Scope = "user" if target.supports("user") else target.supported_scopes[0]
    return _validated(replace(
        session,
        view="credentials",
        cursor=index,
        selected=(target.id,),
        scope=scope,
        flow="single",
    ))


def on_menu(session: Session, event: Event) -> Session:
    if not isinstance(event, KeyEvent):
        return session

    name = event.name
    if name in QUIT_KEYS:
        return replace(session, quit=True)
    if not session.targets:
        return session
    if name in UP_KEYS:
        return replace(session, cursor=max(0, session.cursor - 1))
    if name in DOWN_KEYS:
        return replace(session, cursor=min(len(session.targets) - 1, session.cursor + 1))
    if len(name) == 1 and name in "123456789":
        index = int(name) - 1
        if index < len(session.targets):
            return _start_single(session, index)
        return session
    if name == "return":
        return _start_single(session, session.cursor)
    if name in ("m", "space"):
        selected = session.selected or (session.targets[session.cursor].id,)
        return replace(session, view="multi-select", selected=selected, flow="batch", validation=())
    return session


def on_multi_select(session: Session, event: Event) -> Session:
    if not isinstance(event, KeyEvent):
        return session

    name = event.name
    if name in UP_KEYS:
        return replace(session, cursor=max(0, session.cursor - 1))
    if name in DOWN_KEYS:
        return replace(session, cursor=min(len(session.targets) - 1, session.cursor + 1))
    if name == "space":
        current = session.targets[session.cursor].id
        ids = set(session.selected)
        ids.symmetric_difference_update({current})
        return replace(session, selected=_order_selection(session, ids), validation=())
    if name == "a":
        return replace(session, selected=tuple(t.id for t in session.targets), validation=())
    if name == "n":
        return replace(session, selected=(), validation=())
    if name == "return":
        if not session.selected:
            return session
        return _validated(replace(session, view="scope-select", flow="batch"))
    if name == "escape":
        return replace(session, view="menu")
    return session


def on_scope_select(session: Session, event: Event) -> Session:
    if not isinstance(event, KeyEvent):
        return session

    name = event.name
    if name in ("up", "down", "left", "right", "space", "tab", "k", "j"):
        next_scope = SCOPES[(SCOPES.index(session.scope) + 1) % len(SCOPES)]
        return _validated(replace(session, scope=next_scope))
    if name == "return":
        return _validated(replace(session, view="credentials"))
    if name == "escape":
        return replace(session, view="multi-select", validation=())
    return session


def on_credentials(session: Session, event: Event) -> Session:
    if isinstance(event, PasteEvent):
        text = clean_text(event.text).strip()
        if not text:
            return session
        return _set_field_value(session, session.current_value + text)

    name = event.name
    if name == "up" or (name == "tab" and event.shift):
        return _move_field(session, -1)
    if name in ("down", "tab"):
        return _move_field(session, 1)
    if name == "return":
        if validate_credentials(session.form):
            return session
        return _validated(replace(session, view="confirm"))
    if name == "escape":
        return replace(
            session,
            view="menu",
            form=EMPTY_FORM,
            field="base_url",
            selected=(),
            validation=(),
            flow="batch",
        )
    if name == "backspace":
        return _set_field_value(session, session.current_value[:-1])
    if event.ctrl and name == "w":
        return _set_field_value(session, delete_word(session.current_value))
    if event.ctrl and name == "u":
        return _set_field_value(session, "")
    if event.ctrl or event.meta:
        return session
    if name == "space":
        return _set_field_value(session, session.current_value + " ")
    if name in NAMED_KEYS or FUNCTION_KEY.match(name):
        return session

    text = clean_text(name)
    if not text:
        return session
    return _set_field_value(session, session.current_value + text)


def on_confirm(session: Session, event: Event) -> Session:
    if not isinstance(event, KeyEvent):
        return session
    if event.name in ("y", "Y"):
        return replace(session, view="installing", results=())
    if event.name in ("n", "N", "escape"):
        return replace(session, view="credentials")
    return session


def on_installing(session: Session, event: Event) -> Session:
    return session


def on_result(session: Session, event: Event) -> Session:
    if isinstance(event, KeyEvent) and event.name in QUIT_KEYS:
        return replace(session, quit=True)
    return session


TRANSITIONS: dict[str, Callable[[Session, Event], Session]] = {
    "menu": on_menu,
    "multi-select": on_multi_select,
    "scope-select": on_scope_select,
    "credentials": on_credentials,
    "confirm": on_confirm,
    "installing": on_installing,
    "results": on_result,
    "success": on_result,
    "error": on_result,
}


def handle_event(session: Session, event: Event) -> Session:
    """Apply one input event and return the next session.

    ABOUTME: Ctrl+C quits from every view except installing
    """
    if session.quit or session.view == "installing":
        return session
    if isinstance(event, KeyEvent) and event.ctrl and event.name == "c":
        return replace(session, quit=True)
    return TRANSITIONS[session.view](session, event)


def finish_install(session: Session, report: BatchReport) -> Session:
    """Leave the installing view with the batch results.

    ABOUTME: Single-target flows land on success or error, batches on results
    """
    results = tuple(report.results)
    if session.flow == "single" and len(results) == 1:
        view: View = "success" if results[0].success else "error"
    else:
        view = "results"
    return replace(session, view=view, results=results)
