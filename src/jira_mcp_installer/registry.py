# Static catalog of supported targets
from jira_mcp_installer.families import get_family
from jira_mcp_installer.models import (
    ConfigLocation,
    PathSpec,
    RuntimeContext,
    Scope,
    TargetDescriptor,
)

# ABOUTME: Key of this service's entry inside every wrapper map
ENTRY_KEY = "jira"


class UnknownTargetError(KeyError):
    """Raised when a target id is not in the registry."""


def _home(*parts: str) -> PathSpec:
    return PathSpec("home", parts)


def _project(*parts: str) -> PathSpec:
    return PathSpec("project", parts)


def _app_config(*parts: str) -> PathSpec:
    return PathSpec("app_config", parts)


# ABOUTME: Immutable, ordered table; adding a target is a pure data change
TARGETS: tuple[TargetDescriptor, ...] = (
    TargetDescriptor(
        id="claude-code",
        display_name="Claude Code",
        family="mcp-servers",
        scopes={"user": _home(".claude.json"), "project": _project(".mcp.json")},
        binaries=("claude",),
        markers=(_home(".claude"), _home(".claude.json")),
    ),
    TargetDescriptor(
        id="claude-desktop",
        display_name="Claude Desktop",
        family="mcp-servers",
        scopes={"user": _app_config("Claude", "claude_desktop_config.json")},
        markers=(_app_config("Claude"),),
    ),
    TargetDescriptor(
        id="copilot",
        display_name="GitHub Copilot (VS Code)",
        family="vscode",
        scopes={
            "user": _app_config("Code", "User", "mcp.json"),
            "project": _project(".vscode", "mcp.json"),
        },
        binaries=("code",),
        markers=(_app_config("Code"),),
    ),
    TargetDescriptor(
        id="cursor",
        display_name="Cursor",
        family="mcp-servers",
        scopes={
            "user": _home(".cursor", "mcp.json"),
            "project": _project(".cursor", "mcp.json"),
        },
        binaries=("cursor",),
        markers=(_home(".cursor"),),
    ),
    TargetDescriptor(
        id="windsurf",
        display_name="Windsurf",
        family="mcp-servers",
        scopes={
            "user": _home(".codeium", "windsurf", "mcp_config.json"),
            "project": _project(".windsurf", "mcp_config.json"),
        },
        binaries=("windsurf",),
        markers=(_home(".codeium", "windsurf"),),
    ),
    TargetDescriptor(
        id="roo-code",
        display_name="Roo Code",
        family="mcp-servers",
        scopes={
            "user": _home(".roo", "mcp.json"),
            "project": _project(".roo", "mcp.json"),
        },
        markers=(_home(".roo"),),
    ),
    TargetDescriptor(
        id="zed",
        display_name="Zed",
        family="context-servers",
        scopes={
            "user": _home(".config", "zed", "settings.json"),
            "project": _project(".zed", "settings.json"),
        },
        binaries=("zed",),
        markers=(_home(".config", "zed"),),
    ),
    TargetDescriptor(
        id="factory-droid",
        display_name="Factory Droid",
        family="mcp-servers",
        scopes={
            "user": _home(".factory", "mcp.json"),
            "project": _project(".factory", "mcp.json"),
        },
        binaries=("droid",),
        markers=(_home(".factory"),),
    ),
    TargetDescriptor(
        id="opencode",
        display_name="OpenCode",
        family="opencode",
        scopes={
            "user": _home(".config", "opencode", "opencode.json"),
            "project": _project("opencode.json"),
        },
        binaries=("opencode",),
        markers=(_home(".config", "opencode"),),
    ),
    TargetDescriptor(
        id="gemini",
        display_name="Gemini CLI",
        family="mcp-servers",
        scopes={"user": _home(".gemini", "settings.json")},
        binaries=("gemini",),
        markers=(_home(".gemini"),),
    ),
    TargetDescriptor(
        id="codex",
        display_name="Codex CLI",
        family="codex",
        scopes={"user": _home(".codex", "config.toml")},
        binaries=("codex",),
        markers=(_home(".codex"),),
    ),
)

_BY_ID: dict[str, TargetDescriptor] = {target.id: target for target in TARGETS}


def list_targets() -> tuple[TargetDescriptor, ...]:
    """Return every supported target in display order."""
    return TARGETS


def get_target(target_id: str) -> TargetDescriptor:
    """Look up a target by id.

    Raises:
        UnknownTargetError: If the id is not registered
    """
    try:
        return _BY_ID[target_id]
    except KeyError:
        known = ", ".join(_BY_ID)
        raise UnknownTargetError(f"Unknown target '{target_id}' (known: {known})") from None


def resolve_config_location(
    target_id: str,
    scope: Scope,
    ctx: RuntimeContext | None = None,
) -> ConfigLocation | None:
    """Resolve where and how a target stores its config for a scope.

    ABOUTME: Returns None when the target does not support the scope
    ABOUTME: Computed on demand from the static table plus the runtime context

    Args:
        target_id: Registered target id
        scope: "user" or "project"
        ctx: Runtime context (defaults to the current process environment)

    Returns:
        ConfigLocation, or None if the scope is unsupported

    Raises:
        UnknownTargetError: If the id is not registered
    """
    target = get_target(target_id)
    path_spec = target.scopes.get(scope)
    if path_spec is None:
        return None

    ctx = ctx or RuntimeContext.current()
    family = get_family(target.family)
    return ConfigLocation(
        path=path_spec.resolve(ctx),
        wrapper_key=family.wrapper_key,
        entry_key=ENTRY_KEY,
        family=family.name,
    )
