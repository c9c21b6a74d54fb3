# Core data models for jira-mcp-installer
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

Scope = Literal["user", "project"]
SCOPES: tuple[Scope, ...] = ("user", "project")

FileFormat = Literal["json", "toml"]


@dataclass(frozen=True)
class Credentials:
    """Jira credentials collected once per session.

    ABOUTME: Uses frozen dataclass so a batch cannot mutate them midway
    """
    base_url: str
    username: str
    password: str

    def is_complete(self) -> bool:
        """True when all three fields are non-empty."""
        return bool(self.base_url and self.username and self.password)


@dataclass(frozen=True)
class ServiceEntry:
    """Canonical in-memory shape of one MCP server entry.

    ABOUTME: Every config family converts to and from this shape
    """
    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RuntimeContext:
    """Snapshot of the process environment used to resolve paths.

    ABOUTME: Passed explicitly so tests can point home/cwd at tmp dirs
    """
    home: Path
    cwd: Path
    platform: str = sys.platform
    appdata: Path | None = None
    search_path: str | None = None

    @classmethod
    def current(cls) -> "RuntimeContext":
        appdata = os.environ.get("APPDATA")
        return cls(
            home=Path.home(),
            cwd=Path.cwd(),
            platform=sys.platform,
            appdata=Path(appdata) if appdata else None,
            search_path=os.environ.get("PATH"),
        )

    @property
    def app_config_dir(self) -> Path:
        """Per-user application config directory for this platform."""
        if self.platform == "darwin":
            return self.home / "Library" / "Application Support"
        if self.platform == "win32":
            return self.appdata or self.home / "AppData" / "Roaming"
        return self.home / ".config"


@dataclass(frozen=True)
class PathSpec:
    """Declarative recipe for a config or marker path.

    ABOUTME: base selects home dir, project dir (cwd) or platform app-config dir
    """
    base: Literal["home", "project", "app_config"]
    parts: tuple[str, ...]

    def resolve(self, ctx: RuntimeContext) -> Path:
        if self.base == "home":
            root = ctx.home
        elif self.base == "project":
            root = ctx.cwd
        else:
            root = ctx.app_config_dir
        return root.joinpath(*self.parts)


@dataclass(frozen=True)
class TargetDescriptor:
    """One supported AI tool whose config file can be modified.

    ABOUTME: Scopes absent from the mapping are unsupported for the target
    ABOUTME: binaries and markers are detection evidence, probed in order
    """
    id: str
    display_name: str
    family: str
    scopes: Mapping[Scope, PathSpec]
    binaries: tuple[str, ...] = ()
    markers: tuple[PathSpec, ...] = ()

    def __post_init__(self) -> None:
        if not self.scopes:
            raise ValueError(f"Target '{self.id}' must support at least one scope")
        # Read-only copy; targets are shared module-level constants
        object.__setattr__(self, "scopes", MappingProxyType(dict(self.scopes)))

    def supports(self, scope: Scope) -> bool:
        return scope in self.scopes

    @property
    def supported_scopes(self) -> tuple[Scope, ...]:
        return tuple(scope for scope in SCOPES if scope in self.scopes)


@dataclass(frozen=True)
class ConfigLocation:
    """Resolved file location and shape for one (target, scope) pair."""
    path: Path
    wrapper_key: str
    entry_key: str
    family: str


@dataclass(frozen=True)
class DetectedTarget:
    """A target plus the outcome of probing for it."""
    target: TargetDescriptor
    installed: bool
    evidence_path: Path | None = None

    @property
    def id(self) -> str:
        return self.target.id

    @property
    def display_name(self) -> str:
        return self.target.display_name


@dataclass(frozen=True)
class InjectionResult:
    """Outcome of injecting the service entry into one target.

    ABOUTME: backup_name is set only when an existing file was copied first
    """
    target_id: str
    success: bool
    config_path: Path | None = None
    backup_name: str | None = None
    message: str | None = None
    updated_existing: bool = False


@dataclass(frozen=True)
class ValidationResult:
    """Whether a selected target supports the chosen scope."""
    target_id: str
    scope: Scope
    scope_supported: bool
    reason: str | None = None


@runtime_checkable
class ConfigFamily(Protocol):
    """Protocol for a family of config files sharing one schema.

    ABOUTME: Defines the single normalization pair each family implements
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    @property
    def name(self) -> str:
        """Family identifier referenced by TargetDescriptor.family."""
        ...

    @property
    def wrapper_key(self) -> str:
        """Top-level key holding all server entries."""
        ...

    @property
    def file_format(self) -> FileFormat:
        """Serialization format of the config file."""
        ...

    def encode(self, entry: ServiceEntry) -> dict[str, Any]:
        """Convert the canonical entry to this family's on-disk shape."""
        ...

    def decode(self, name: str, data: dict[str, Any]) -> ServiceEntry:
        """Convert this family's on-disk shape to the canonical entry."""
        ...
