# jira-mcp-installer - Jira MCP configuration installer for AI coding assistants
# ABOUTME: Version information
__version__ = "1.0.0"

# ABOUTME: Export core data models and the registry/injection entry points
from jira_mcp_installer.batch import BatchReport, run_batch
from jira_mcp_installer.detect import detect_installed_targets
from jira_mcp_installer.inject import inject
from jira_mcp_installer.models import (
    ConfigLocation,
    Credentials,
    DetectedTarget,
    InjectionResult,
    RuntimeContext,
    ServiceEntry,
    TargetDescriptor,
    ValidationResult,
)
from jira_mcp_installer.registry import ENTRY_KEY, list_targets, resolve_config_location
from jira_mcp_installer.utils import validate_targets

__all__ = [
    "__version__",
    "BatchReport",
    "ConfigLocation",
    "Credentials",
    "DetectedTarget",
    "ENTRY_KEY",
    "InjectionResult",
    "RuntimeContext",
    "ServiceEntry",
    "TargetDescriptor",
    "ValidationResult",
    "detect_installed_targets",
    "inject",
    "list_targets",
    "resolve_config_location",
    "run_batch",
    "validate_targets",
]
