# ABOUTME: Validation utilities for credentials and target selections
# ABOUTME: Pure functions; nothing here touches the file system
import re
from collections.abc import Iterable
from urllib.parse import urlparse

from jira_mcp_installer.models import Credentials, Scope, ValidationResult
from jira_mcp_installer.registry import UnknownTargetError, get_target

# ABOUTME: scheme://host[:port][/path], host made of letters, digits, dots and dashes
URL_PATTERN = re.compile(r"^https?://[a-zA-Z0-9]([a-zA-Z0-9.-]*[a-zA-Z0-9])?(:[0-9]+)?(/.*)?$")


def validate_url(url: str) -> str | None:
    """Validate that a Jira base URL is properly formatted.

    ABOUTME: Requires HTTP or HTTPS scheme and a host
    ABOUTME: Returns None if URL valid, an error message otherwise

    Examples:
        >>> validate_url("https://jira.example.com")
        >>> validate_url("not-a-url")
        'URL must use HTTP or HTTPS scheme: not-a-url'
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return f"URL must use HTTP or HTTPS scheme: {url}"
    if not parsed.netloc:
        return f"URL missing host/domain: {url}"
    if not URL_PATTERN.match(url):
        return f"Invalid URL format: {url}"
    return None


def validate_credentials(credentials: Credentials) -> list[str]:
    """List every problem that blocks the credentials form from advancing.

    Args:
        credentials: Form contents

    Returns:
        Human-readable problems; empty when the form may advance
    """
    problems: list[str] = []

    if not credentials.base_url:
        problems.append("Jira URL is required")
    if not credentials.username:
        problems.append("Username is required")
    if not credentials.password:
        problems.append("Password is required")

    if credentials.base_url:
        url_error = validate_url(credentials.base_url)
        if url_error:
            problems.append(url_error)

    return problems


def validate_targets(target_ids: Iterable[str], scope: Scope) -> list[ValidationResult]:
    """Check each selected target supports the chosen scope.

    ABOUTME: Pure function of the registry and the scope
    ABOUTME: Unsupported targets are reported, never dropped

    Args:
        target_ids: Selected target ids, in selection order
        scope: Scope chosen for the batch

    Returns:
        One ValidationResult per target id, same order
    """
    results: list[ValidationResult] = []

    for target_id in target_ids:
        try:
            target = get_target(target_id)
        except UnknownTargetError:
            results.append(ValidationResult(
                target_id=target_id,
                scope=scope,
                scope_supported=False,
                reason=f"Unknown target '{target_id}'",
            ))
            continue

        if target.supports(scope):
            results.append(ValidationResult(target_id=target_id, scope=scope, scope_supported=True))
        else:
            supported = ", ".join(target.supported_scopes)
            results.append(ValidationResult(
                target_id=target_id,
                scope=scope,
                scope_supported=False,
                reason=f"{target.display_name} does not support {scope} scope (supports: {supported})",
            ))

    return results
