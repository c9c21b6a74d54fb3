# CLI interface for jira-mcp-installer
import argparse
import logging
import sys

from jira_mcp_installer import __version__
from jira_mcp_installer.batch import run_batch
from jira_mcp_installer.config import ENV_BASE_URL, load_settings
from jira_mcp_installer.detect import detect_installed_targets
from jira_mcp_installer.families import ConfigParseError
from jira_mcp_installer.inject import read_installed_entry
from jira_mcp_installer.models import SCOPES, Credentials, RuntimeContext
from jira_mcp_installer.registry import list_targets, resolve_config_location
from jira_mcp_installer.utils import validate_credentials, validate_targets

# ABOUTME: Exit codes
# 0 = success, 1 = partial success / nothing to configure, 2 = invalid input, 3 = fatal
EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def cmd_install(args: argparse.Namespace) -> int:
    """Execute the interactive installer.

    ABOUTME: Needs a real terminal; points to 'setup' otherwise
    """
    from jira_mcp_installer.tui.app import run_interactive

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        print("Error: the interactive installer needs a terminal.")
        print("Use 'jira-mcp-install setup --help' for non-interactive setup.")
        return EXIT_CONFIG_ERROR

    settings = load_settings(url_override=args.url)
    try:
        return run_interactive(settings, show_all=args.all)
    except ImportError:
        print("Error: interactive mode is not supported on this platform.")
        print("Use 'jira-mcp-install setup --help' for non-interactive setup.")
        return EXIT_CONFIG_ERROR
    except KeyboardInterrupt:
        return EXIT_SUCCESS


def cmd_setup(args: argparse.Namespace) -> int:
    """Execute non-interactive setup for one or more tools.

    ABOUTME: Validates credentials, then runs one batch over the given tools
    ABOUTME: Returns exit code based on results
    """
    print(f"jira-mcp-install setup v{__version__}")
    print()

    credentials = Credentials(
        base_url=args.base_url or "",
        username=args.username or "",
        password=args.password or "",
    )
    problems = validate_credentials(credentials)
    if problems:
        for problem in problems:
            print(f"Error: {problem}")
        return EXIT_CONFIG_ERROR

    # Keep order, drop repeats
    target_ids = list(dict.fromkeys(args.cli))

    for result in validate_targets(target_ids, args.scope):
        if not result.scope_supported:
            print(f"  Warning: {result.reason}")

    settings = load_settings()
    try:
        report = run_batch(target_ids, args.scope, credentials, settings=settings)
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL

    for result in report.results:
        if result.success:
            note = " (updated existing entry)" if result.updated_existing else ""
            print(f"  ✓ {result.target_id}{note}")
            print(f"      Config file: {result.config_path}")
            if result.backup_name:
                print(f"      Backup: {result.backup_name}")
        else:
            print(f"  ✗ {result.target_id}: {result.message}")

    print()
    print(report.summary())
    return EXIT_SUCCESS if report.all_succeeded else EXIT_PARTIAL


def cmd_list_clis(args: argparse.Namespace) -> int:
    """List supported tools, their config paths and detection state."""
    print(f"jira-mcp-install list-clis v{__version__}")
    print()

    ctx = RuntimeContext.current()
    for detected in detect_installed_targets(list_targets(), ctx):
        status = "detected" if detected.installed else "not detected"
        print(f"  {detected.id:<16} {detected.display_name} ({status})")
        for scope in SCOPES:
            location = resolve_config_location(detected.id, scope, ctx)
            path = location.path if location else "unsupported"
            print(f"      {scope:<8} {path}")
    return EXIT_SUCCESS


def cmd_status(args: argparse.Namespace) -> int:
    """Show which tools already have a Jira entry configured.

    ABOUTME: Never prints the password
    """
    print(f"jira-mcp-install status v{__version__} ({args.scope} scope)")
    print()

    ctx = RuntimeContext.current()
    configured = 0
    for target in list_targets():
        if not target.supports(args.scope):
            continue
        try:
            entry = read_installed_entry(target.id, args.scope, ctx)
        except (ConfigParseError, ValueError, OSError) as e:
            print(f"  ⚠ {target.display_name}: {e}")
            continue

        if entry is None:
            print(f"  - {target.display_name}: not configured")
        else:
            configured += 1
            base_url = entry.env.get(ENV_BASE_URL, "?")
            print(f"  ✓ {target.display_name}: {base_url}")

    print()
    print(f"Total: {configured} tool(s) configured")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jira-mcp-install",
        description="Configure the Jira MCP server in AI coding assistants"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"jira-mcp-install v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # install command (default)
    install_parser = subparsers.add_parser(
        "install",
        help="Interactive installer (default)"
    )
    # Accepted with or without the 'install' subcommand; SUPPRESS keeps the
    # subparser from resetting values given before it
    for target_parser, default_url, default_all in (
        (parser, None, False),
        (install_parser, argparse.SUPPRESS, argparse.SUPPRESS),
    ):
        target_parser.add_argument(
            "--url",
            default=default_url,
            help="Pre-fill the Jira base URL (overrides JIRA_MCP_URL)"
        )
        target_parser.add_argument(
            "--all",
            action="store_true",
            default=default_all,
            help="Also list tools that were not detected"
        )

    target_ids = [target.id for target in list_targets()]

    # setup command
    setup_parser = subparsers.add_parser(
        "setup",
        help="Configure one or more tools without prompts"
    )
    setup_parser.add_argument(
        "-c", "--cli",
        action="append",
        required=True,
        choices=target_ids,
        help="Target tool (repeat for several)"
    )
    setup_parser.add_argument(
        "-b", "--base-url",
        required=True,
        help="Jira base URL, e.g. https://jira.example.com"
    )
    setup_parser.add_argument(
        "-u", "--username",
        required=True,
        help="Jira username"
    )
    setup_parser.add_argument(
        "-p", "--password",
        required=True,
        help="Jira password"
    )
    setup_parser.add_argument(
        "-s", "--scope",
        choices=list(SCOPES),
        default="user",
        help="Configuration scope (default: user)"
    )

    # list-clis command
    subparsers.add_parser(
        "list-clis",
        help="List supported tools and their config files"
    )

    # status command
    status_parser = subparsers.add_parser(
        "status",
        help="Show which tools already have Jira configured"
    )
    status_parser.add_argument(
        "-s", "--scope",
        choices=list(SCOPES),
        default="user",
        help="Configuration scope (default: user)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "setup":
            return cmd_setup(args)
        elif args.command == "list-clis":
            return cmd_list_clis(args)
        elif args.command == "status":
            return cmd_status(args)
        else:
            return cmd_install(args)
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
