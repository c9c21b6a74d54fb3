# Allows running the installer as `python -m jira_mcp_installer`
import sys

from jira_mcp_installer.cli import main

sys.exit(main())
