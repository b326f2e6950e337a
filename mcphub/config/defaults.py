# MCP Hub Default Configuration
# Full default configuration as Python dict and YAML generator

from copy import deepcopy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "servers": {
        "categories": ["ai", "development", "database", "cloud", "custom"],
        "default_config": {
            "enabled": True,
            "auto_start": False,
            "log_level": "info",
        },
    },
    "clis": {
        "supported": ["cursor", "vscode", "neovim", "claude"],
        "config_paths": {
            "cursor": "~/.cursor",
            "vscode": "~/.vscode",
            "neovim": "~/.config/nvim",
            "claude": "~/.claude",
        },
    },
    "paths": {
        "servers_dir": "servers",
        "profiles_dir": "cli-profiles",
        "logs_dir": "logs",
        "env_file": "configs/env/.env",
    },
}

DEFAULT_ENV = """\
# MCP Hub environment flags
# One <NAME>_ENABLED flag per supported CLI
CURSOR_ENABLED=false
VSCODE_ENABLED=false
NEOVIM_ENABLED=false
CLAUDE_ENABLED=false

AUTO_SYNC=false
SYNC_INTERVAL=300000
"""


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the default configuration."""
    return deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """
    Generate the default configuration file content.

    Returns:
        YAML document with a short header comment.
    """
    header = (
        "# MCP Hub configuration\n"
        "# servers.categories: directories scanned under servers/\n"
        "# clis.config_paths: where each CLI's mcp_servers link is created\n\n"
    )
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
