# MCP Hub Output Module
# Rich console output

from mcphub.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
