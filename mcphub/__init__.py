"""MCP Hub - shared MCP server registry for AI CLIs.

Keeps one registry of MCP servers and links it into the configuration
directory of every enabled AI CLI (Cursor, VS Code, Neovim, Claude).
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "HubConfig",
    "EnvSettings",
    "load_config",
    "ServerItem",
    "scan_registry",
    "SyncEngine",
    "SyncRun",
    "SyncReport",
    "HubError",
    "ConfigError",
    "LinkError",
    "ProfileError",
    "ReportError",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("HubConfig", "EnvSettings", "load_config"):
        from mcphub import config

        return getattr(config, name)
    if name in ("ServerItem", "scan_registry"):
        from mcphub.sync import item

        return getattr(item, name)
    if name in ("SyncEngine", "SyncRun"):
        from mcphub.sync import engine

        return getattr(engine, name)
    if name == "SyncReport":
        from mcphub.sync.report import SyncReport

        return SyncReport
    if name in ("HubError", "ConfigError", "LinkError", "ProfileError", "ReportError"):
        from mcphub import errors

        return getattr(errors, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
