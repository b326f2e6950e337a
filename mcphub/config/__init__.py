# MCP Hub Configuration Module
# Handles configuration loading, validation, defaults and environment flags

from mcphub.config.defaults import DEFAULT_CONFIG, DEFAULT_ENV, default_config, generate_default_config
from mcphub.config.env import EnvSettings, enabled_key
from mcphub.config.loader import (
    ensure_config_exists,
    get_config_path,
    get_hub_root,
    load_config,
    validate_config_file,
)
from mcphub.config.schema import (
    SLUG_PATTERN,
    ClisConfig,
    HubConfig,
    PathsConfig,
    ServersConfig,
)

__all__ = [
    # Schema
    "HubConfig",
    "ServersConfig",
    "ClisConfig",
    "PathsConfig",
    "SLUG_PATTERN",
    # Environment
    "EnvSettings",
    "enabled_key",
    # Loader
    "load_config",
    "get_config_path",
    "get_hub_root",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "DEFAULT_ENV",
    "default_config",
    "generate_default_config",
]
