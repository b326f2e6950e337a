# MCP Hub Configuration Loader
# Load and validate hub configuration files

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from mcphub.config.defaults import default_config, generate_default_config
from mcphub.config.schema import HubConfig
from mcphub.errors import ConfigError

CONFIG_CANDIDATES = ("config.json", "config.yaml", "config.yml")


def get_hub_root(hub_root: Optional[Path] = None) -> Path:
    """Get the hub root: explicit value, then MCP_HUB_ROOT, then cwd."""
    if hub_root is not None:
        return Path(hub_root).expanduser()
    env_root = os.environ.get("MCP_HUB_ROOT")
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


def get_config_path(hub_root: Optional[Path] = None) -> Path:
    """
    Get the path to the configuration file.

    MCP_HUB_CONFIG wins; otherwise the first existing candidate in
    ``<hub>/configs/`` is used, falling back to ``config.yaml``.
    """
    env_path = os.environ.get("MCP_HUB_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    config_dir = get_hub_root(hub_root) / "configs"
    for name in CONFIG_CANDIDATES:
        candidate = config_dir / name
        if candidate.exists():
            return candidate
    return config_dir / "config.yaml"


def _read_config_data(config_path: Path) -> dict[str, Any]:
    """Read a JSON or YAML config file into a dict."""
    try:
        with open(config_path, encoding="utf-8") as f:
            # JSON documents are valid YAML
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid configuration syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {config_path}")
    return data


def load_config(config_path: Optional[Path] = None, hub_root: Optional[Path] = None) -> HubConfig:
    """
    Load configuration from a JSON or YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        hub_root: Optional hub root. Used when the file does not set one.

    Returns:
        HubConfig: Validated configuration object.

    Raises:
        ConfigError: If the file is missing, unparseable or invalid.
    """
    if config_path is None:
        config_path = get_config_path(hub_root)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}\nRun 'mcphub config init' to create one.")

    data = _read_config_data(config_path)
    merged = _merge_with_defaults(data)
    merged.setdefault("hub_root", str(get_hub_root(hub_root)))

    try:
        return HubConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration {config_path}:\n" + "\n".join(_format_errors(e))) from e


def ensure_config_exists(
    hub_root: Optional[Path] = None, config_path: Optional[Path] = None
) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Args:
        hub_root: Optional hub root used to locate the default file.
        config_path: Explicit file to ensure instead of the default.

    Returns:
        Tuple of (config_path, was_created).

    Raises:
        ConfigError: If the file cannot be created.
    """
    if config_path is None:
        config_path = get_config_path(hub_root)

    if config_path.exists():
        return config_path, False

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_default_config(), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot create configuration {config_path}: {e}") from e
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without loading it into the system.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        data = _read_config_data(config_path)
    except ConfigError as e:
        return False, [str(e)]

    if not data:
        return False, ["Configuration file is empty"]

    merged = _merge_with_defaults(data)
    merged.setdefault("hub_root", str(config_path.parent.parent))

    try:
        HubConfig.model_validate(merged)
    except ValidationError as e:
        return False, _format_errors(e)

    return True, []


def _format_errors(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        loc = " -> ".join(str(part) for part in item["loc"])
        messages.append(f"{loc}: {item['msg']}")
    return messages


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = default_config()

    if "hub_root" in data:
        result["hub_root"] = data["hub_root"]

    if "servers" in data and isinstance(data["servers"], dict):
        servers = data["servers"]
        if "categories" in servers:
            result["servers"]["categories"] = servers["categories"]
        if isinstance(servers.get("default_config"), dict):
            result["servers"]["default_config"] = {
                **result["servers"]["default_config"],
                **servers["default_config"],
            }

    if "clis" in data and isinstance(data["clis"], dict):
        clis = data["clis"]
        if "supported" in clis:
            result["clis"]["supported"] = clis["supported"]
        if isinstance(clis.get("config_paths"), dict):
            result["clis"]["config_paths"] = {**result["clis"]["config_paths"], **clis["config_paths"]}

    if "paths" in data and isinstance(data["paths"], dict):
        result["paths"] = {**result["paths"], **data["paths"]}

    return result
