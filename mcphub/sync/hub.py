# MCP Hub Initialization
# Directory layout, default profiles and environment file

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from mcphub.config.defaults import DEFAULT_ENV
from mcphub.config.schema import HubConfig
from mcphub.errors import ConfigError
from mcphub.sync.profiles import ProfileStore
from mcphub.sync.status import SETUP_MARKER
from mcphub.utils.paths import atomic_write, ensure_dir
from mcphub.utils.platform import supports_symlinks


@dataclass
class InitResult:
    """What hub initialization created."""

    created_dirs: list[Path] = field(default_factory=list)
    created_profiles: list[str] = field(default_factory=list)
    env_created: bool = False
    marker: Path | None = None


def init_hub(config: HubConfig, store: ProfileStore | None = None) -> InitResult:
    """
    Prepare a hub root for use.

    Creates the registry category directories, the profile and log
    directories, a default environment file and one disconnected profile
    per supported target. Existing files are left alone.

    Raises:
        ConfigError: If the hub root cannot be written or cannot hold symlinks.
    """
    store = store or ProfileStore(config.profiles_dir)
    hub_root = Path(config.hub_root)
    try:
        return _init_layout(config, store, hub_root)
    except OSError as e:
        raise ConfigError(f"Cannot initialize hub at {hub_root}: {e}") from e


def _init_layout(config: HubConfig, store: ProfileStore, hub_root: Path) -> InitResult:
    result = InitResult()
    ensure_dir(hub_root)

    if not supports_symlinks(hub_root):
        raise ConfigError(f"Cannot create symlinks in {hub_root}. Run with sufficient privileges.")

    dirs = [config.servers_dir / category for category in config.servers.categories]
    dirs += [config.profiles_dir, config.logs_dir]
    for directory in dirs:
        if not directory.exists():
            ensure_dir(directory)
            result.created_dirs.append(directory)

    if not config.env_file.exists():
        atomic_write(config.env_file, DEFAULT_ENV)
        result.env_created = True

    for name in config.clis.supported:
        _, created = store.ensure_default(name, config.get_config_path(name))
        if created:
            result.created_profiles.append(name)

    marker = hub_root / SETUP_MARKER
    marker.write_text(datetime.now(timezone.utc).isoformat() + "\n", encoding="utf-8")
    result.marker = marker
    return result
