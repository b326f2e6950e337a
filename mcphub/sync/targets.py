# MCP Hub Target Discovery
# Which CLI targets are enabled and connected

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from mcphub.config.env import EnvSettings
from mcphub.config.schema import HubConfig
from mcphub.errors import ConfigError, ProfileError
from mcphub.sync.profiles import Profile, ProfileStore
from mcphub.utils.paths import expand_home

logger = logging.getLogger(__name__)


class TargetState(str, Enum):
    """Discovery outcome for a target."""

    DISABLED = "disabled"
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    UNKNOWN = "unknown"  # profile unreadable


@dataclass(frozen=True)
class Target:
    """A CLI that receives a link into the registry."""

    name: str
    config_path: str
    root: Path

    @classmethod
    def from_config(cls, config: HubConfig, name: str, home: Optional[Path] = None) -> "Target":
        """
        Build a target from the hub configuration.

        Raises:
            ConfigError: If the target is unknown or has no config path.
        """
        if not config.is_supported(name):
            raise ConfigError(f"Unknown CLI '{name}'. Supported: {', '.join(config.clis.supported)}")
        config_path = config.get_config_path(name)
        if not config_path:
            raise ConfigError(f"No config path configured for CLI '{name}'")
        return cls(name=name, config_path=config_path, root=expand_home(config_path, home))


@dataclass
class DiscoveredTarget:
    """A target together with what discovery learned about it."""

    target: Target
    enabled: bool
    state: TargetState
    profile: Optional[Profile] = None
    error: Optional[str] = None

    @property
    def name(self) -> str:
        return self.target.name

    @property
    def active(self) -> bool:
        """Eligible for sync: enabled and persisted as connected."""
        return self.state == TargetState.CONNECTED


@dataclass
class TargetDiscovery:
    """All known targets in configuration order."""

    targets: list[DiscoveredTarget] = field(default_factory=list)

    @property
    def active(self) -> list[DiscoveredTarget]:
        return [t for t in self.targets if t.active]

    @property
    def enabled(self) -> list[DiscoveredTarget]:
        return [t for t in self.targets if t.enabled]

    def get(self, name: str) -> Optional[DiscoveredTarget]:
        for discovered in self.targets:
            if discovered.name == name:
                return discovered
        return None


def discover_target(
    target: Target,
    env: EnvSettings,
    store: ProfileStore,
) -> DiscoveredTarget:
    """
    Classify a single target.

    Disabled targets are never looked up further. For enabled targets a
    missing profile means disconnected and an unreadable one means unknown.
    """
    if not env.is_target_enabled(target.name):
        return DiscoveredTarget(target=target, enabled=False, state=TargetState.DISABLED)

    try:
        profile = store.load(target.name)
    except ProfileError as e:
        logger.warning("Profile for %s is unreadable: %s", target.name, e)
        return DiscoveredTarget(target=target, enabled=True, state=TargetState.UNKNOWN, error=str(e))

    if profile is None or not profile.connected:
        state = TargetState.DISCONNECTED
    else:
        state = TargetState.CONNECTED
    return DiscoveredTarget(target=target, enabled=True, state=state, profile=profile)


def discover_targets(
    config: HubConfig,
    env: EnvSettings,
    store: ProfileStore,
    home: Optional[Path] = None,
) -> TargetDiscovery:
    """
    Discover every supported target.

    Args:
        config: Hub configuration.
        env: Environment flags.
        store: Profile store.
        home: Home directory used to expand ``~`` paths.

    Returns:
        TargetDiscovery covering all supported targets.
    """
    discovery = TargetDiscovery()
    for name in config.clis.supported:
        target = Target.from_config(config, name, home)
        discovery.targets.append(discover_target(target, env, store))

    logger.debug(
        "Targets: %d enabled, %d connected",
        len(discovery.enabled),
        len(discovery.active),
    )
    return discovery
