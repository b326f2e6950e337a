# MCP Hub Connector
# Links targets to the registry and marks their profiles connected

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from mcphub.config.env import EnvSettings, enabled_key
from mcphub.config.schema import HubConfig
from mcphub.errors import ConfigError, LinkError, ProfileError
from mcphub.sync.links import LinkAction, LinkReconciler
from mcphub.sync.profiles import ProfileStore
from mcphub.sync.targets import Target

logger = logging.getLogger(__name__)


@dataclass
class ConnectResult:
    """Outcome of connecting one target."""

    target: str
    config_path: str
    link_path: Path
    success: bool = False
    action: Optional[LinkAction] = None
    skipped: Optional[str] = None
    error: Optional[str] = None


def connect_target(
    target: Target,
    store: ProfileStore,
    reconciler: LinkReconciler,
    timestamp: str,
) -> ConnectResult:
    """
    Connect a single target: root link, profile, then validation.

    Failures are captured on the result.
    """
    result = ConnectResult(
        target=target.name,
        config_path=target.config_path,
        link_path=reconciler.root_link_path(target),
    )

    try:
        result.action = reconciler.ensure_root_link(target)
        store.mark_connected(target.name, target.config_path, timestamp)
    except (LinkError, ProfileError) as e:
        logger.warning("Connecting %s failed: %s", target.name, e)
        result.error = str(e)
        return result

    if not reconciler.validate_root_link(target):
        result.error = f"Root link does not resolve to {reconciler.registry_root}: {result.link_path}"
        return result

    result.success = True
    return result


def connect_targets(
    config: HubConfig,
    env: EnvSettings,
    store: ProfileStore,
    reconciler: LinkReconciler,
    names: Optional[list[str]] = None,
    *,
    home: Optional[Path] = None,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> list[ConnectResult]:
    """
    Connect targets to the registry.

    Args:
        config: Hub configuration.
        env: Environment flags; only enabled targets are connected.
        store: Profile store.
        reconciler: Link reconciler.
        names: Targets to connect. Defaults to every enabled target.
        home: Home directory for ``~`` expansion.
        clock: Source of the connection timestamp.

    Returns:
        One ConnectResult per requested target.

    Raises:
        ConfigError: If a requested target is unknown.
    """
    requested = list(names) if names else list(config.clis.supported)
    targets = [Target.from_config(config, name, home) for name in requested]
    timestamp = clock().isoformat()

    results: list[ConnectResult] = []
    for target in targets:
        if not env.is_target_enabled(target.name):
            if names:
                results.append(
                    ConnectResult(
                        target=target.name,
                        config_path=target.config_path,
                        link_path=reconciler.root_link_path(target),
                        skipped=f"{enabled_key(target.name)} is not set to true",
                    )
                )
            continue
        results.append(connect_target(target, store, reconciler, timestamp))

    if not results:
        raise ConfigError("No CLI enabled. Set <NAME>_ENABLED=true in the environment file.")
    return results
