# MCP Hub Status
# Read-only snapshot of targets, servers and sync history

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from mcphub.config.env import EnvSettings
from mcphub.config.schema import HubConfig
from mcphub.sync.item import ServerItem, scan_registry
from mcphub.sync.links import LinkReconciler
from mcphub.sync.profiles import ProfileStore
from mcphub.sync.report import ReportHistoryEntry, load_latest_report, load_report_history
from mcphub.sync.targets import TargetState, discover_targets
from mcphub.utils.platform import get_current_platform

SETUP_MARKER = ".setup-complete"
SERVER_FILES = ("server.js", "server.py", "index.js", "main.py")


@dataclass
class SystemStatus:
    hub_root: Path
    platform: str
    config_loaded: bool
    env_loaded: bool
    setup_complete: bool
    last_check: str


@dataclass
class TargetStatus:
    """Live status of one target.

    ``connected`` requires both the persisted profile and a valid root link.
    """

    name: str
    enabled: bool
    state: TargetState
    config_path: str
    connected: bool = False
    link_exists: bool = False
    link_valid: bool = False
    last_sync: Optional[str] = None
    servers_count: int = 0
    error: Optional[str] = None


@dataclass
class ServerStatus:
    name: str
    category: str
    path: Path
    enabled: bool
    has_config: bool
    has_server_file: bool
    has_readme: bool
    has_env_example: bool
    has_package_json: bool
    dependencies_installed: bool
    last_modified: Optional[datetime]


@dataclass
class SyncStatus:
    auto_sync_enabled: bool
    sync_interval: int
    last_sync_report: Optional[dict[str, Any]] = None
    history: list[ReportHistoryEntry] = field(default_factory=list)


@dataclass
class HubStatus:
    system: SystemStatus
    targets: list[TargetStatus]
    servers: list[ServerStatus]
    sync: SyncStatus
    warnings: list[str] = field(default_factory=list)

    @property
    def enabled_servers(self) -> list[ServerStatus]:
        return [s for s in self.servers if s.enabled]

    @property
    def disabled_servers(self) -> list[ServerStatus]:
        return [s for s in self.servers if not s.enabled]

    def recommendations(self) -> list[str]:
        """Follow-up actions suggested by the current state."""
        recs = []
        disconnected = [t.name for t in self.targets if t.enabled and not t.connected]
        if disconnected:
            recs.append(f"Connect CLIs: {', '.join(disconnected)}")
        without_config = [s.name for s in self.enabled_servers if not s.has_config]
        if without_config:
            recs.append(f"Configure servers: {', '.join(without_config)}")
        without_deps = [
            s.name for s in self.enabled_servers if s.has_package_json and not s.dependencies_installed
        ]
        if without_deps:
            recs.append(f"Install dependencies: {', '.join(without_deps)}")
        return recs


def server_status(item: ServerItem) -> ServerStatus:
    """Inspect the files of one server directory."""
    path = item.path
    has_package_json = (path / "package.json").is_file()
    try:
        last_modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except OSError:
        last_modified = None
    return ServerStatus(
        name=item.name,
        category=item.category,
        path=path,
        enabled=item.enabled,
        has_config=item.has_config,
        has_server_file=any((path / name).is_file() for name in SERVER_FILES),
        has_readme=(path / "README.md").is_file(),
        has_env_example=(path / ".env.example").is_file(),
        has_package_json=has_package_json,
        dependencies_installed=has_package_json and (path / "node_modules").is_dir(),
        last_modified=last_modified,
    )


def collect_status(
    config: HubConfig,
    env: EnvSettings,
    *,
    store: Optional[ProfileStore] = None,
    reconciler: Optional[LinkReconciler] = None,
    home: Optional[Path] = None,
    history_limit: int = 5,
) -> HubStatus:
    """
    Collect hub status without modifying anything.

    Args:
        config: Hub configuration.
        env: Environment flags.
        store: Optional profile store (built from config if not provided).
        reconciler: Optional link reconciler (built from config if not provided).
        home: Home directory for ``~`` expansion.
        history_limit: Number of past reports to include.

    Returns:
        HubStatus snapshot.
    """
    store = store or ProfileStore(config.profiles_dir)
    reconciler = reconciler or LinkReconciler(config.servers_dir)
    hub_root = Path(config.hub_root)

    system = SystemStatus(
        hub_root=hub_root,
        platform=get_current_platform(),
        config_loaded=True,
        env_loaded=env.loaded,
        setup_complete=(hub_root / SETUP_MARKER).exists(),
        last_check=datetime.now(timezone.utc).isoformat(),
    )

    targets: list[TargetStatus] = []
    for discovered in discover_targets(config, env, store, home).targets:
        status = TargetStatus(
            name=discovered.name,
            enabled=discovered.enabled,
            state=discovered.state,
            config_path=discovered.target.config_path,
            error=discovered.error,
        )
        if discovered.enabled:
            profile = discovered.profile
            if profile is not None:
                status.last_sync = profile.last_sync
                status.servers_count = len(profile.servers)
            status.link_exists = reconciler.root_link_exists(discovered.target)
            status.link_valid = reconciler.validate_root_link(discovered.target)
            status.connected = discovered.active and status.link_valid
        targets.append(status)

    scan = scan_registry(config.servers_dir, config.servers.categories, config.servers.default_config)

    sync = SyncStatus(
        auto_sync_enabled=env.auto_sync,
        sync_interval=env.sync_interval,
        last_sync_report=load_latest_report(config.logs_dir),
        history=load_report_history(config.logs_dir, limit=history_limit),
    )

    return HubStatus(
        system=system,
        targets=targets,
        servers=[server_status(item) for item in scan.items],
        sync=sync,
        warnings=scan.warnings,
    )
