# MCP Hub Sync Engine
# Orchestrates link reconciliation across connected targets

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from mcphub.config.env import EnvSettings
from mcphub.config.schema import HubConfig
from mcphub.errors import ConfigError, LinkError, ProfileError, ReportError
from mcphub.sync.item import RegistryScan, scan_registry
from mcphub.sync.links import LinkReconciler
from mcphub.sync.profiles import ProfileStore
from mcphub.sync.report import ReportPaths, SyncReport, build_report, write_report
from mcphub.sync.results import ItemOutcome, ItemStatus, TargetSyncResult
from mcphub.sync.targets import DiscoveredTarget, TargetDiscovery, TargetState, discover_targets
from mcphub.utils.paths import ensure_dir, entry_exists, real_path

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SyncRun:
    """
    Mutable context of a single sync pass.

    Created fresh by every call to SyncEngine.sync and never shared
    between runs.
    """

    started_at: datetime
    dry_run: bool = False
    scan: Optional[RegistryScan] = None
    discovery: Optional[TargetDiscovery] = None
    results: dict[str, TargetSyncResult] = field(default_factory=dict)
    report: Optional[SyncReport] = None
    report_paths: Optional[ReportPaths] = None

    @property
    def timestamp(self) -> str:
        return self.started_at.isoformat()

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results.values())

    @property
    def mutations(self) -> int:
        return sum(result.mutations for result in self.results.values())


class SyncEngine:
    """
    Main synchronization engine.

    Scans the registry, discovers connected targets and reconciles the
    item links of every enabled server into every connected target.
    """

    def __init__(
        self,
        config: HubConfig,
        env: EnvSettings,
        *,
        store: Optional[ProfileStore] = None,
        reconciler: Optional[LinkReconciler] = None,
        home: Optional[Path] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize sync engine.

        Args:
            config: Hub configuration.
            env: Environment flags.
            store: Optional profile store (built from config if not provided).
            reconciler: Optional link reconciler (built from config if not provided).
            home: Home directory for ``~`` expansion. Defaults to the caller's.
            clock: Source of the run timestamp.
        """
        self.config = config
        self.env = env
        self.store = store or ProfileStore(config.profiles_dir)
        self.reconciler = reconciler or LinkReconciler(config.servers_dir)
        self.home = home
        self.clock = clock

    def scan(self) -> RegistryScan:
        """Scan the registry for server items."""
        return scan_registry(
            self.config.servers_dir,
            self.config.servers.categories,
            self.config.servers.default_config,
        )

    def discover(self) -> TargetDiscovery:
        """Discover enabled and connected targets."""
        return discover_targets(self.config, self.env, self.store, self.home)

    def sync(self, *, dry_run: bool = False, only: Optional[list[str]] = None) -> SyncRun:
        """
        Run one sync pass.

        Args:
            dry_run: Plan link changes without touching the filesystem,
                     profiles or report artifacts.
            only: Optional target names to restrict the pass to.

        Returns:
            The completed SyncRun, including its report.

        Raises:
            ConfigError: If a requested target is unknown.
            ReportError: If report artifacts cannot be written.
        """
        if only:
            unknown = [name for name in only if not self.config.is_supported(name)]
            if unknown:
                raise ConfigError(f"Unknown CLI: {', '.join(unknown)}")

        run = SyncRun(started_at=self.clock(), dry_run=dry_run)
        run.scan = self.scan()
        run.discovery = self.discover()

        targets = run.discovery.active
        warnings = list(run.scan.warnings)
        if only:
            targets = [t for t in targets if t.name in only]
            warnings += self._skipped_requests(run.discovery, only)

        for discovered in targets:
            run.results[discovered.name] = self.sync_target(run, discovered)

        if not dry_run:
            self._prepare_logs_dir()
            self._persist_profiles(run)

        run.report = build_report(
            run.timestamp,
            run.results,
            run.scan.items,
            warnings=warnings,
            discovery_errors={
                t.name: t.error or "" for t in run.discovery.targets if t.state == TargetState.UNKNOWN
            },
            dry_run=dry_run,
        )
        if not dry_run:
            run.report_paths = write_report(run.report, self.config.logs_dir)

        logger.info(
            "Sync finished: %d/%d targets ok, %d link changes",
            run.report.summary.successful_syncs,
            run.report.summary.total_clis,
            run.mutations,
        )
        return run

    def sync_target(self, run: SyncRun, discovered: DiscoveredTarget) -> TargetSyncResult:
        """
        Sync all enabled items into one target.

        Item failures are recorded and do not fail the target. A missing or
        incorrect root link, or an unexpected error, fails the target.
        """
        target = discovered.target
        result = TargetSyncResult(target=target.name, timestamp=run.timestamp)

        problem = self._root_link_problem(discovered)
        if problem is not None:
            logger.warning("%s: %s", target.name, problem)
            result.fail(problem)
            return result

        items = run.scan.enabled_items if run.scan else []
        try:
            for item in items:
                try:
                    action = self.reconciler.ensure_item_link(item, target, dry_run=run.dry_run)
                except LinkError as e:
                    logger.warning("%s: %s/%s failed: %s", target.name, item.category, item.name, e)
                    result.servers.append(
                        ItemOutcome(name=item.name, category=item.category, status=ItemStatus.ERROR, error=str(e))
                    )
                    continue
                result.servers.append(
                    ItemOutcome(name=item.name, category=item.category, status=ItemStatus.SYNCED, action=action)
                )
        except Exception as e:
            logger.exception("%s: unexpected error during sync", target.name)
            result.fail(f"Unexpected error: {e}")

        return result

    def _root_link_problem(self, discovered: DiscoveredTarget) -> Optional[str]:
        """Describe why the root link is unusable, or None if it is valid."""
        if self.reconciler.validate_root_link(discovered.target):
            return None

        link = self.reconciler.root_link_path(discovered.target)
        if not entry_exists(link):
            return f"Root link not found: {link}"
        if not link.exists():
            return f"Root link is dangling: {link}"
        return f"Root link incorrect: {real_path(link)} != {real_path(self.reconciler.registry_root)}"

    def _skipped_requests(self, discovery: TargetDiscovery, only: list[str]) -> list[str]:
        """Describe requested targets that are not connected and so not synced."""
        skipped = []
        for name in only:
            discovered = discovery.get(name)
            if discovered is None or discovered.active:
                continue
            logger.warning("Skipping %s: target is %s", name, discovered.state.value)
            skipped.append(f"Skipping {name}: target is {discovered.state.value}")
        return skipped

    def _prepare_logs_dir(self) -> None:
        """Make sure report artifacts can be written before any profile changes."""
        try:
            ensure_dir(self.config.logs_dir)
        except OSError as e:
            raise ReportError(
                f"Cannot write sync report to {self.config.logs_dir}: {e}", path=self.config.logs_dir
            ) from e

    def _persist_profiles(self, run: SyncRun) -> None:
        """Write sync outcomes through the profile store, one target at a time."""
        items = {item.key: item for item in run.scan.items} if run.scan else {}

        for name, result in run.results.items():
            attached = [items[(o.category, o.name)] for o in result.synced if (o.category, o.name) in items]
            try:
                self.store.record_sync(
                    name,
                    timestamp=run.timestamp,
                    success=result.success,
                    synced_servers=len(result.servers),
                    attached=attached,
                )
            except ProfileError as e:
                logger.warning("%s: profile update failed: %s", name, e)
                result.fail(f"Profile update failed: {e}")
