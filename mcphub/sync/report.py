# MCP Hub Sync Reports
# Summary computation and report artifacts

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from mcphub.errors import ReportError
from mcphub.sync.item import ServerItem
from mcphub.sync.results import TargetSyncResult
from mcphub.utils.paths import read_json, write_json

logger = logging.getLogger(__name__)

REPORT_PREFIX = "sync-report-"
LATEST_REPORT = "latest-sync-report.json"


@dataclass(frozen=True)
class SyncSummary:
    """Counts derived from a sync run."""

    total_clis: int
    total_servers: int
    enabled_servers: int
    successful_syncs: int
    failed_syncs: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total_clis": self.total_clis,
            "total_servers": self.total_servers,
            "enabled_servers": self.enabled_servers,
            "successful_syncs": self.successful_syncs,
            "failed_syncs": self.failed_syncs,
        }


@dataclass
class SyncReport:
    """Aggregate outcome of one sync run."""

    timestamp: str
    summary: SyncSummary
    cli_results: dict[str, TargetSyncResult] = field(default_factory=dict)
    servers: list[ServerItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    discovery_errors: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return self.summary.failed_syncs == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "dry_run": self.dry_run,
            "summary": self.summary.to_dict(),
            "cli_results": {name: result.to_dict() for name, result in self.cli_results.items()},
            "servers": [item.to_dict() for item in self.servers],
            "warnings": list(self.warnings),
            "discovery_errors": dict(self.discovery_errors),
        }


@dataclass(frozen=True)
class ReportPaths:
    """Where a report was written."""

    report: Path
    latest: Path


@dataclass(frozen=True)
class ReportHistoryEntry:
    """Short form of a past report, for status output."""

    file: str
    timestamp: Optional[str]
    summary: dict[str, Any]


def summarize(results: dict[str, TargetSyncResult], items: list[ServerItem]) -> SyncSummary:
    """Compute summary counts. Pure function of its inputs."""
    successful = sum(1 for result in results.values() if result.success)
    return SyncSummary(
        total_clis=len(results),
        total_servers=len(items),
        enabled_servers=sum(1 for item in items if item.enabled),
        successful_syncs=successful,
        failed_syncs=len(results) - successful,
    )


def build_report(
    timestamp: str,
    results: dict[str, TargetSyncResult],
    items: list[ServerItem],
    *,
    warnings: Optional[list[str]] = None,
    discovery_errors: Optional[dict[str, str]] = None,
    dry_run: bool = False,
) -> SyncReport:
    """Assemble a report from the results of a run."""
    return SyncReport(
        timestamp=timestamp,
        summary=summarize(results, items),
        cli_results=dict(results),
        servers=list(items),
        warnings=list(warnings or []),
        discovery_errors=dict(discovery_errors or {}),
        dry_run=dry_run,
    )


def report_filename(epoch_ms: int) -> str:
    return f"{REPORT_PREFIX}{epoch_ms}.json"


def write_report(report: SyncReport, logs_dir: Path) -> ReportPaths:
    """
    Write the timestamped report and overwrite the latest pointer.

    Both files carry identical content. The timestamped name uses the
    report time in epoch milliseconds, bumped until it is unused.

    Args:
        report: Report to write.
        logs_dir: Directory for report artifacts.

    Returns:
        ReportPaths with both file locations.

    Raises:
        ReportError: If the logs directory or a report file cannot be written.
    """
    data = report.to_dict()

    epoch_ms = int(datetime.fromisoformat(report.timestamp).timestamp() * 1000)
    report_path = logs_dir / report_filename(epoch_ms)
    latest_path = logs_dir / LATEST_REPORT
    try:
        while report_path.exists():
            epoch_ms += 1
            report_path = logs_dir / report_filename(epoch_ms)

        write_json(report_path, data)
        write_json(latest_path, data)
    except OSError as e:
        raise ReportError(f"Cannot write sync report to {logs_dir}: {e}", path=logs_dir) from e

    logger.debug("Wrote sync report %s", report_path)
    return ReportPaths(report=report_path, latest=latest_path)


def load_latest_report(logs_dir: Path) -> Optional[dict[str, Any]]:
    """
    Load the latest report.

    Returns:
        Report data, or None if missing or unreadable.
    """
    path = logs_dir / LATEST_REPORT
    if not path.exists():
        return None
    try:
        data = read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def _report_sort_key(path: Path) -> int:
    stem = path.stem[len(REPORT_PREFIX) :]
    try:
        return int(stem)
    except ValueError:
        return -1


def load_report_history(logs_dir: Path, limit: int = 5) -> list[ReportHistoryEntry]:
    """
    Load the most recent timestamped reports, oldest first.

    Corrupt report files are skipped.
    """
    if not logs_dir.is_dir():
        return []

    paths = sorted(logs_dir.glob(f"{REPORT_PREFIX}*.json"), key=_report_sort_key)
    history: list[ReportHistoryEntry] = []
    for path in paths[-limit:] if limit > 0 else []:
        try:
            data = read_json(path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            continue
        if not isinstance(data, dict):
            continue
        history.append(
            ReportHistoryEntry(
                file=path.name,
                timestamp=data.get("timestamp"),
                summary=data.get("summary") or {},
            )
        )
    return history
