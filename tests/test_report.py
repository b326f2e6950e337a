# MCP Hub Report Tests
# Tests for summaries and report artifacts

import json
from pathlib import Path

import pytest

from mcphub.errors import ReportError
from mcphub.sync.item import ServerItem
from mcphub.sync.links import LinkAction
from mcphub.sync.report import (
    LATEST_REPORT,
    build_report,
    load_latest_report,
    load_report_history,
    report_filename,
    summarize,
    write_report,
)
from mcphub.sync.results import ItemOutcome, ItemStatus, TargetSyncResult

TIMESTAMP = "2024-01-15T10:30:00+00:00"
EPOCH_MS = 1705314600000


@pytest.fixture
def items(temp_dir: Path) -> list[ServerItem]:
    return [
        ServerItem(name="demo-a", category="ai", path=temp_dir / "ai" / "demo-a"),
        ServerItem(name="demo-b", category="ai", path=temp_dir / "ai" / "demo-b", config={"enabled": False}),
    ]


@pytest.fixture
def results() -> dict[str, TargetSyncResult]:
    ok = TargetSyncResult(target="cursor", timestamp=TIMESTAMP)
    ok.servers.append(ItemOutcome(name="demo-a", category="ai", status=ItemStatus.SYNCED, action=LinkAction.CREATED))
    failed = TargetSyncResult(target="claude", timestamp=TIMESTAMP)
    failed.fail("Root link not found: /home/u/.claude/mcp_servers")
    return {"cursor": ok, "claude": failed}


class TestSummarize:
    def test_counts(self, results, items):
        summary = summarize(results, items)

        assert summary.total_clis == 2
        assert summary.total_servers == 2
        assert summary.enabled_servers == 1
        assert summary.successful_syncs == 1
        assert summary.failed_syncs == 1

    def test_empty(self):
        summary = summarize({}, [])
        assert summary.to_dict() == {
            "total_clis": 0,
            "total_servers": 0,
            "enabled_servers": 0,
            "successful_syncs": 0,
            "failed_syncs": 0,
        }

    def test_pure(self, results, items):
        assert summarize(results, items) == summarize(results, items)


class TestTargetSyncResult:
    def test_mutations_counted(self):
        result = TargetSyncResult(target="cursor", timestamp=TIMESTAMP)
        result.servers = [
            ItemOutcome(name="a", category="ai", status=ItemStatus.SYNCED, action=LinkAction.CREATED),
            ItemOutcome(name="b", category="ai", status=ItemStatus.SYNCED, action=LinkAction.UNCHANGED),
            ItemOutcome(name="c", category="ai", status=ItemStatus.ERROR, error="denied"),
        ]

        assert result.mutations == 1
        assert len(result.synced) == 2
        assert len(result.failed) == 1
        assert result.success
        assert result.has_issues

    def test_fail(self):
        result = TargetSyncResult(target="cursor", timestamp=TIMESTAMP)
        result.fail("broken")
        assert result.to_dict() == {"success": False, "servers": [], "errors": ["broken"], "timestamp": TIMESTAMP}


class TestBuildReport:
    def test_to_dict(self, results, items):
        report = build_report(TIMESTAMP, results, items, warnings=["skipped x"], discovery_errors={"vscode": "bad"})
        data = report.to_dict()

        assert data["timestamp"] == TIMESTAMP
        assert data["dry_run"] is False
        assert data["summary"]["failed_syncs"] == 1
        assert data["cli_results"]["cursor"]["servers"] == [{"name": "demo-a", "category": "ai", "status": "synced"}]
        assert data["cli_results"]["claude"]["errors"] == ["Root link not found: /home/u/.claude/mcp_servers"]
        assert data["servers"][1]["enabled"] is False
        assert data["warnings"] == ["skipped x"]
        assert data["discovery_errors"] == {"vscode": "bad"}
        assert not report.success

    def test_serializable(self, results, items):
        json.dumps(build_report(TIMESTAMP, results, items).to_dict())


class TestWriteReport:
    def test_writes_both_files(self, temp_dir: Path, results, items):
        report = build_report(TIMESTAMP, results, items)

        paths = write_report(report, temp_dir / "logs")

        assert paths.report == temp_dir / "logs" / report_filename(EPOCH_MS)
        assert paths.latest == temp_dir / "logs" / LATEST_REPORT
        assert paths.report.read_bytes() == paths.latest.read_bytes()
        assert json.loads(paths.latest.read_text(encoding="utf-8")) == report.to_dict()

    def test_name_collision_bumped(self, temp_dir: Path, results, items):
        report = build_report(TIMESTAMP, results, items)

        first = write_report(report, temp_dir)
        second = write_report(report, temp_dir)

        assert first.report.name == f"sync-report-{EPOCH_MS}.json"
        assert second.report.name == f"sync-report-{EPOCH_MS + 1}.json"
        assert first.report.exists()

    def test_logs_path_is_file(self, temp_dir: Path, results, items):
        logs = temp_dir / "logs"
        logs.write_text("not a directory", encoding="utf-8")

        with pytest.raises(ReportError, match="Cannot write sync report") as exc_info:
            write_report(build_report(TIMESTAMP, results, items), logs)

        assert exc_info.value.path == logs


class TestLoadReports:
    def test_latest_missing(self, temp_dir: Path):
        assert load_latest_report(temp_dir) is None

    def test_latest_corrupt(self, temp_dir: Path):
        (temp_dir / LATEST_REPORT).write_text("{", encoding="utf-8")
        assert load_latest_report(temp_dir) is None

    def test_latest(self, temp_dir: Path, results, items):
        write_report(build_report(TIMESTAMP, results, items), temp_dir)
        assert load_latest_report(temp_dir)["timestamp"] == TIMESTAMP

    def test_history_numeric_order(self, temp_dir: Path):
        for epoch in (999, 1000, 20):
            (temp_dir / report_filename(epoch)).write_text(
                json.dumps({"timestamp": str(epoch), "summary": {"total_clis": 1}}), encoding="utf-8"
            )

        history = load_report_history(temp_dir)

        assert [entry.file for entry in history] == [
            "sync-report-20.json",
            "sync-report-999.json",
            "sync-report-1000.json",
        ]
        assert history[0].summary == {"total_clis": 1}

    def test_history_limit_and_corrupt(self, temp_dir: Path):
        for epoch in range(1, 5):
            (temp_dir / report_filename(epoch)).write_text(json.dumps({"timestamp": str(epoch)}), encoding="utf-8")
        (temp_dir / report_filename(5)).write_text("garbage", encoding="utf-8")

        history = load_report_history(temp_dir, limit=3)

        assert [entry.timestamp for entry in history] == ["3", "4"]

    def test_history_missing_dir(self, temp_dir: Path):
        assert load_report_history(temp_dir / "logs") == []
