# MCP Hub Test Fixtures
# Pytest fixtures for MCP Hub tests

import json
import tempfile
from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path

import pytest

from mcphub.config import EnvSettings, HubConfig, load_config
from mcphub.sync import LinkReconciler, ProfileStore, connect_targets

FIXED_TIME = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's hub settings out of tests."""
    monkeypatch.delenv("MCP_HUB_ROOT", raising=False)
    monkeypatch.delenv("MCP_HUB_CONFIG", raising=False)
    monkeypatch.delenv("MCPHUB_LOG_LEVEL", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def sample_config() -> dict:
    """Hub configuration with two categories and two CLIs."""
    return {
        "servers": {
            "categories": ["ai", "database"],
            "default_config": {"enabled": True, "log_level": "info"},
        },
        "clis": {
            "supported": ["cursor", "claude"],
            "config_paths": {
                "cursor": "~/.cursor",
                "claude": "~/.claude",
            },
        },
    }


def make_server(root: Path, category: str, name: str, config: dict | None = None) -> Path:
    """Create a server directory, optionally with a config.json."""
    server_dir = root / "servers" / category / name
    server_dir.mkdir(parents=True)
    (server_dir / "server.js").write_text("// server\n", encoding="utf-8")
    if config is not None:
        (server_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")
    return server_dir


@pytest.fixture
def hub_root(temp_dir: Path, temp_home: Path, sample_config: dict) -> Path:
    """
    Create a hub with three servers.

    ai/demo-a and database/pg-tools are enabled, ai/demo-b is disabled.
    Both CLIs are enabled in the environment file.
    """
    root = temp_dir / "hub"
    (root / "configs" / "env").mkdir(parents=True)
    (root / "configs" / "config.json").write_text(json.dumps(sample_config, indent=2), encoding="utf-8")
    (root / "configs" / "env" / ".env").write_text(
        "CURSOR_ENABLED=true\nCLAUDE_ENABLED=true\nAUTO_SYNC=false\nSYNC_INTERVAL=60000\n",
        encoding="utf-8",
    )

    make_server(root, "ai", "demo-a")
    make_server(root, "ai", "demo-b", {"enabled": False})
    make_server(root, "database", "pg-tools", {"log_level": "debug"})

    (root / "cli-profiles").mkdir()
    (root / "logs").mkdir()
    return root


@pytest.fixture
def hub_config(hub_root: Path) -> HubConfig:
    """Loaded configuration for the sample hub."""
    return load_config(hub_root / "configs" / "config.json", hub_root=hub_root)


@pytest.fixture
def env(hub_config: HubConfig) -> EnvSettings:
    """Environment flags of the sample hub."""
    return EnvSettings.from_file(hub_config.env_file)


@pytest.fixture
def store(hub_config: HubConfig) -> ProfileStore:
    return ProfileStore(hub_config.profiles_dir)


@pytest.fixture
def reconciler(hub_config: HubConfig) -> LinkReconciler:
    return LinkReconciler(hub_config.servers_dir)


@pytest.fixture
def connected_hub(
    hub_config: HubConfig,
    env: EnvSettings,
    store: ProfileStore,
    reconciler: LinkReconciler,
    temp_home: Path,
) -> HubConfig:
    """Sample hub with both CLIs connected."""
    results = connect_targets(hub_config, env, store, reconciler, home=temp_home, clock=lambda: FIXED_TIME)
    assert all(result.success for result in results)
    return hub_config


@pytest.fixture
def fixed_time() -> datetime:
    """Deterministic run timestamp."""
    return FIXED_TIME


@pytest.fixture
def server_factory():
    """Factory creating server directories under a hub root."""
    return make_server
