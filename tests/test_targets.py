# MCP Hub Target Tests
# Tests for target discovery and connecting targets

from pathlib import Path

import pytest

from mcphub.config.env import EnvSettings
from mcphub.errors import ConfigError
from mcphub.sync.connect import connect_targets
from mcphub.sync.links import ROOT_LINK_NAME, LinkAction
from mcphub.sync.profiles import Profile
from mcphub.sync.targets import Target, TargetState, discover_targets


class TestTarget:
    """Tests for Target construction."""

    def test_from_config(self, hub_config, temp_home: Path):
        target = Target.from_config(hub_config, "cursor", temp_home)

        assert target.name == "cursor"
        assert target.config_path == "~/.cursor"
        assert target.root == temp_home / ".cursor"

    def test_only_leading_tilde_expanded(self, hub_config, temp_home: Path):
        hub_config.clis.config_paths["cursor"] = "~/dir~name"
        assert Target.from_config(hub_config, "cursor", temp_home).root == temp_home / "dir~name"

    def test_unknown_target(self, hub_config):
        with pytest.raises(ConfigError, match="Unknown CLI 'emacs'"):
            Target.from_config(hub_config, "emacs")


class TestDiscovery:
    """Tests for discover_targets."""

    def test_enabled_but_disconnected(self, hub_config, env, store, temp_home: Path):
        discovery = discover_targets(hub_config, env, store, temp_home)

        assert [t.name for t in discovery.targets] == ["cursor", "claude"]
        assert all(t.state == TargetState.DISCONNECTED for t in discovery.targets)
        assert discovery.active == []
        assert len(discovery.enabled) == 2

    def test_connected(self, connected_hub, env, store, temp_home: Path):
        discovery = discover_targets(connected_hub, env, store, temp_home)

        assert [t.name for t in discovery.active] == ["cursor", "claude"]
        assert discovery.get("cursor").profile.connected

    def test_disabled_skips_profile(self, connected_hub, store, temp_home: Path):
        store.path_for("claude").write_text("{broken", encoding="utf-8")
        env = EnvSettings(values={"CURSOR_ENABLED": "true", "CLAUDE_ENABLED": "false"})

        discovery = discover_targets(connected_hub, env, store, temp_home)

        claude = discovery.get("claude")
        assert claude.state == TargetState.DISABLED
        assert claude.profile is None
        assert [t.name for t in discovery.active] == ["cursor"]

    def test_unreadable_profile_is_unknown(self, connected_hub, env, store, temp_home: Path):
        store.path_for("claude").write_text("{broken", encoding="utf-8")

        discovery = discover_targets(connected_hub, env, store, temp_home)

        claude = discovery.get("claude")
        assert claude.state == TargetState.UNKNOWN
        assert "Malformed profile" in claude.error
        assert not claude.active
        assert discovery.get("cursor").active

    def test_profile_disabled_flag(self, hub_config, env, store, temp_home: Path):
        store.save("cursor", Profile(name="cursor", enabled=False, status="connected"))

        discovery = discover_targets(hub_config, env, store, temp_home)
        assert discovery.get("cursor").state == TargetState.DISCONNECTED

    def test_get_missing(self, hub_config, env, store, temp_home: Path):
        assert discover_targets(hub_config, env, store, temp_home).get("emacs") is None


class TestConnect:
    """Tests for connect_targets."""

    def test_connect_all_enabled(self, hub_config, env, store, reconciler, temp_home: Path, fixed_time):
        results = connect_targets(hub_config, env, store, reconciler, home=temp_home, clock=lambda: fixed_time)

        assert [r.target for r in results] == ["cursor", "claude"]
        assert all(r.success and r.action == LinkAction.CREATED for r in results)
        for name in ("cursor", "claude"):
            link = temp_home / f".{name}" / ROOT_LINK_NAME
            assert link.is_symlink()
            profile = store.load(name)
            assert profile.connected
            assert profile.last_sync == fixed_time.isoformat()

    def test_reconnect_unchanged(self, connected_hub, env, store, reconciler, temp_home: Path):
        results = connect_targets(connected_hub, env, store, reconciler, home=temp_home)
        assert all(r.success and r.action == LinkAction.UNCHANGED for r in results)

    def test_named_target_only(self, hub_config, env, store, reconciler, temp_home: Path):
        results = connect_targets(hub_config, env, store, reconciler, ["claude"], home=temp_home)

        assert [r.target for r in results] == ["claude"]
        assert store.load("cursor") is None

    def test_disabled_named_target_skipped(self, hub_config, store, reconciler, temp_home: Path):
        env = EnvSettings(values={"CURSOR_ENABLED": "true"})

        results = connect_targets(hub_config, env, store, reconciler, ["cursor", "claude"], home=temp_home)

        claude = results[1]
        assert claude.skipped == "CLAUDE_ENABLED is not set to true"
        assert not claude.success
        assert not (temp_home / ".claude").exists()

    def test_disabled_unnamed_target_omitted(self, hub_config, store, reconciler, temp_home: Path):
        env = EnvSettings(values={"CURSOR_ENABLED": "true"})

        results = connect_targets(hub_config, env, store, reconciler, home=temp_home)
        assert [r.target for r in results] == ["cursor"]

    def test_nothing_enabled(self, hub_config, store, reconciler, temp_home: Path):
        with pytest.raises(ConfigError, match="No CLI enabled"):
            connect_targets(hub_config, EnvSettings(), store, reconciler, home=temp_home)

    def test_unknown_target(self, hub_config, env, store, reconciler, temp_home: Path):
        with pytest.raises(ConfigError, match="Unknown CLI"):
            connect_targets(hub_config, env, store, reconciler, ["emacs"], home=temp_home)

    def test_link_failure_reported(
        self, hub_config, env, store, reconciler, temp_home: Path, monkeypatch: pytest.MonkeyPatch
    ):
        def deny(link, dest):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("mcphub.sync.links.replace_with_symlink", deny)

        results = connect_targets(hub_config, env, store, reconciler, home=temp_home)

        assert all(not r.success for r in results)
        assert "Permission denied" in results[0].error
        assert store.load("cursor") is None
