# MCP Hub Environment Tests
# Tests for .env flag handling

from pathlib import Path

import pytest

from mcphub.config.env import DEFAULT_SYNC_INTERVAL, EnvSettings, enabled_key, is_truthy
from mcphub.errors import ConfigError


class TestEnabledKey:
    def test_simple_name(self):
        assert enabled_key("cursor") == "CURSOR_ENABLED"

    def test_hyphenated_name(self):
        assert enabled_key("my-cli") == "MY_CLI_ENABLED"


class TestIsTruthy:
    @pytest.mark.parametrize("value", ["true", "TRUE", "True", "1", "yes", "on", " true "])
    def test_truthy(self, value: str):
        assert is_truthy(value)

    @pytest.mark.parametrize("value", [None, "", "false", "0", "no", "off", "enabled"])
    def test_falsy(self, value):
        assert not is_truthy(value)


class TestEnvSettings:
    """Tests for EnvSettings."""

    def test_from_file(self, hub_root: Path):
        env = EnvSettings.from_file(hub_root / "configs" / "env" / ".env")

        assert env.loaded
        assert env.source == hub_root / "configs" / "env" / ".env"
        assert env.is_target_enabled("cursor")
        assert env.is_target_enabled("claude")
        assert not env.is_target_enabled("vscode")
        assert env.auto_sync is False
        assert env.sync_interval == 60000

    def test_missing_file(self, temp_dir: Path):
        env = EnvSettings.from_file(temp_dir / ".env")

        assert not env.loaded
        assert env.source is None
        assert not env.is_target_enabled("cursor")
        assert env.sync_interval == DEFAULT_SYNC_INTERVAL

    def test_comments_and_quotes(self, temp_dir: Path):
        env_file = temp_dir / ".env"
        env_file.write_text('# flags\nCURSOR_ENABLED="true"\nAUTO_SYNC=yes\n', encoding="utf-8")

        env = EnvSettings.from_file(env_file)
        assert env.is_target_enabled("cursor")
        assert env.auto_sync is True

    def test_invalid_sync_interval(self):
        env = EnvSettings(values={"SYNC_INTERVAL": "soon"})
        with pytest.raises(ConfigError, match="SYNC_INTERVAL"):
            env.sync_interval

    def test_blank_sync_interval(self):
        assert EnvSettings(values={"SYNC_INTERVAL": ""}).sync_interval == DEFAULT_SYNC_INTERVAL

    def test_values_read_only(self):
        env = EnvSettings(values={"CURSOR_ENABLED": "true"})
        with pytest.raises(TypeError):
            env.values["CURSOR_ENABLED"] = "false"

    def test_source_values_copied(self):
        source = {"CURSOR_ENABLED": "true"}
        env = EnvSettings(values=source)
        source["CURSOR_ENABLED"] = "false"
        assert env.is_target_enabled("cursor")
