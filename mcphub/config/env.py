# MCP Hub Environment Settings
# Read-only view of the .env flags file

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from dotenv import dotenv_values

from mcphub.errors import ConfigError

TRUTHY = frozenset({"true", "1", "yes", "on"})
DEFAULT_SYNC_INTERVAL = 300000


def enabled_key(target: str) -> str:
    """Environment key holding a target's enable flag, e.g. ``CURSOR_ENABLED``."""
    return f"{target.upper().replace('-', '_')}_ENABLED"


def is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in TRUTHY


@dataclass(frozen=True)
class EnvSettings:
    """
    Immutable environment configuration.

    Built from the hub's ``.env`` file; this core only ever reads it.
    """

    values: Mapping[str, str] = field(default_factory=dict)
    source: Path | None = None

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def from_file(cls, path: Path) -> "EnvSettings":
        """
        Load settings from a dotenv file.

        A missing file yields empty settings.

        Raises:
            ConfigError: If the file exists but cannot be read.
        """
        if not path.exists():
            return cls(source=None)
        try:
            raw = dotenv_values(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read environment file {path}: {e}") from e
        values = {key: value for key, value in raw.items() if value is not None}
        return cls(values=values, source=path)

    @property
    def loaded(self) -> bool:
        return bool(self.values)

    def is_target_enabled(self, target: str) -> bool:
        return is_truthy(self.values.get(enabled_key(target)))

    @property
    def auto_sync(self) -> bool:
        return is_truthy(self.values.get("AUTO_SYNC"))

    @property
    def sync_interval(self) -> int:
        """Sync interval in milliseconds."""
        raw = self.values.get("SYNC_INTERVAL")
        if raw is None or not raw.strip():
            return DEFAULT_SYNC_INTERVAL
        try:
            return int(raw)
        except ValueError as e:
            raise ConfigError(f"SYNC_INTERVAL must be an integer, got {raw!r}") from e
