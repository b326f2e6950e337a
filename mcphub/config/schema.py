# MCP Hub Configuration Schema
# Pydantic models for hub configuration validation

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


class ServersConfig(BaseModel):
    """Registry settings: which categories exist and the per-item defaults."""

    categories: list[str] = Field(
        default_factory=lambda: ["ai", "development", "database", "cloud", "custom"],
        description="Ordered category directory names under the servers root",
    )
    default_config: dict[str, Any] = Field(
        default_factory=lambda: {"enabled": True},
        description="Defaults every item config.json is shallow-merged onto",
    )

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, v: list[str]) -> list[str]:
        """Categories become directory names, keep them slugs."""
        for name in v:
            if not SLUG_PATTERN.match(name):
                raise ValueError(f"Invalid category name: {name!r}")
        return v


class ClisConfig(BaseModel):
    """Targets that can receive a link into the registry."""

    supported: list[str] = Field(
        default_factory=lambda: ["cursor", "vscode", "neovim", "claude"],
        description="Known target names",
    )
    config_paths: dict[str, str] = Field(
        default_factory=lambda: {
            "cursor": "~/.cursor",
            "vscode": "~/.vscode",
            "neovim": "~/.config/nvim",
            "claude": "~/.claude",
        },
        description="Configuration directory per target (supports ~)",
    )

    @model_validator(mode="after")
    def check_paths(self) -> "ClisConfig":
        """Every supported target needs a configuration directory."""
        missing = [name for name in self.supported if name not in self.config_paths]
        if missing:
            raise ValueError(f"No config_paths entry for: {', '.join(missing)}")
        return self


class PathsConfig(BaseModel):
    """Hub-relative locations of the managed directories."""

    servers_dir: str = Field(default="servers", description="Registry root")
    profiles_dir: str = Field(default="cli-profiles", description="Target profile records")
    logs_dir: str = Field(default="logs", description="Sync report artifacts")
    env_file: str = Field(default="configs/env/.env", description="Environment flags file")


class HubConfig(BaseModel):
    """Root configuration model for the hub."""

    hub_root: str = Field(description="Hub root directory")
    servers: ServersConfig = Field(default_factory=ServersConfig, description="Registry settings")
    clis: ClisConfig = Field(default_factory=ClisConfig, description="Target settings")
    paths: PathsConfig = Field(default_factory=PathsConfig, description="Managed directories")

    @field_validator("hub_root")
    @classmethod
    def expand_root(cls, v: str) -> str:
        """Expand ~ in hub root."""
        return str(Path(v).expanduser())

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return Path(self.hub_root) / path

    @property
    def servers_dir(self) -> Path:
        return self._resolve(self.paths.servers_dir)

    @property
    def profiles_dir(self) -> Path:
        return self._resolve(self.paths.profiles_dir)

    @property
    def logs_dir(self) -> Path:
        return self._resolve(self.paths.logs_dir)

    @property
    def env_file(self) -> Path:
        return self._resolve(self.paths.env_file)

    def get_config_path(self, target: str) -> str | None:
        """Get the configured (unexpanded) root path for a target."""
        return self.clis.config_paths.get(target)

    def is_supported(self, target: str) -> bool:
        return target in self.clis.supported
