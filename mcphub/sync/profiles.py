# MCP Hub Profile Store
# Persisted per-target connection state

import json
import logging
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from mcphub.errors import ProfileError
from mcphub.utils.paths import read_json, write_json

if TYPE_CHECKING:
    from mcphub.sync.item import ServerItem

logger = logging.getLogger(__name__)

STATUS_CONNECTED = "connected"
STATUS_DISCONNECTED = "disconnected"

SYNC_SUCCESS = "success"
SYNC_ERROR = "error"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class AttachedServer:
    """A server attached to a target profile."""

    name: str
    category: str
    added_at: Optional[str] = None
    status: str = "synced"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "added_at": self.added_at,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttachedServer":
        return cls(
            name=str(data["name"]),
            category=str(data["category"]),
            added_at=data.get("added_at"),
            status=data.get("status", "synced"),
        )


@dataclass
class Profile:
    """
    Persisted record for one target.

    Keys the hub does not know about are kept in ``extra`` and written
    back unchanged.
    """

    name: str
    enabled: bool = False
    status: str = STATUS_DISCONNECTED
    config_path: Optional[str] = None
    servers: list[AttachedServer] = field(default_factory=list)
    last_sync: Optional[str] = None  # ISO format datetime
    sync_status: Optional[str] = None
    synced_servers: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def connected(self) -> bool:
        """Persisted connection flag. The filesystem may disagree."""
        return self.enabled and self.status == STATUS_CONNECTED

    def find_server(self, category: str, name: str) -> Optional[AttachedServer]:
        for server in self.servers:
            if server.category == category and server.name == name:
                return server
        return None

    def attach(self, category: str, name: str, added_at: Optional[str] = None, status: str = "synced") -> bool:
        """
        Attach a server unless one with the same (category, name) exists.

        Returns:
            True if the server was appended.
        """
        if self.find_server(category, name) is not None:
            return False
        self.servers.append(
            AttachedServer(name=name, category=category, added_at=added_at or utc_now_iso(), status=status)
        )
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = dict(self.extra)
        data.update(
            {
                "name": self.name,
                "enabled": self.enabled,
                "status": self.status,
                "config_path": self.config_path,
                "servers": [server.to_dict() for server in self.servers],
                "last_sync": self.last_sync,
                "sync_status": self.sync_status,
                "synced_servers": self.synced_servers,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        known = {f.name for f in fields(cls)} - {"extra"}
        return cls(
            name=str(data["name"]),
            enabled=bool(data.get("enabled", False)),
            status=data.get("status") or STATUS_DISCONNECTED,
            config_path=data.get("config_path"),
            servers=[AttachedServer.from_dict(s) for s in data.get("servers") or []],
            last_sync=data.get("last_sync"),
            sync_status=data.get("sync_status"),
            synced_servers=int(data.get("synced_servers") or 0),
            extra={k: v for k, v in data.items() if k not in known},
        )


class ProfileStore:
    """
    Manages target profile persistence.

    One JSON document per target at ``<profiles_dir>/<name>.json``.
    Writes go through a temporary file and rename, so readers never see
    a truncated profile.
    """

    def __init__(self, profiles_dir: Path):
        """
        Initialize profile store.

        Args:
            profiles_dir: Directory holding the profile documents.
        """
        self.profiles_dir = profiles_dir

    def path_for(self, target: str) -> Path:
        return self.profiles_dir / f"{target}.json"

    def exists(self, target: str) -> bool:
        return self.path_for(target).exists()

    def load(self, target: str) -> Optional[Profile]:
        """
        Load a target profile.

        Returns:
            The profile, or None if no profile has been written yet.

        Raises:
            ProfileError: If the document exists but cannot be read.
        """
        path = self.path_for(target)
        if not path.exists():
            return None

        try:
            data = read_json(path)
        except json.JSONDecodeError as e:
            raise ProfileError(f"Malformed profile {path}: {e}", target=target) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileError(f"Cannot read profile {path}: {e}", target=target) from e

        if not isinstance(data, dict):
            raise ProfileError(f"Profile root is not an object: {path}", target=target)

        data.setdefault("name", target)
        try:
            return Profile.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ProfileError(f"Invalid profile {path}: {e}", target=target) from e

    def save(self, target: str, profile: Profile) -> Path:
        """
        Atomically overwrite a target profile.

        Raises:
            ProfileError: If the document cannot be written.
        """
        path = self.path_for(target)
        try:
            write_json(path, profile.to_dict())
        except OSError as e:
            raise ProfileError(f"Cannot write profile {path}: {e}", target=target) from e
        return path

    def attach_item(self, target: str, item: "ServerItem", added_at: Optional[str] = None) -> bool:
        """
        Attach a server to a target profile and save.

        Idempotent: nothing is written if the server is already attached.

        Returns:
            True if the server was newly attached.

        Raises:
            ProfileError: If the profile does not exist or cannot be accessed.
        """
        profile = self.load(target)
        if profile is None:
            raise ProfileError(f"No profile for target '{target}'", target=target)
        if not profile.attach(item.category, item.name, added_at=added_at):
            return False
        self.save(target, profile)
        return True

    def ensure_default(self, target: str, config_path: Optional[str]) -> tuple[Profile, bool]:
        """
        Create a disconnected profile if none exists.

        Returns:
            Tuple of (profile, was_created).
        """
        profile = self.load(target)
        if profile is not None:
            return profile, False
        profile = Profile(name=target, config_path=config_path)
        self.save(target, profile)
        return profile, True

    def mark_connected(self, target: str, config_path: Optional[str], timestamp: Optional[str] = None) -> Profile:
        """Mark a target profile as enabled and connected, creating it if needed."""
        profile = self.load(target) or Profile(name=target)
        profile.enabled = True
        profile.status = STATUS_CONNECTED
        if config_path is not None:
            profile.config_path = config_path
        profile.last_sync = timestamp or utc_now_iso()
        self.save(target, profile)
        logger.debug("Marked %s connected", target)
        return profile

    def record_sync(
        self,
        target: str,
        *,
        timestamp: str,
        success: bool,
        synced_servers: int,
        attached: list["ServerItem"],
    ) -> Optional[Profile]:
        """
        Persist the outcome of one target sync in a single read/write.

        Returns:
            The updated profile, or None if the target has no profile.
        """
        profile = self.load(target)
        if profile is None:
            return None
        profile.last_sync = timestamp
        profile.sync_status = SYNC_SUCCESS if success else SYNC_ERROR
        profile.synced_servers = synced_servers
        for item in attached:
            profile.attach(item.category, item.name, added_at=timestamp)
        self.save(target, profile)
        return profile
