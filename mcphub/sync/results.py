# MCP Hub Sync Results
# Per-item and per-target outcomes of a sync run

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from mcphub.sync.links import LinkAction


class ItemStatus(str, Enum):
    """Outcome of syncing one item to one target."""

    SYNCED = "synced"
    ERROR = "error"


@dataclass
class ItemOutcome:
    """Result of ensuring one item link."""

    name: str
    category: str
    status: ItemStatus
    action: Optional[LinkAction] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == ItemStatus.SYNCED

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "category": self.category,
            "status": self.status.value,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class TargetSyncResult:
    """Result of syncing one target."""

    target: str
    timestamp: str
    success: bool = True
    servers: list[ItemOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def synced(self) -> list[ItemOutcome]:
        return [outcome for outcome in self.servers if outcome.success]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [outcome for outcome in self.servers if not outcome.success]

    @property
    def mutations(self) -> int:
        """Number of links created or repaired."""
        return sum(1 for outcome in self.servers if outcome.action is not None and outcome.action.mutated)

    @property
    def has_issues(self) -> bool:
        return not self.success or bool(self.failed)

    def fail(self, message: str) -> None:
        """Mark the whole target as failed."""
        self.success = False
        self.errors.append(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "servers": [outcome.to_dict() for outcome in self.servers],
            "errors": list(self.errors),
            "timestamp": self.timestamp,
        }
