# MCP Hub Server Items
# Registry scanning: categorized server directories with config overlays

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from mcphub.config.schema import SLUG_PATTERN

logger = logging.getLogger(__name__)

ITEM_CONFIG_FILE = "config.json"


@dataclass(frozen=True)
class ServerItem:
    """
    A registered server in the hub registry.

    Identity is (category, name). The configuration is the category
    defaults with the item's own ``config.json`` merged on top.
    """

    name: str
    category: str
    path: Path
    config: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.category, self.name)

    @property
    def enabled(self) -> bool:
        return bool(self.config.get("enabled", True))

    @property
    def has_config(self) -> bool:
        return (self.path / ITEM_CONFIG_FILE).is_file()

    def to_dict(self) -> dict[str, Any]:
        """Snapshot used in sync reports."""
        return {
            "name": self.name,
            "category": self.category,
            "enabled": self.enabled,
            "path": str(self.path),
        }


@dataclass
class RegistryScan:
    """Result of one registry scan."""

    root: Path
    items: list[ServerItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def enabled_items(self) -> list[ServerItem]:
        return [item for item in self.items if item.enabled]

    @property
    def disabled_items(self) -> list[ServerItem]:
        return [item for item in self.items if not item.enabled]

    def get(self, category: str, name: str) -> Optional[ServerItem]:
        for item in self.items:
            if item.key == (category, name):
                return item
        return None


def load_item_config(
    item_dir: Path,
    defaults: Mapping[str, Any],
    warnings: Optional[list[str]] = None,
) -> dict[str, Any]:
    """
    Merge an item's config.json over the defaults.

    An unreadable, unparseable or non-object config.json is reported as a
    warning and the defaults are used unchanged.

    Args:
        item_dir: Item directory.
        defaults: Default configuration.
        warnings: Optional list collecting warning messages.

    Returns:
        New merged configuration dict.
    """
    merged = dict(defaults)
    config_path = item_dir / ITEM_CONFIG_FILE
    if not config_path.exists():
        return merged

    problem = None
    try:
        with open(config_path, encoding="utf-8") as f:
            overrides = json.load(f)
    except json.JSONDecodeError as e:
        problem = f"invalid JSON ({e.msg} at line {e.lineno})"
    except (OSError, UnicodeDecodeError) as e:
        problem = f"unreadable ({e})"
    else:
        if isinstance(overrides, dict):
            merged.update(overrides)
            return merged
        problem = "root is not an object"

    message = f"Ignoring {item_dir.parent.name}/{item_dir.name}/{ITEM_CONFIG_FILE}: {problem}"
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
    return merged


def scan_registry(
    root: Path,
    categories: list[str],
    default_config: Optional[Mapping[str, Any]] = None,
) -> RegistryScan:
    """
    Scan the registry root for server items.

    Items are produced category by category in the given order, and
    alphabetically within a category.

    Args:
        root: Registry root (``<hub>/servers``).
        categories: Category directory names to scan.
        default_config: Defaults each item config is merged onto.

    Returns:
        RegistryScan with items and any warnings.
    """
    defaults = dict(default_config or {})
    scan = RegistryScan(root=root)

    for category in categories:
        category_path = root / category
        if not category_path.is_dir():
            logger.debug("Category directory missing: %s", category_path)
            continue

        for entry in sorted(category_path.iterdir(), key=lambda p: p.name):
            if not entry.is_dir() or entry.name.startswith("."):
                continue
            if not SLUG_PATTERN.match(entry.name):
                message = f"Skipping {category}/{entry.name}: name must use lowercase letters, digits and hyphens"
                logger.warning(message)
                scan.warnings.append(message)
                continue

            scan.items.append(
                ServerItem(
                    name=entry.name,
                    category=category,
                    path=entry,
                    config=load_item_config(entry, defaults, scan.warnings),
                )
            )

    logger.debug("Discovered %d servers under %s", len(scan.items), root)
    return scan
