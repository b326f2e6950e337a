# MCP Hub Link Reconciler
# Creates, validates and repairs the symlinks connecting targets to the registry

import logging
from enum import Enum
from pathlib import Path

from mcphub.errors import LinkError
from mcphub.sync.item import ServerItem
from mcphub.sync.targets import Target
from mcphub.utils.paths import ensure_dir, entry_exists, real_path, replace_with_symlink

logger = logging.getLogger(__name__)

ROOT_LINK_NAME = "mcp_servers"


class LinkAction(str, Enum):
    """What an ensure operation did (or would do, in a dry run)."""

    UNCHANGED = "unchanged"
    CREATED = "created"
    REPAIRED = "repaired"

    @property
    def mutated(self) -> bool:
        return self != LinkAction.UNCHANGED


def resolves_to(path: Path, expected: Path) -> bool:
    """True iff an entry exists at path and its real path equals expected's real path exactly."""
    if not path.exists():
        return False
    return real_path(path) == real_path(expected)


class LinkReconciler:
    """
    Maintains the link topology for targets.

    Each target gets a root link ``<target root>/mcp_servers`` pointing at
    the registry root, and item links ``<root link>/<category>/<name>``
    pointing at each item directory. Nothing is copied.
    """

    def __init__(self, registry_root: Path):
        """
        Initialize reconciler.

        Args:
            registry_root: The servers directory every root link points at.
        """
        self.registry_root = Path(registry_root).absolute()

    def root_link_path(self, target: Target) -> Path:
        return target.root / ROOT_LINK_NAME

    def item_link_path(self, item: ServerItem, target: Target) -> Path:
        return self.root_link_path(target) / item.category / item.name

    def validate_root_link(self, target: Target) -> bool:
        """Read-only check that the target's root link points at the registry root."""
        try:
            return resolves_to(self.root_link_path(target), self.registry_root)
        except OSError:
            return False

    def root_link_exists(self, target: Target) -> bool:
        return entry_exists(self.root_link_path(target))

    def ensure_root_link(self, target: Target, *, dry_run: bool = False) -> LinkAction:
        """
        Make the target's root link point at the registry root.

        Creates the target root if needed. Any other entry at the link path
        is replaced; a correct link is left untouched.

        Raises:
            LinkError: If the directory or link cannot be created.
        """
        link = self.root_link_path(target)

        if self.validate_root_link(target):
            return LinkAction.UNCHANGED

        action = LinkAction.REPAIRED if entry_exists(link) else LinkAction.CREATED
        if dry_run:
            return action

        try:
            ensure_dir(target.root)
        except OSError as e:
            raise LinkError(f"Cannot create {target.root}: {e}", path=target.root) from e

        try:
            replace_with_symlink(link, self.registry_root)
        except OSError as e:
            raise LinkError(f"Cannot link {link} -> {self.registry_root}: {e}", path=link) from e

        logger.info("%s root link %s -> %s", action.value.capitalize(), link, self.registry_root)
        return action

    def ensure_item_link(self, item: ServerItem, target: Target, *, dry_run: bool = False) -> LinkAction:
        """
        Make the item link under the target's root link point at the item.

        A link already resolving to the item is a no-op, which is the
        common case on repeated syncs.

        Raises:
            LinkError: If the link cannot be inspected or created.
        """
        link = self.item_link_path(item, target)

        try:
            if resolves_to(link, item.path):
                return LinkAction.UNCHANGED
            existed = entry_exists(link)
        except OSError as e:
            raise LinkError(f"Cannot inspect {link}: {e}", path=link) from e

        action = LinkAction.REPAIRED if existed else LinkAction.CREATED
        if dry_run:
            return action

        try:
            replace_with_symlink(link, item.path.absolute())
        except OSError as e:
            raise LinkError(f"Cannot link {link} -> {item.path}: {e}", path=link) from e

        logger.info("%s item link %s -> %s", action.value.capitalize(), link, item.path)
        return action
