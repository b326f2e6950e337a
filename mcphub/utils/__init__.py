# MCP Hub Utilities Module
# Helper functions for path handling and platform checks

from mcphub.utils.paths import (
    atomic_write,
    ensure_dir,
    entry_exists,
    expand_home,
    read_json,
    real_path,
    replace_with_symlink,
    write_json,
)
from mcphub.utils.platform import (
    get_current_platform,
    supports_symlinks,
)

__all__ = [
    # Platform
    "get_current_platform",
    "supports_symlinks",
    # Paths
    "expand_home",
    "real_path",
    "entry_exists",
    "ensure_dir",
    "replace_with_symlink",
    "atomic_write",
    "write_json",
    "read_json",
]
