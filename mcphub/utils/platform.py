# MCP Hub Platform Utilities
# Capability checks for the filesystem the hub lives on

import os
import platform
import tempfile
from pathlib import Path

# Platform name mapping: system name -> hub platform name
_PLATFORM_MAP: dict[str, str] = {
    "Darwin": "macos",
    "Linux": "linux",
    "Windows": "windows",
}


def get_current_platform() -> str:
    """
    Get the current platform identifier.

    Returns:
        Platform string: "macos", "linux", or "windows".
    """
    system = platform.system()
    return _PLATFORM_MAP.get(system, system.lower())


def supports_symlinks(directory: Path) -> bool:
    """
    Check whether symbolic links can be created inside a directory.

    Creates and removes a throwaway link. Fails on filesystems without
    symlink support and, on Windows, without the required privilege.

    Args:
        directory: Existing directory to probe.

    Returns:
        True if a directory symlink could be created.
    """
    try:
        with tempfile.TemporaryDirectory(dir=directory, prefix=".symlink-check-") as tmp:
            target = Path(tmp) / "target"
            target.mkdir()
            link = Path(tmp) / "link"
            os.symlink(target, link, target_is_directory=True)
            return link.is_symlink()
    except (OSError, NotImplementedError):
        return False
