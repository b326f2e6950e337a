# MCP Hub Path Utilities
# Home expansion, atomic writes and symlink helpers

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any


def expand_home(path: str | Path, home: Path | None = None) -> Path:
    """
    Expand a leading ``~`` into the caller's home directory.

    Only the leading character is substituted; everything after it is kept
    verbatim, so ``~/.cursor`` becomes ``<home>/.cursor``.

    Args:
        path: Path string or Path object.
        home: Home directory override. Defaults to ``Path.home()``.

    Returns:
        Expanded Path object (not resolved).
    """
    path_str = str(path)
    if path_str.startswith("~"):
        base = str(home if home is not None else Path.home())
        path_str = base + path_str[1:]
    return Path(path_str)


def real_path(path: str | Path) -> Path:
    """Fully resolve symlinks in a path, even when it does not exist."""
    return Path(os.path.realpath(path))


def entry_exists(path: Path) -> bool:
    """Check for any filesystem entry at path, including dangling symlinks."""
    return os.path.lexists(path)


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def replace_with_symlink(link: Path, target: Path) -> None:
    """
    Point ``link`` at ``target``, replacing any existing entry.

    Symlinks and files are replaced atomically by creating a temporary
    link beside ``link`` and renaming it over. A real directory cannot be
    renamed over, so it is removed first.

    Raises:
        OSError: If the link cannot be created.
    """
    ensure_dir(link.parent)

    if entry_exists(link) and link.is_dir() and not link.is_symlink():
        shutil.rmtree(link)

    if not entry_exists(link):
        link.symlink_to(target, target_is_directory=True)
        return

    temp_link = link.with_name(f".{link.name}.tmp.{os.getpid()}")
    if entry_exists(temp_link):
        temp_link.unlink()
    temp_link.symlink_to(target, target_is_directory=True)
    try:
        os.replace(temp_link, link)
    except OSError:
        try:
            temp_link.unlink()
        except OSError:
            pass
        raise


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    # Create temp file in same directory for atomic rename
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.rename(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_json(path: Path, data: Any) -> None:
    """Atomically write data as indented JSON."""
    atomic_write(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def read_json(path: Path) -> Any:
    """Read a JSON document.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)
