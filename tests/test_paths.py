# Tests for mcphub.utils
# Path helpers and platform checks

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mcphub.utils.paths import (
    atomic_write,
    entry_exists,
    expand_home,
    read_json,
    real_path,
    replace_with_symlink,
    write_json,
)
from mcphub.utils.platform import get_current_platform, supports_symlinks


class TestExpandHome:
    def test_leading_tilde(self, temp_dir: Path):
        assert expand_home("~/.cursor", temp_dir) == temp_dir / ".cursor"

    def test_no_tilde(self, temp_dir: Path):
        assert expand_home("/opt/cursor", temp_dir) == Path("/opt/cursor")

    def test_inner_tilde_kept(self, temp_dir: Path):
        assert expand_home("~/a~b", temp_dir) == temp_dir / "a~b"

    def test_default_home(self, temp_home: Path):
        assert expand_home("~/.claude") == temp_home / ".claude"


class TestEntryExists:
    def test_dangling_link_exists(self, temp_dir: Path):
        link = temp_dir / "link"
        link.symlink_to(temp_dir / "missing")
        assert entry_exists(link)
        assert not link.exists()

    def test_missing(self, temp_dir: Path):
        assert not entry_exists(temp_dir / "missing")

    def test_real_path_follows_links(self, temp_dir: Path):
        target = temp_dir / "target"
        target.mkdir()
        link = temp_dir / "link"
        link.symlink_to(target)
        assert real_path(link) == target


class TestReplaceWithSymlink:
    def test_creates_parents(self, temp_dir: Path):
        target = temp_dir / "target"
        target.mkdir()
        link = temp_dir / "a" / "b" / "link"

        replace_with_symlink(link, target)

        assert link.is_symlink()
        assert real_path(link) == target

    def test_replaces_existing_link(self, temp_dir: Path):
        old = temp_dir / "old"
        new = temp_dir / "new"
        old.mkdir()
        new.mkdir()
        link = temp_dir / "link"
        link.symlink_to(old)

        replace_with_symlink(link, new)

        assert real_path(link) == new
        assert old.is_dir()
        assert sorted(p.name for p in temp_dir.iterdir()) == ["link", "new", "old"]

    def test_replaces_directory(self, temp_dir: Path):
        target = temp_dir / "target"
        target.mkdir()
        link = temp_dir / "link"
        (link / "nested").mkdir(parents=True)

        replace_with_symlink(link, target)

        assert link.is_symlink()

    def test_failed_rename_cleans_up(self, temp_dir: Path):
        target = temp_dir / "target"
        target.mkdir()
        link = temp_dir / "link"
        link.write_text("file", encoding="utf-8")

        with patch("mcphub.utils.paths.os.replace", side_effect=PermissionError(13, "denied")):
            with pytest.raises(PermissionError):
                replace_with_symlink(link, target)

        assert sorted(p.name for p in temp_dir.iterdir()) == ["link", "target"]
        assert link.read_text(encoding="utf-8") == "file"


class TestAtomicWrite:
    def test_write_text(self, temp_dir: Path):
        path = temp_dir / "sub" / "file.txt"
        atomic_write(path, "content")
        assert path.read_text(encoding="utf-8") == "content"

    def test_write_bytes(self, temp_dir: Path):
        path = temp_dir / "file.bin"
        atomic_write(path, b"\x00\x01")
        assert path.read_bytes() == b"\x00\x01"

    def test_json_round_trip(self, temp_dir: Path):
        path = temp_dir / "data.json"
        write_json(path, {"name": "cursor", "servers": []})

        assert read_json(path) == {"name": "cursor", "servers": []}
        assert path.read_text(encoding="utf-8") == json.dumps({"name": "cursor", "servers": []}, indent=2) + "\n"


class TestPlatform:
    @patch("mcphub.utils.platform.platform.system", return_value="Darwin")
    def test_macos(self, mock_system):
        assert get_current_platform() == "macos"

    @patch("mcphub.utils.platform.platform.system", return_value="Linux")
    def test_linux(self, mock_system):
        assert get_current_platform() == "linux"

    @patch("mcphub.utils.platform.platform.system", return_value="FreeBSD")
    def test_unknown(self, mock_system):
        assert get_current_platform() == "freebsd"

    def test_supports_symlinks(self, temp_dir: Path):
        assert supports_symlinks(temp_dir)
        assert list(temp_dir.iterdir()) == []

    def test_symlinks_denied(self, temp_dir: Path):
        with patch("mcphub.utils.platform.os.symlink", side_effect=OSError(1, "Operation not permitted")):
            assert not supports_symlinks(temp_dir)

    def test_missing_directory(self, temp_dir: Path):
        assert not supports_symlinks(temp_dir / "missing")
