"""
Tests for tag file creation.
"""

from unittest.mock import patch

from src.hybrid_join_watcher.utils.tag_file import TAG_CONTENT, write_tag_file


class TestWriteTagFile:
    """Tests for write_tag_file."""

    def test_creates_file_and_directory(self, tmp_path):
        """Test that missing parent directories are created."""
        path = tmp_path / "Microsoft" / "HybridJoinWatcher" / "watcher.tag"

        assert write_tag_file(str(path)) is True
        assert path.read_text(encoding="utf-8") == TAG_CONTENT

    def test_overwrites_existing_file(self, tmp_path):
        """Test that an existing tag file is replaced."""
        path = tmp_path / "watcher.tag"
        path.write_text("old", encoding="utf-8")

        assert write_tag_file(str(path)) is True
        assert path.read_text(encoding="utf-8") == "Installed"

    def test_write_failure_is_logged(self, tmp_path, caplog):
        """Test that an unwritable location is reported, not raised."""
        with patch("builtins.open", side_effect=PermissionError("denied")):
            assert write_tag_file(str(tmp_path / "watcher.tag")) is False

        assert "Unable to write tag file" in caplog.text
