"""Unit tests for FileHandler."""

from datetime import datetime

import pytest

from at_commands.logging import FileHandler, LogEntry


def make_entry(message: str = "Built command") -> LogEntry:
    return LogEntry(
        timestamp=datetime(2025, 1, 12, 10, 30, 15),
        level="INFO",
        source="CommandBuilder",
        message=message
    )


class TestFileHandler:
    """Test writing, rotation and closing."""

    def test_creates_directory(self, tmp_path):
        path = tmp_path / "logs" / "comm.log"

        with FileHandler(str(path)):
            pass

        assert path.exists()

    def test_write(self, tmp_path):
        path = tmp_path / "comm.log"

        with FileHandler(str(path)) as handler:
            assert handler.write(make_entry("first"))
            assert handler.write(make_entry("second"))

        lines = path.read_text(encoding='utf-8').splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("| first")
        assert lines[1].endswith("| second")

    def test_appends_to_existing_file(self, tmp_path):
        path = tmp_path / "comm.log"
        path.write_text("existing\n", encoding='utf-8')

        with FileHandler(str(path)) as handler:
            handler.write(make_entry())

        assert path.read_text(encoding='utf-8').startswith("existing\n")

    def test_rotation(self, tmp_path):
        """Test full files are shifted to numbered backups."""
        path = tmp_path / "comm.log"
        handler = FileHandler(str(path), backup_count=2)
        handler.max_size_bytes = 1

        handler.write(make_entry("one"))
        handler.write(make_entry("two"))
        handler.write(make_entry("three"))
        handler.write(make_entry("four"))
        handler.close()

        assert path.read_text(encoding='utf-8').strip().endswith("| four")
        assert (tmp_path / "comm.log.1").read_text(encoding='utf-8').strip().endswith("| three")
        assert (tmp_path / "comm.log.2").read_text(encoding='utf-8').strip().endswith("| two")
        assert not (tmp_path / "comm.log.3").exists()

    def test_rotation_without_backups(self, tmp_path):
        path = tmp_path / "comm.log"
        handler = FileHandler(str(path), backup_count=0)
        handler.max_size_bytes = 1

        handler.write(make_entry("one"))
        handler.write(make_entry("two"))
        handler.close()

        assert path.read_text(encoding='utf-8').strip().endswith("| two")
        assert not (tmp_path / "comm.log.1").exists()

    def test_close_is_idempotent(self, tmp_path):
        handler = FileHandler(str(tmp_path / "comm.log"))

        handler.close()
        handler.close()

        assert handler.closed
        assert handler.write(make_entry()) is False

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding='utf-8')

        with pytest.raises(OSError):
            FileHandler(str(blocker / "comm.log"))
