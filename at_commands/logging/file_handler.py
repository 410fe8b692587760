"""Log file writer with size-based rotation."""

from pathlib import Path
from threading import Lock
from typing import Optional, TextIO
import sys

from at_commands.logging.log_models import LogEntry


class FileHandler:
    """Thread-safe log file writer.

    Appends one formatted line per entry. When the file reaches
    ``max_size_mb`` it is renamed to ``<name>.1`` (older backups shift up to
    ``<name>.<backup_count>``) and a fresh file is started.

    Example:
        >>> with FileHandler("~/.at-commands/logs/comm.log", max_size_mb=1) as handler:
        ...     handler.write(entry)
        True
    """

    def __init__(self, log_file_path: str, max_size_mb: int = 10, backup_count: int = 5):
        """Open the log file, creating its directory if needed.

        Args:
            log_file_path: Path to log file (supports ~ expansion)
            max_size_mb: File size in MB that triggers rotation
            backup_count: Number of rotated files to keep

        Raises:
            OSError: If the directory cannot be created or the file opened
        """
        self.log_file_path = Path(log_file_path).expanduser().resolve()
        self.max_size_bytes = max_size_mb * 1024 * 1024
        self.backup_count = backup_count
        self._lock = Lock()

        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_handle: Optional[TextIO] = self._open()

    def _open(self) -> TextIO:
        return open(self.log_file_path, mode='a', encoding='utf-8')

    @property
    def closed(self) -> bool:
        return self._file_handle is None

    def write(self, entry: LogEntry) -> bool:
        """Append an entry, rotating first if the file is full.

        Returns:
            True if written, False if the handler is closed or the write
            failed (the failure is reported on stderr)
        """
        with self._lock:
            if self._file_handle is None:
                return False
            try:
                self._rotate_if_needed()
                self._file_handle.write(entry.to_string() + '\n')
                self._file_handle.flush()
                return True
            except OSError as e:
                print(f"ERROR: Failed to write log entry: {e}", file=sys.stderr)
                return False

    def _rotate_if_needed(self) -> None:
        # Caller holds self._lock
        if self.log_file_path.stat().st_size < self.max_size_bytes:
            return

        self._file_handle.close()
        if self.backup_count > 0:
            for index in range(self.backup_count - 1, 0, -1):
                source = self._backup_path(index)
                if source.exists():
                    source.replace(self._backup_path(index + 1))
            self.log_file_path.replace(self._backup_path(1))
        else:
            self.log_file_path.unlink()
        self._file_handle = self._open()

    def _backup_path(self, index: int) -> Path:
        return self.log_file_path.with_name(f"{self.log_file_path.name}.{index}")

    def flush(self) -> None:
        with self._lock:
            if self._file_handle is not None:
                self._file_handle.flush()

    def close(self) -> None:
        """Flush and close the file. Safe to call more than once."""
        with self._lock:
            if self._file_handle is not None:
                self._file_handle.close()
                self._file_handle = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
