"""Communication logger for AT command frames.

This module provides the CommunicationLogger class, which records the frames
built and parsed by the library user (e.g. the CLI) to multiple destinations
(file, console, in-memory buffer) with log level filtering.
"""

from datetime import datetime
from collections import deque
from threading import Lock
from typing import Optional, List, Dict, Any, Sequence, Union
import sys

from at_commands.config.config_models import LogLevel
from at_commands.logging.log_models import LogEntry, frame_to_text
from at_commands.logging.file_handler import FileHandler


class CommunicationLogger:
    """Central coordinator for communication logging.

    Attributes:
        log_level: Current log level (DEBUG, INFO, WARNING, ERROR)
        enable_file: Whether file logging is enabled
        enable_console: Whether console logging is enabled
        log_file_path: Path to log file (if file logging enabled)

    Example:
        >>> with CommunicationLogger(log_level=LogLevel.INFO) as logger:
        ...     logger.log_command(b"AT+CGMI\\r\\n")
        ...     logger.log_response(b"Quectel\\r\\nOK\\r\\n", values=("Quectel",))
    """

    _LEVEL_PRIORITY = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3
    }

    BUFFER_SIZE = 1000

    def __init__(
        self,
        log_level: Union[LogLevel, str] = LogLevel.INFO,
        enable_file: bool = False,
        enable_console: bool = True,
        log_file_path: Optional[str] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        """Initialize CommunicationLogger with output destinations and log level.

        Args:
            log_level: Log level for filtering (default: INFO)
            enable_file: Enable file logging (default: False)
            enable_console: Enable console logging to stderr (default: True)
            log_file_path: Path to log file (required if enable_file=True)
            max_file_size_mb: Maximum file size before rotation (default: 10)
            backup_count: Number of backup files to keep (default: 5)

        Raises:
            ValueError: If enable_file=True but log_file_path is None
        """
        self.log_level = log_level.value if isinstance(log_level, LogLevel) else log_level
        self.enable_file = enable_file
        self.enable_console = enable_console
        self.log_file_path = log_file_path

        self._lock = Lock()
        self._buffer: deque = deque(maxlen=self.BUFFER_SIZE)

        self._file_handler: Optional[FileHandler] = None
        if self.enable_file:
            if not log_file_path:
                raise ValueError("log_file_path required when enable_file=True")
            try:
                self._file_handler = FileHandler(
                    log_file_path=log_file_path,
                    max_size_mb=max_file_size_mb,
                    backup_count=backup_count
                )
            except OSError as e:
                print(f"WARNING: Failed to initialize file logging: {e}", file=sys.stderr)

    def log(self, entry: LogEntry) -> None:
        """Log an entry to all enabled destinations with level filtering."""
        if not self._should_log(entry.level):
            return

        with self._lock:
            self._buffer.append(entry)

            if self._file_handler:
                self._file_handler.write(entry)

            if self.enable_console:
                print(entry.to_string(), file=sys.stderr)

    def _should_log(self, entry_level: str) -> bool:
        entry_priority = self._LEVEL_PRIORITY.get(entry_level, 0)
        current_priority = self._LEVEL_PRIORITY.get(self.log_level, 0)
        return entry_priority >= current_priority

    def log_command(self, command: bytes, source: str = "CommandBuilder") -> None:
        """Log a command frame that was built (convenience method).

        Args:
            command: The complete frame, terminator included
            source: Component name
        """
        entry = LogEntry(
            timestamp=datetime.now(),
            level="INFO",
            source=source,
            message="Built command",
            command=frame_to_text(command),
            status="SUCCESS",
            details={"length": len(command)}
        )
        self.log(entry)

    def log_response(
        self,
        response: bytes,
        values: Sequence[Any],
        source: str = "CommandParser"
    ) -> None:
        """Log a response frame and the values parsed from it (convenience method).

        Args:
            response: The received frame
            values: Values extracted by the parser
            source: Component name
        """
        entry = LogEntry(
            timestamp=datetime.now(),
            level="INFO",
            source=source,
            message="Parsed response",
            response=frame_to_text(response),
            status="SUCCESS",
            details={"values": list(values)}
        )
        self.log(entry)

    def log_error(
        self,
        source: str,
        error: str,
        details: Optional[Dict[str, Any]] = None,
        command: Optional[bytes] = None,
        response: Optional[bytes] = None
    ) -> None:
        """Log a failed build or parse (convenience method).

        Example:
            >>> logger.log_error(
            ...     source="CommandBuilder",
            ...     error="Command does not fit in buffer (capacity: 5, required: 13)"
            ... )
        """
        entry = LogEntry(
            timestamp=datetime.now(),
            level="ERROR",
            source=source,
            message="Error occurred",
            command=frame_to_text(command) if command is not None else None,
            response=frame_to_text(response) if response is not None else None,
            status="ERROR",
            error=error,
            details=details
        )
        self.log(entry)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Change log level dynamically."""
        self.log_level = level.value if isinstance(level, LogLevel) else level

    def get_entries(self, limit: Optional[int] = None) -> List[LogEntry]:
        """Get entries from the in-memory buffer, oldest first.

        Args:
            limit: Return only the most recent ``limit`` entries
        """
        with self._lock:
            entries = list(self._buffer)
        if limit:
            entries = entries[-limit:]
        return entries

    def clear_buffer(self) -> None:
        """Clear the in-memory buffer. File logs are not affected."""
        with self._lock:
            self._buffer.clear()

    def flush(self) -> None:
        if self._file_handler:
            self._file_handler.flush()

    def close(self) -> None:
        """Close the file handler. Call when shutting down."""
        if self._file_handler:
            self._file_handler.close()
            self._file_handler = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
