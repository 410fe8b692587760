"""Log data models for communication logging.

This module defines the immutable log entry recorded for every command frame
built and every response frame parsed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional
import json


def frame_to_text(frame: bytes) -> str:
    """Printable form of a frame: ``b"AT+CGMI\\r\\n"`` -> ``'AT+CGMI\\r\\n'``."""
    return repr(bytes(frame))[2:-1]


@dataclass(frozen=True)
class LogEntry:
    """Immutable log entry for communication logging.

    Attributes:
        timestamp: When the event occurred
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        source: Component name (CommandBuilder, CommandParser, ...)
        message: Human-readable message describing the event
        details: Additional structured data, e.g. parsed values
        command: Command frame, escaped (optional)
        response: Response frame, escaped (optional)
        status: Outcome (SUCCESS, ERROR) (optional)
        error: Error message if applicable (optional)

    Example:
        >>> entry = LogEntry(
        ...     timestamp=datetime.now(),
        ...     level="INFO",
        ...     source="CommandBuilder",
        ...     message="Built command",
        ...     command="AT+CGMI",
        ...     status="SUCCESS"
        ... )
        >>> entry.to_string()
        '2025-01-12 10:30:15.234 | INFO    | CommandBuilder  | Built command | CMD: AT+CGMI | STATUS: SUCCESS'
    """

    timestamp: datetime
    level: str  # DEBUG, INFO, WARNING, ERROR
    source: str
    message: str
    details: Optional[Dict[str, Any]] = None

    command: Optional[str] = None
    response: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary for serialization.

        Returns:
            Dictionary with all fields, ISO format for timestamp
        """
        return {
            'timestamp': self.timestamp.isoformat(),
            'level': self.level,
            'source': self.source,
            'message': self.message,
            'details': self.details,
            'command': self.command,
            'response': self.response,
            'status': self.status,
            'error': self.error
        }

    def to_string(self) -> str:
        """Format log entry as human-readable string.

        Returns:
            "YYYY-MM-DD HH:MM:SS.mmm | LEVEL | SOURCE | MESSAGE" followed by
            whichever of command, response, status and error are set
        """
        timestamp_str = self.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        base = f"{timestamp_str} | {self.level:7} | {self.source:15} | {self.message}"

        if self.command:
            base += f" | CMD: {self.command}"
        if self.response:
            base += f" | RESP: {self.response}"
        if self.status:
            base += f" | STATUS: {self.status}"
        if self.error:
            base += f" | ERROR: {self.error}"

        return base

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LogEntry':
        """Create LogEntry from dictionary.

        Args:
            data: Dictionary with at least timestamp, level, source, message
        """
        timestamp = data['timestamp']
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)

        return cls(
            timestamp=timestamp,
            level=data['level'],
            source=data['source'],
            message=data['message'],
            details=data.get('details'),
            command=data.get('command'),
            response=data.get('response'),
            status=data.get('status'),
            error=data.get('error')
        )

    @classmethod
    def from_json(cls, json_str: str) -> 'LogEntry':
        return cls.from_dict(json.loads(json_str))
