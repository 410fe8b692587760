"""Communication logging module.

Records the command frames built and the response frames parsed, for
debugging and troubleshooting device communication.
"""

from at_commands.logging.log_models import LogEntry, frame_to_text
from at_commands.logging.file_handler import FileHandler
from at_commands.logging.communication_logger import CommunicationLogger

__all__ = ['LogEntry', 'frame_to_text', 'FileHandler', 'CommunicationLogger']
