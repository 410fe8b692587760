"""Default configuration values for zero-config operation.

This module provides the defaults used when no config.yaml file exists.
"""

from at_commands.config.config_models import (
    Config,
    FramingConfig,
    LoggingConfig,
    LogLevel
)


def get_default_config() -> Config:
    """Get default configuration with sensible values for zero-config operation.

    Returns:
        Config: Complete configuration with all defaults populated.

    Default Values:
        - Framing: ``AT`` prefix, CR LF terminator, 256 byte buffer
        - Logging: INFO level, no console or file output
    """
    return Config(
        framing=FramingConfig(
            at_prefix=True,
            terminator="\\r\\n",  # V.250 command line termination
            buffer_size=256  # Longer than any standard 3GPP command line
        ),
        logging=LoggingConfig(
            level=LogLevel.INFO,
            log_to_file=False,
            log_to_console=False,  # CLI --verbose turns console output on
            log_file_path=None,
            max_file_size_mb=10,  # 10MB before rotation
            backup_count=5  # Keep last 5 rotated files
        )
    )
