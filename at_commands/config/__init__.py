"""Configuration management package.

Provides configuration access with defaults, YAML file loading
and environment variable overrides.
"""

from at_commands.config.config_manager import ConfigManager
from at_commands.config.config_schema import ConfigSchema
from at_commands.config.defaults import get_default_config
from at_commands.config.config_models import (
    Config,
    FramingConfig,
    LoggingConfig,
    LogLevel,
    decode_escapes
)

__all__ = [
    'ConfigManager',
    'ConfigSchema',
    'get_default_config',
    'Config',
    'FramingConfig',
    'LoggingConfig',
    'LogLevel',
    'decode_escapes',
]
