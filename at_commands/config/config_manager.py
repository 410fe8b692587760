"""Configuration manager for at-commands.

Loads configuration in layers (defaults, YAML file, environment variables),
validates the merged result and converts it into a frozen Config.
"""

from pathlib import Path
from typing import Optional, Dict, Any, Mapping
from copy import deepcopy
import os
import yaml

from at_commands.config.config_models import (
    Config,
    FramingConfig,
    LoggingConfig,
    LogLevel
)
from at_commands.config.defaults import get_default_config
from at_commands.config.config_schema import ConfigSchema
from at_commands.core.exceptions import ConfigError


class ConfigManager:
    """Layered configuration loader.

    Loading order, later layers winning:
    1. Defaults from defaults.py
    2. YAML file (explicit path, or the first of the search paths that exists)
    3. Environment variables ``AT_COMMANDS_<SECTION>_<KEY>``

    Each manager owns its own configuration; there is no shared instance.

    Example:
        >>> manager = ConfigManager(Path("at-commands.yaml"))
        >>> config = manager.load()
        >>> config.framing.buffer_size
        256
        >>> manager.get_source("framing.buffer_size")
        'default'
    """

    ENV_PREFIX = "AT_COMMANDS_"

    def __init__(self,
                 config_path: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """Initialize manager.

        Args:
            config_path: Path to a YAML file. If None, the search paths are tried.
            environ: Environment to read overrides from (default: os.environ)
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self._environ = environ if environ is not None else os.environ
        self._config: Optional[Config] = None
        self._config_source: Dict[str, str] = {}
        self._loaded_path: Optional[Path] = None

    @property
    def config(self) -> Config:
        """The loaded configuration, loading it on first access."""
        if self._config is None:
            self.load()
        return self._config

    @property
    def loaded_path(self) -> Optional[Path]:
        """Path of the YAML file that was loaded, if any."""
        return self._loaded_path

    def load(self) -> Config:
        """Load, merge and validate configuration.

        Returns:
            Validated Config object

        Raises:
            ConfigError: The file cannot be read or parsed, or the merged
                configuration fails validation
        """
        self._config_source = {}
        self._loaded_path = None

        config_dict = get_default_config().to_dict()
        self._mark_source(config_dict, "default")

        path = self.config_path if self.config_path is not None else self._search_config_paths()
        if path is not None:
            if not path.exists():
                raise ConfigError(f"Configuration file not found: {path}")
            file_config = self._load_from_file(path)
            config_dict = self._merge_configs(config_dict, file_config)
            self._mark_source(file_config, "file")
            self._loaded_path = path

        env_overrides = self._env_overrides()
        if env_overrides:
            config_dict = self._merge_configs(config_dict, env_overrides)
            self._mark_source(env_overrides, "env")

        self._normalize(config_dict)
        is_valid, validation_errors = ConfigSchema.validate_config(config_dict)
        if not is_valid:
            raise ConfigError("Configuration validation failed", validation_errors)

        self._config = self._dict_to_config(config_dict)
        return self._config

    def get_source(self, key: str) -> Optional[str]:
        """Where a value came from: "default", "file" or "env".

        Args:
            key: Dotted key such as "framing.terminator"
        """
        return self._config_source.get(key)

    @staticmethod
    def _search_config_paths() -> Optional[Path]:
        """Search for a configuration file in standard locations.

        Search order:
            1. ./at-commands.yaml (current directory)
            2. ~/.at-commands/config.yaml (user home directory)
        """
        search_paths = [
            Path("./at-commands.yaml"),
            Path.home() / ".at-commands" / "config.yaml"
        ]

        for path in search_paths:
            if path.exists() and path.is_file():
                return path

        return None

    @staticmethod
    def _load_from_file(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML, or
                is not a mapping
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file {path}: {e}") from e

        if config_dict is None:
            return {}
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")
        return config_dict

    def _env_overrides(self) -> Dict[str, Any]:
        """Collect environment variable overrides.

        Examples:
            AT_COMMANDS_FRAMING_BUFFER_SIZE=64
            AT_COMMANDS_FRAMING_AT_PREFIX=false
            AT_COMMANDS_LOGGING_LEVEL=DEBUG
        """
        overrides: Dict[str, Dict[str, Any]] = {}

        for env_name, env_value in self._environ.items():
            if not env_name.startswith(self.ENV_PREFIX):
                continue

            # AT_COMMANDS_FRAMING_BUFFER_SIZE -> ["framing", "buffer_size"]
            parts = env_name[len(self.ENV_PREFIX):].lower().split('_', 1)
            if len(parts) != 2:
                continue

            section, key = parts
            overrides.setdefault(section, {})[key] = self._parse_env_value(env_value)

        return overrides

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable value to bool, int or str."""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        if value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    @staticmethod
    def _merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge two configuration dictionaries (override takes precedence)."""
        merged = deepcopy(base)

        for section, section_values in override.items():
            if isinstance(section_values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(section_values)
            else:
                merged[section] = section_values

        return merged

    def _mark_source(self, config: Dict[str, Any], source: str) -> None:
        for section, section_values in config.items():
            if isinstance(section_values, dict):
                for key in section_values.keys():
                    self._config_source[f"{section}.{key}"] = source

    @staticmethod
    def _normalize(config_dict: Dict[str, Any]) -> None:
        # Log levels are accepted in any case
        logging_section = config_dict.get('logging')
        if isinstance(logging_section, dict) and isinstance(logging_section.get('level'), str):
            logging_section['level'] = logging_section['level'].upper()

    @staticmethod
    def _dict_to_config(config_dict: Dict[str, Any]) -> Config:
        """Convert a validated configuration dictionary to a Config object."""
        framing_dict = config_dict.get('framing', {})
        framing = FramingConfig(
            at_prefix=framing_dict.get('at_prefix', True),
            terminator=framing_dict.get('terminator', "\\r\\n"),
            buffer_size=framing_dict.get('buffer_size', 256)
        )

        logging_dict = config_dict.get('logging', {})
        logging = LoggingConfig(
            level=LogLevel(logging_dict.get('level', LogLevel.INFO.value)),
            log_to_file=logging_dict.get('log_to_file', False),
            log_to_console=logging_dict.get('log_to_console', False),
            log_file_path=logging_dict.get('log_file_path'),
            max_file_size_mb=logging_dict.get('max_file_size_mb', 10),
            backup_count=logging_dict.get('backup_count', 5)
        )

        return Config(framing=framing, logging=logging)
