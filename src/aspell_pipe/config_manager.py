"""Configuration management module.

Persistent defaults for the aspell-pipe command line, stored as TOML at
~/.aspell-pipe/config.toml. Environment variables override file values:

    ASPELL_PIPE_EXECUTABLE      Aspell binary name or path
    ASPELL_PIPE_READ_TIMEOUT    Seconds to wait for each response line
"""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import tomli
import tomlkit

from aspell_pipe.session import DEFAULT_EXECUTABLE

logger = logging.getLogger(__name__)

EXECUTABLE_ENV_VAR = "ASPELL_PIPE_EXECUTABLE"
READ_TIMEOUT_ENV_VAR = "ASPELL_PIPE_READ_TIMEOUT"


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class AspellPipeConfig:
    """aspell-pipe configuration data."""

    executable: str = DEFAULT_EXECUTABLE
    default_dictionary: str | None = None
    read_timeout: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        data = asdict(self)
        # TOML has no null
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AspellPipeConfig":
        """Create from dictionary."""
        read_timeout = data.get("read_timeout")
        return cls(
            executable=data.get("executable", DEFAULT_EXECUTABLE),
            default_dictionary=data.get("default_dictionary"),
            read_timeout=float(read_timeout) if read_timeout is not None else None,
        )


class ConfigManager:
    """Manage the aspell-pipe configuration file."""

    DEFAULT_CONFIG_DIR = Path.home() / ".aspell-pipe"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file

        Raises:
            ConfigError: If a custom path does not exist
        """
        if custom_path:
            path = Path(custom_path).expanduser().resolve()
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return path

        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def _resolve_path(cls, custom_path: str | None) -> Path:
        """Resolve a config path that may not exist yet."""
        if custom_path:
            return Path(custom_path).expanduser().resolve()
        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> AspellPipeConfig:
        """Load configuration from file, then apply environment overrides.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            AspellPipeConfig object

        Raises:
            ConfigError: If loading fails
        """
        config = cls._read_config_file(cls.get_config_path(custom_path))
        return cls._apply_env_overrides(config)

    @classmethod
    def _read_config_file(cls, config_path: Path) -> AspellPipeConfig:
        if not config_path.exists():
            logger.debug("Config file not found, using defaults")
            return AspellPipeConfig()

        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
            config = AspellPipeConfig.from_dict(data)
        except (OSError, ValueError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return config

    @classmethod
    def _apply_env_overrides(cls, config: AspellPipeConfig) -> AspellPipeConfig:
        executable = os.getenv(EXECUTABLE_ENV_VAR)
        if executable:
            config.executable = executable

        read_timeout = os.getenv(READ_TIMEOUT_ENV_VAR)
        if read_timeout:
            try:
                config.read_timeout = float(read_timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid {READ_TIMEOUT_ENV_VAR}: {read_timeout}")

        return config

    @classmethod
    def save_config(cls, config: AspellPipeConfig, custom_path: str | None = None) -> None:
        """Save configuration to file.

        Existing comments and formatting are preserved. The file is written
        to a temporary sibling and atomically renamed into place.

        Args:
            config: Configuration to save
            custom_path: Custom config file path (optional)

        Raises:
            ConfigError: If saving fails
        """
        temp_path: Path | None = None
        try:
            config_path = cls._resolve_path(custom_path)
            config_path.parent.mkdir(parents=True, exist_ok=True)

            temp_path = config_path.with_suffix(".tmp")

            if config_path.exists():
                with open(config_path) as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()

            values = config.to_dict()
            for key in list(doc.keys()):
                if key not in values:
                    del doc[key]
            for key, value in values.items():
                doc[key] = value

            with open(temp_path, "w") as f:
                tomlkit.dump(doc, f)

            os.chmod(temp_path, 0o600)
            temp_path.replace(config_path)

            logger.debug(f"Saved config to: {config_path}")

        except Exception as e:
            if temp_path and temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to save config: {e}") from e

    @classmethod
    def update_config(cls, custom_path: str | None = None, **updates: Any) -> AspellPipeConfig:
        """Update configuration values.

        Args:
            custom_path: Custom config file path (optional)
            **updates: Configuration values to update

        Returns:
            Updated AspellPipeConfig

        Raises:
            ConfigError: If update fails
        """
        # Environment overrides are never persisted
        config = cls._read_config_file(cls._resolve_path(custom_path))

        for key, value in updates.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"Unknown config key: {key}")

        cls.save_config(config, custom_path)
        return config


__all__ = [
    "AspellPipeConfig",
    "ConfigError",
    "ConfigManager",
]
