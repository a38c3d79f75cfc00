"""Configuration management module.

This module handles persistent configuration storage using TOML format.
Stores user preferences like subscription, default resource group,
location, output format and authentication method.

Security:
- Config file permissions: 0600 (owner read/write only)
- Path validation
- Client secrets are never stored (environment only)
"""

import logging
import os
import tempfile
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

try:
    import tomli  # type: ignore[import]
except ImportError:
    # Fallback for older Python versions
    try:
        import tomllib as tomli  # type: ignore[import]
    except ImportError as e:
        raise ImportError("toml library not available. Install with: pip install tomli") from e

try:
    import tomlkit
except ImportError as e:
    raise ImportError("tomlkit library not available. Install with: pip install tomlkit") from e

logger = logging.getLogger(__name__)

SUBSCRIPTION_ENV_VAR = "AZURE_SUBSCRIPTION_ID"
OUTPUT_FORMATS = ("table", "json")


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class AzmgmtConfig:
    """azmgmt configuration data."""

    subscription_id: str | None = None
    default_resource_group: str | None = None
    default_location: str | None = None
    output_format: str = "table"
    auth_method: str = "azure_cli"
    tenant_id: str | None = None
    client_id: str | None = None
    managed_identity_client_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        data = asdict(self)
        # Filter out None values as TOML doesn't support them
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AzmgmtConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        config = cls(**{k: v for k, v in data.items() if k in known})
        if config.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Invalid output_format: {config.output_format}. "
                f"Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )
        return config

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


class ConfigManager:
    """Manage azmgmt configuration file.

    Configuration is stored at ~/.azmgmt/config.toml with secure permissions.
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".azmgmt"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def _validate_config_path(cls, path: Path) -> Path:
        """Validate configuration file path for security.

        Ensures the path is within ~/.azmgmt/, the current working directory
        or the system temporary directory.

        Args:
            path: Path to validate

        Returns:
            Resolved path

        Raises:
            ConfigError: If path is outside allowed directories
        """
        resolved_path = path.resolve()

        allowed_dirs = [
            cls.DEFAULT_CONFIG_DIR.resolve(),
            Path.cwd().resolve(),
            Path(tempfile.gettempdir()).resolve(),
        ]

        for allowed_dir in allowed_dirs:
            try:
                resolved_path.relative_to(allowed_dir)
                return resolved_path
            except ValueError:
                continue

        raise ConfigError(
            f"Config path outside allowed directories: {resolved_path}\n"
            f"Allowed directories:\n"
            f"  - {cls.DEFAULT_CONFIG_DIR}\n"
            f"  - {Path.cwd()}"
        )

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file

        Raises:
            ConfigError: If path is invalid or outside allowed directories
        """
        if custom_path:
            path = cls._validate_config_path(Path(custom_path).expanduser())
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return path

        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def ensure_config_dir(cls) -> Path:
        """Ensure config directory exists with secure permissions.

        Raises:
            ConfigError: If directory creation fails
        """
        try:
            cls.DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            os.chmod(cls.DEFAULT_CONFIG_DIR, 0o700)
            logger.debug(f"Config directory ready: {cls.DEFAULT_CONFIG_DIR}")
            return cls.DEFAULT_CONFIG_DIR
        except Exception as e:
            raise ConfigError(f"Failed to create config directory: {e}") from e

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> AzmgmtConfig:
        """Load configuration from file.

        A missing default config file yields default values.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            AzmgmtConfig object

        Raises:
            ConfigError: If loading fails
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            logger.debug("Config file not found, using defaults")
            return AzmgmtConfig()

        try:
            mode = config_path.stat().st_mode & 0o777
            if mode & 0o077:
                logger.warning(
                    f"Config file has insecure permissions: {oct(mode)}. Fixing to 0600..."
                )
                os.chmod(config_path, 0o600)

            with open(config_path, "rb") as f:
                data = tomli.load(f)

            logger.debug(f"Loaded config from: {config_path}")
            return AzmgmtConfig.from_dict(data)

        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e

    @classmethod
    def save_config(cls, config: AzmgmtConfig, custom_path: str | None = None) -> None:
        """Save configuration to file.

        Existing comments and formatting are preserved via tomlkit; the file
        is written to a temporary path and atomically renamed.

        Raises:
            ConfigError: If saving fails or path is outside allowed directories
        """
        temp_path: Path | None = None
        try:
            if custom_path:
                config_path = cls._validate_config_path(Path(custom_path).expanduser())
                config_path.parent.mkdir(parents=True, exist_ok=True)
            else:
                cls.ensure_config_dir()
                config_path = cls.DEFAULT_CONFIG_FILE

            temp_path = config_path.with_suffix(".tmp")

            if config_path.exists():
                with open(config_path) as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()

            config_dict = config.to_dict()
            for key in list(doc.keys()):
                if key in AzmgmtConfig.field_names() and key not in config_dict:
                    del doc[key]
            for key, value in config_dict.items():
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
    def update_config(cls, custom_path: str | None = None, **updates: Any) -> AzmgmtConfig:
        """Update configuration values.

        Raises:
            ConfigError: If a key is unknown or saving fails
        """
        config = cls.load_config(custom_path)

        for key, value in updates.items():
            if key not in AzmgmtConfig.field_names():
                raise ConfigError(
                    f"Unknown config key: {key}. "
                    f"Valid keys: {', '.join(AzmgmtConfig.field_names())}"
                )
            setattr(config, key, value)

        if config.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output_format: {config.output_format}")

        cls.save_config(config, custom_path)
        return config

    @classmethod
    def get_subscription_id(
        cls,
        cli_value: str | None = None,
        custom_path: str | None = None,
        config: AzmgmtConfig | None = None,
    ) -> str:
        """Get subscription ID.

        Precedence: CLI value, AZURE_SUBSCRIPTION_ID, config file.

        Raises:
            ConfigError: If no subscription is configured anywhere
        """
        subscription_id = (
            cli_value
            or os.environ.get(SUBSCRIPTION_ENV_VAR)
            or (config or cls.load_config(custom_path)).subscription_id
        )
        if not subscription_id:
            raise ConfigError(
                "No subscription configured. Use --subscription, set "
                f"{SUBSCRIPTION_ENV_VAR}, or run 'azmgmt config set subscription_id <id>'."
            )
        return subscription_id


__all__ = ["AzmgmtConfig", "ConfigError", "ConfigManager"]
