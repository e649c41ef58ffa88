"""
Configuration management for the dbt-core-interface client.

Uses dynaconf for flexible configuration with YAML files and environment overrides.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dynaconf import Dynaconf, Validator

logger = logging.getLogger(__name__)

# Get the project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8581
DEFAULT_REQUEST_TIMEOUT_MS = 25000
DEFAULT_HEALTH_TIMEOUT_MS = 1000

settings = Dynaconf(
    envvar_prefix="DBT_INTERFACE",
    settings_files=[
        str(CONFIG_DIR / "config.yaml"),        # Base configuration
        str(CONFIG_DIR / "config.local.yaml"),  # Local overrides (git-ignored)
        str(CONFIG_DIR / ".secrets.yaml"),      # Secrets file (git-ignored)
    ],
    environments=False,
    load_dotenv=True,
    merge_enabled=True,
    envvar_separator="__",  # Support nested config via DBT_INTERFACE_TIMEOUTS__REQUEST_MS=60000
    validators=[
        Validator("host", default=DEFAULT_HOST, must_exist=True),
        Validator("port", default=DEFAULT_PORT, gte=1, lte=65535),
        Validator("timeouts.request_ms", default=DEFAULT_REQUEST_TIMEOUT_MS, gt=0),
        Validator("timeouts.health_ms", default=DEFAULT_HEALTH_TIMEOUT_MS, gt=0),
    ],
)


class InterfaceConfig:
    """Configuration wrapper for the dbt-core-interface server settings.

    Values are read from the underlying settings object on every access so
    that overrides and reloads are picked up by clients already constructed.
    """

    def __init__(self, source: Dynaconf | None = None):
        self.settings = source if source is not None else settings
        self._validate_config()

    def _validate_config(self):
        """Validate the configuration on initialization."""
        try:
            self.settings.validators.validate()
        except Exception as e:
            logger.warning(f"Configuration validation warning: {e}")
            logger.warning("Falling back to defaults for invalid dbt-core-interface settings")

    def _get_int(self, key: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
        """Read an integer setting, using the default when it is missing or invalid."""
        value = self.settings.get(key, default)
        try:
            number = int(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid value {value!r} for {key}, using {default}")
            return default

        if number < minimum or (maximum is not None and number > maximum):
            logger.warning(f"Out of range value {number} for {key}, using {default}")
            return default
        return number

    @property
    def host(self) -> str:
        """Host the dbt-core-interface server listens on."""
        return str(self.settings.get("host", DEFAULT_HOST))

    @property
    def port(self) -> int:
        """Port the dbt-core-interface server listens on."""
        return self._get_int("port", DEFAULT_PORT, maximum=65535)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def request_timeout_ms(self) -> int:
        """Deadline for POST /lint and POST /format, in milliseconds."""
        return self._get_int("timeouts.request_ms", DEFAULT_REQUEST_TIMEOUT_MS)

    @property
    def health_timeout_ms(self) -> int:
        """Deadline for GET /health, in milliseconds."""
        return self._get_int("timeouts.health_ms", DEFAULT_HEALTH_TIMEOUT_MS)

    def override_from_cli(self, cli_args: Dict[str, Any]):
        """Override configuration with CLI arguments."""
        cli_mapping = {
            "host": "host",
            "port": "port",
            "request_timeout_ms": "timeouts.request_ms",
            "health_timeout_ms": "timeouts.health_ms",
        }

        for cli_key, config_path in cli_mapping.items():
            if cli_args.get(cli_key) is not None:
                self.settings.set(config_path, cli_args[cli_key])

        # Re-validate after overrides
        self._validate_config()


# Global configuration instance
config = InterfaceConfig()


def get_config() -> InterfaceConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> InterfaceConfig:
    """Reload configuration from files."""
    global config
    settings.reload()
    config = InterfaceConfig()
    return config
