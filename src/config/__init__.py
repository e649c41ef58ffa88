"""Configuration for the dbt-core-interface client."""

from src.config.settings import InterfaceConfig, get_config, reload_config

__all__ = ["InterfaceConfig", "get_config", "reload_config"]
