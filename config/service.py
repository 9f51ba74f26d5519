"""Configuration service facade for simplified configuration access.

Gives flat, read-only access to the resolved AppConfig so client code does
not reach through nested sections.
"""
from __future__ import annotations

from typing import Any

from config.config import AppConfig, new_config
from loader.binder import to_dict


class ConfigurationService:
    """Facade for service configuration.

    Example:
        config_service = ConfigurationService(config)
        port = config_service.server_port  # Instead of config.server.port
    """

    def __init__(self, config: AppConfig):
        self._config = config

    @property
    def profile(self) -> str:
        return self._config.app.profile

    # Server configuration
    @property
    def server_host(self) -> str:
        return self._config.server.host

    @property
    def server_port(self) -> int:
        return self._config.server.port

    @property
    def server_address(self) -> str:
        """Get ``host:port`` the server listens on."""
        return f"{self.server_host}:{self.server_port}"

    @property
    def log_level(self) -> str:
        """Get log level, upper-cased for the logging backend."""
        return self._config.logger.level.upper()

    # Datasource configuration
    @property
    def mongo_uri(self) -> str:
        """Get MongoDB connection URI."""
        mongo = self._config.datasource.mongo
        return f"{mongo.schema}://{mongo.host}:{mongo.port}"

    @property
    def raw_config(self) -> AppConfig:
        """Get raw configuration object.

        Returns:
            Underlying AppConfig instance for direct access
        """
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a nested dictionary for serialization."""
        return to_dict(self._config)


class ConfigurationServiceFactory:
    """Factory for creating ConfigurationService instances."""

    @staticmethod
    def create_from_dir(config_dir: str = "") -> ConfigurationService:
        """Load configuration from ``config_dir`` and wrap it.

        Raises:
            ConfigLoaderError: If the configuration cannot be loaded
        """
        return ConfigurationService(new_config(config_dir))

    @staticmethod
    def create_from_config(config: AppConfig) -> ConfigurationService:
        return ConfigurationService(config)
