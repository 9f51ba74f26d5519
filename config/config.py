"""Application configuration for the dictup service.

Values are resolved with the following precedence (lowest first):
1. Dataclass defaults below
2. ``config_base.yaml`` in the config directory
3. ``config_<profile>.yaml`` for the active profile (``DICTUP_APP_PROFILE``
   or ``app.profile``)
4. ``DICTUP_*`` environment variables for keys already defined above
"""
from __future__ import annotations

from dataclasses import dataclass, field

from loader import ConfigFileSettings, LoadSettings, load

ENV_PREFIX = "dictup"
CONFIG_TYPE = "yaml"
FILE_PREFIX = "config"


@dataclass
class AppSection:
    """Application section.

    Attributes:
        profile: Profile selected by the base file when no env var is set
    """
    profile: str = ""


@dataclass
class ServerConfig:
    """HTTP server configuration.

    Attributes:
        host: Interface to bind to
        port: Listening port
    """
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class LoggerConfig:
    """Logging configuration.

    Attributes:
        level: Minimum log level (debug, info, warning, error)
    """
    level: str = "info"


@dataclass
class MongoDatasourceConfig:
    """MongoDB connection settings."""
    host: str = "localhost"
    port: int = 27017
    schema: str = "mongodb"


@dataclass
class DatasourceConfig:
    mongo: MongoDatasourceConfig = field(default_factory=MongoDatasourceConfig)


@dataclass
class AppConfig:
    """Complete service configuration."""
    app: AppSection = field(default_factory=AppSection)
    server: ServerConfig = field(default_factory=ServerConfig)
    logger: LoggerConfig = field(default_factory=LoggerConfig)
    datasource: DatasourceConfig = field(default_factory=DatasourceConfig)


def load_settings(config_dir: str = "") -> LoadSettings:
    """Load settings used by the service for ``config_dir``."""
    return LoadSettings(
        config_file=ConfigFileSettings(
            config_dir=config_dir,
            file_name_prefix=FILE_PREFIX,
            config_type=CONFIG_TYPE,
        ),
        env_prefix=ENV_PREFIX,
        load_sys_env=True,
    )


def new_config(config_dir: str = "") -> AppConfig:
    """Build the service configuration from ``config_dir``.

    Raises:
        ConfigLoaderError: If the configuration cannot be loaded
    """
    app_config = AppConfig()
    load(app_config, load_settings(config_dir))
    return app_config


__all__ = [
    "AppConfig",
    "AppSection",
    "DatasourceConfig",
    "LoggerConfig",
    "MongoDatasourceConfig",
    "ServerConfig",
    "load_settings",
    "new_config",
]
