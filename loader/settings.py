"""Settings describing where and how configuration is loaded."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ConfigFileSettings:
    """File source settings.

    Attributes:
        config_dir: Directory holding the configuration files ("." when empty)
        file_name_prefix: Optional prefix joined to file names with "_"
        config_type: File format, also used as the file extension
    """
    config_dir: str = ""
    file_name_prefix: str = ""
    config_type: str = "yaml"


@dataclass(frozen=True)
class LoadSettings:
    """How to load configuration into a config dataclass.

    Attributes:
        config_file: File source settings, required
        env_prefix: Prefix of environment variables (e.g. "dictup")
        load_sys_env: Overlay environment variables onto keys defined by
            defaults or files
    """
    config_file: Optional[ConfigFileSettings] = None
    env_prefix: str = ""
    load_sys_env: bool = False

    @property
    def config_dir(self) -> str:
        if self.config_file is None or not self.config_file.config_dir:
            return "."
        return self.config_file.config_dir


__all__ = ["ConfigFileSettings", "LoadSettings"]
