"""Shared fixtures for loader tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import pytest
from loguru import logger

from loader import ConfigFileSettings, LoadSettings


@dataclass
class ServerSection:
    host: str = "localhost"
    port: int = 0


@dataclass
class DbSection:
    host: str = ""
    port: int = 0
    max_connections: int = 10


@dataclass
class SampleConfig:
    server: ServerSection = field(default_factory=ServerSection)
    db: DbSection = field(default_factory=DbSection)
    debug: bool = False
    name: str = "sample"


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a config file into a temporary config dir and return its path."""
    def _write(file_name: str, content: str) -> Path:
        path = tmp_path / file_name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def settings(tmp_path: Path) -> LoadSettings:
    return LoadSettings(
        config_file=ConfigFileSettings(
            config_dir=str(tmp_path),
            file_name_prefix="config",
            config_type="yaml",
        ),
        env_prefix="prefix",
        load_sys_env=True,
    )


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def empty_env() -> Dict[str, str]:
    return {}
