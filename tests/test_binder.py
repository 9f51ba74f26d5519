"""Unit tests for binding a keyspace onto dataclasses."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest

from core.exceptions import DecodeError
from loader.binder import bind, to_dict
from loader.keyspace import Keyspace
from tests.conftest import DbSection, SampleConfig, ServerSection


@dataclass
class Limits:
    rate: float = 1.0
    burst: int = 5


@dataclass
class RichConfig:
    hosts: List[str] = field(default_factory=list)
    window_size: Tuple[int, int] = (1200, 800)
    labels: Dict[str, int] = field(default_factory=dict)
    timeout: Optional[int] = None
    limits: Optional[Limits] = None
    extra: Any = None
    api_key: str = field(default="", metadata={"key": "apikey"})


class TestBindScalars:
    """Tests for scalar coercion."""

    def test_binds_nested_values(self):
        # Arrange
        config = SampleConfig()
        keyspace = Keyspace({"server": {"port": 9090, "host": "0.0.0.0"}, "debug": True})

        # Act
        result = bind(keyspace, config)

        # Assert
        assert result is config
        assert config.server.port == 9090
        assert config.server.host == "0.0.0.0"
        assert config.debug is True

    def test_coerces_strings_from_environment(self):
        # Arrange
        config = SampleConfig()
        keyspace = Keyspace({"server": {"port": " 7070 "}, "debug": "yes"})

        # Act
        bind(keyspace, config)

        # Assert
        assert config.server.port == 7070
        assert config.debug is True

    def test_number_into_string_field(self):
        # Arrange
        config = SampleConfig()

        # Act
        bind(Keyspace({"name": 42, "server": {"host": True}}), config)

        # Assert
        assert config.name == "42"
        assert config.server.host == "true"

    @pytest.mark.parametrize("value", ["abc", "", "8.5", True, {"a": 1}])
    def test_invalid_int_raises_decode_error(self, value):
        # Arrange
        config = SampleConfig()

        # Assert
        with pytest.raises(DecodeError) as exc_info:
            bind(Keyspace({"server": {"port": value}}), config)
        assert exc_info.value.path == "server.port"

    def test_invalid_bool_raises_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            bind(Keyspace({"debug": "maybe"}), SampleConfig())
        assert exc_info.value.path == "debug"

    def test_failed_bind_leaves_target_untouched(self):
        # Arrange
        config = SampleConfig()

        # Act
        with pytest.raises(DecodeError):
            bind(Keyspace({"name": "changed", "server": {"port": "x"}}), config)

        # Assert
        assert config == SampleConfig()

    def test_unknown_keys_are_ignored(self):
        # Arrange
        config = SampleConfig()

        # Act
        bind(Keyspace({"unknown": {"key": 1}, "server": {"other": 2}}), config)

        # Assert
        assert config == SampleConfig()

    def test_missing_keys_keep_defaults(self):
        # Arrange
        config = SampleConfig()

        # Act
        bind(Keyspace({"db": {"host": "db"}}), config)

        # Assert
        assert config.db.host == "db"
        assert config.db.max_connections == 10
        assert config.server == SampleConfig().server

    def test_section_must_be_mapping(self):
        with pytest.raises(DecodeError) as exc_info:
            bind(Keyspace({"server": "localhost"}), SampleConfig())
        assert exc_info.value.path == "server"

    def test_rejects_non_dataclass_target(self):
        with pytest.raises(TypeError):
            bind(Keyspace(), {"server": {}})


class TestBindContainers:
    """Tests for lists, tuples, dicts, optionals and renamed fields."""

    def test_list_from_yaml_list(self):
        config = RichConfig()
        bind(Keyspace({"hosts": ["a", "b"]}), config)
        assert config.hosts == ["a", "b"]

    def test_list_from_comma_separated_string(self):
        config = RichConfig()
        bind(Keyspace({"hosts": "a, b,c"}), config)
        assert config.hosts == ["a", "b", "c"]

    def test_fixed_tuple(self):
        config = RichConfig()
        bind(Keyspace({"window_size": [800, "600"]}), config)
        assert config.window_size == (800, 600)

    def test_fixed_tuple_wrong_length(self):
        with pytest.raises(DecodeError) as exc_info:
            bind(Keyspace({"window_size": [1, 2, 3]}), RichConfig())
        assert exc_info.value.path == "window_size"

    def test_dict_value_error_names_key(self):
        with pytest.raises(DecodeError) as exc_info:
            bind(Keyspace({"labels": {"a": "x"}}), RichConfig())
        assert exc_info.value.path == "labels.a"

    def test_dict_values_are_coerced(self):
        config = RichConfig()
        bind(Keyspace({"labels": {"a": "1", "b": 2}}), config)
        assert config.labels == {"a": 1, "b": 2}

    def test_optional_scalar(self):
        config = RichConfig()
        bind(Keyspace({"timeout": "30"}), config)
        assert config.timeout == 30

    def test_optional_none(self):
        config = RichConfig(timeout=5)
        bind(Keyspace({"timeout": None}), config)
        assert config.timeout is None

    def test_optional_nested_dataclass_is_created(self):
        config = RichConfig()
        bind(Keyspace({"limits": {"burst": "10"}}), config)
        assert config.limits == Limits(rate=1.0, burst=10)

    def test_any_passes_through(self):
        config = RichConfig()
        bind(Keyspace({"extra": {"k": [1, 2]}}), config)
        assert config.extra == {"k": [1, 2]}

    def test_metadata_key_renames_field(self):
        config = RichConfig()
        bind(Keyspace({"apikey": "secret"}), config)
        assert config.api_key == "secret"


def test_to_dict():
    config = SampleConfig()
    assert to_dict(config)["server"] == {"host": "localhost", "port": 0}


class TestBindEmptyNodes:
    """An empty node keeps the current value unless the field accepts None."""

    def test_empty_scalar_keeps_current_value(self):
        # Arrange
        config = SampleConfig(server=ServerSection(port=8080))

        # Act
        bind(Keyspace({"server": {"port": None}}), config)

        # Assert
        assert config.server.port == 8080

    def test_empty_section_keeps_current_section(self):
        # Arrange
        config = SampleConfig(db=DbSection(host="db", port=5432))

        # Act
        bind(Keyspace({"db": None}), config)

        # Assert
        assert config.db == DbSection(host="db", port=5432)

    def test_empty_node_into_optional_binds_none(self):
        config = RichConfig(limits=Limits())
        bind(Keyspace({"limits": None}), config)
        assert config.limits is None
