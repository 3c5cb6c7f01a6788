"""Unit tests for redis_counter.config module."""

import pytest
import os
import tempfile

from redis_counter.config import ClientConfig, NetworkConfig, SecurityConfig
from redis_counter.exceptions import ConfigurationException


class TestNetworkConfig:
    """Tests for NetworkConfig."""

    def test_default_values(self):
        config = NetworkConfig()
        assert config.host == "localhost"
        assert config.port == 6379
        assert config.db == 0
        assert config.url is None
        assert config.connection_timeout == 5.0
        assert config.socket_timeout is None
        assert config.ssl is False

    def test_custom_values(self, custom_config):
        network = custom_config.network
        assert network.host == "cache.internal"
        assert network.port == 6380
        assert network.db == 2
        assert network.connection_timeout == 2.5
        assert network.socket_timeout == 1.0
        assert network.ssl is True

    @pytest.mark.parametrize("port", [0, 65536, -1, "6379"])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationException) as exc_info:
            NetworkConfig(port=port)
        assert "port must be in 1..65535" in str(exc_info.value)

    def test_invalid_db(self):
        with pytest.raises(ConfigurationException):
            NetworkConfig(db=-1)

    def test_empty_host(self):
        with pytest.raises(ConfigurationException):
            NetworkConfig(host="")

    def test_invalid_connection_timeout(self):
        with pytest.raises(ConfigurationException) as exc_info:
            NetworkConfig(connection_timeout=0)
        assert "connection_timeout must be positive" in str(exc_info.value)

    def test_invalid_socket_timeout(self):
        with pytest.raises(ConfigurationException):
            NetworkConfig(socket_timeout=-1.0)

    def test_setter_validation(self):
        config = NetworkConfig()

        with pytest.raises(ConfigurationException):
            config.port = 70000
        assert config.port == 6379

        with pytest.raises(ConfigurationException):
            config.connection_timeout = -5
        assert config.connection_timeout == 5.0

        config.db = 3
        assert config.db == 3

    def test_from_dict(self):
        config = NetworkConfig.from_dict({
            "host": "cache",
            "port": 7000,
            "db": 1,
            "socket_timeout": 0.5,
            "ssl": True,
        })
        assert config.host == "cache"
        assert config.port == 7000
        assert config.db == 1
        assert config.socket_timeout == 0.5
        assert config.ssl is True

    def test_from_dict_defaults(self):
        config = NetworkConfig.from_dict({})
        assert config.host == "localhost"
        assert config.port == 6379


class TestSecurityConfig:
    """Tests for SecurityConfig."""

    def test_default_not_configured(self):
        assert SecurityConfig().is_configured is False

    def test_password_only_is_configured(self):
        assert SecurityConfig(password="secret").is_configured is True

    def test_from_dict(self):
        config = SecurityConfig.from_dict({"username": "app", "password": "secret"})
        assert config.username == "app"
        assert config.password == "secret"
        assert config.is_configured


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults(self, default_config):
        assert default_config.client_name is None
        assert isinstance(default_config.network, NetworkConfig)
        assert isinstance(default_config.security, SecurityConfig)

    def test_client_name_must_be_string(self):
        config = ClientConfig()
        with pytest.raises(ConfigurationException):
            config.client_name = 42

    def test_from_dict(self):
        config = ClientConfig.from_dict({
            "client_name": "billing",
            "network": {"host": "cache", "port": 6380},
            "security": {"password": "secret"},
        })
        assert config.client_name == "billing"
        assert config.network.host == "cache"
        assert config.network.port == 6380
        assert config.security.password == "secret"

    def test_from_dict_invalid_network(self):
        with pytest.raises(ConfigurationException):
            ClientConfig.from_dict({"network": {"port": 0}})

    def test_from_yaml_string(self):
        yaml_content = """
redis_counter:
  client_name: billing
  network:
    url: redis://cache:6379/2
    connection_timeout: 2.0
"""
        config = ClientConfig.from_yaml_string(yaml_content)
        assert config.client_name == "billing"
        assert config.network.url == "redis://cache:6379/2"
        assert config.network.connection_timeout == 2.0

    def test_from_yaml_string_without_root_key(self):
        config = ClientConfig.from_yaml_string("network:\n  db: 4\n")
        assert config.network.db == 4

    def test_from_yaml_string_empty(self):
        config = ClientConfig.from_yaml_string("")
        assert config.network.host == "localhost"

    def test_from_yaml_string_invalid(self):
        with pytest.raises(ConfigurationException) as exc_info:
            ClientConfig.from_yaml_string("network: [unclosed")
        assert "Failed to parse YAML" in str(exc_info.value)

    def test_from_yaml_string_not_a_mapping(self):
        with pytest.raises(ConfigurationException):
            ClientConfig.from_yaml_string("- one\n- two\n")

    def test_from_yaml_string_root_not_a_mapping(self):
        with pytest.raises(ConfigurationException):
            ClientConfig.from_yaml_string("redis_counter: 5\n")

    def test_from_yaml_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yml", delete=False) as f:
            f.write("redis_counter:\n  network:\n    host: filehost\n    port: 6390\n")
            path = f.name
        try:
            config = ClientConfig.from_yaml(path)
        finally:
            os.unlink(path)
        assert config.network.host == "filehost"
        assert config.network.port == 6390

    def test_from_yaml_missing_file(self):
        with pytest.raises(ConfigurationException) as exc_info:
            ClientConfig.from_yaml("/nonexistent/redis-counter.yml")
        assert "Configuration file not found" in str(exc_info.value)
