"""Counter client configuration."""

from typing import Any, Optional
import os

import yaml

from redis_counter.exceptions import ConfigurationException

ROOT_KEY = "redis_counter"


class NetworkConfig:
    """Network configuration for connecting to the store.

    Either ``url`` or ``host``/``port``/``db`` selects the server; a URL
    takes precedence when both are given.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        url: Optional[str] = None,
        connection_timeout: float = 5.0,
        socket_timeout: Optional[float] = None,
        ssl: bool = False,
    ):
        self._host = host
        self._port = port
        self._db = db
        self._url = url
        self._connection_timeout = connection_timeout
        self._socket_timeout = socket_timeout
        self._ssl = ssl
        self._validate()

    def _validate(self) -> None:
        if not self._host:
            raise ConfigurationException("host cannot be empty")
        if not isinstance(self._port, int) or not 1 <= self._port <= 65535:
            raise ConfigurationException(f"port must be in 1..65535, got {self._port!r}")
        if not isinstance(self._db, int) or self._db < 0:
            raise ConfigurationException(f"db must be a non-negative integer, got {self._db!r}")
        if self._connection_timeout <= 0:
            raise ConfigurationException("connection_timeout must be positive")
        if self._socket_timeout is not None and self._socket_timeout <= 0:
            raise ConfigurationException("socket_timeout must be positive")

    def _assign(self, attr: str, value: Any) -> None:
        previous = getattr(self, attr)
        setattr(self, attr, value)
        try:
            self._validate()
        except ConfigurationException:
            setattr(self, attr, previous)
            raise

    @property
    def host(self) -> str:
        """Get the server host name."""
        return self._host

    @host.setter
    def host(self, value: str) -> None:
        self._assign("_host", value)

    @property
    def port(self) -> int:
        """Get the server port."""
        return self._port

    @port.setter
    def port(self, value: int) -> None:
        self._assign("_port", value)

    @property
    def db(self) -> int:
        """Get the logical database index."""
        return self._db

    @db.setter
    def db(self, value: int) -> None:
        self._assign("_db", value)

    @property
    def url(self) -> Optional[str]:
        """Get the connection URL, if any."""
        return self._url

    @url.setter
    def url(self, value: Optional[str]) -> None:
        self._url = value

    @property
    def connection_timeout(self) -> float:
        """Get the connection timeout in seconds."""
        return self._connection_timeout

    @connection_timeout.setter
    def connection_timeout(self, value: float) -> None:
        self._assign("_connection_timeout", value)

    @property
    def socket_timeout(self) -> Optional[float]:
        """Get the per-command socket timeout in seconds."""
        return self._socket_timeout

    @socket_timeout.setter
    def socket_timeout(self, value: Optional[float]) -> None:
        self._assign("_socket_timeout", value)

    @property
    def ssl(self) -> bool:
        """Get whether TLS is used."""
        return self._ssl

    @ssl.setter
    def ssl(self, value: bool) -> None:
        self._ssl = value

    @classmethod
    def from_dict(cls, data: dict) -> "NetworkConfig":
        """Create NetworkConfig from a dictionary."""
        return cls(
            host=data.get("host", "localhost"),
            port=data.get("port", 6379),
            db=data.get("db", 0),
            url=data.get("url"),
            connection_timeout=data.get("connection_timeout", 5.0),
            socket_timeout=data.get("socket_timeout"),
            ssl=data.get("ssl", False),
        )


class SecurityConfig:
    """Credentials for the store's AUTH command."""

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None):
        self._username = username
        self._password = password

    @property
    def username(self) -> Optional[str]:
        """Get the ACL user name."""
        return self._username

    @username.setter
    def username(self, value: Optional[str]) -> None:
        self._username = value

    @property
    def password(self) -> Optional[str]:
        """Get the password."""
        return self._password

    @password.setter
    def password(self, value: Optional[str]) -> None:
        self._password = value

    @property
    def is_configured(self) -> bool:
        """Check if any credentials are configured."""
        return bool(self._username or self._password)

    @classmethod
    def from_dict(cls, data: dict) -> "SecurityConfig":
        """Create SecurityConfig from a dictionary."""
        return cls(
            username=data.get("username"),
            password=data.get("password"),
        )


class ClientConfig:
    """Configuration for the counter client.

    Attributes:
        client_name: Optional connection name reported to the server.
        network: Network configuration (server address, timeouts, TLS).
        security: Credentials.

    Example:
        Basic configuration::

            config = ClientConfig()
            config.network.host = "cache.internal"
            config.network.db = 2

        From YAML file::

            config = ClientConfig.from_yaml("redis-counter.yml")

        The YAML document may wrap its settings in a top-level
        ``redis_counter`` key::

            redis_counter:
              client_name: billing
              network:
                url: redis://cache.internal:6379/2
    """

    def __init__(self):
        self._client_name: Optional[str] = None
        self._network: NetworkConfig = NetworkConfig()
        self._security: SecurityConfig = SecurityConfig()

    @property
    def client_name(self) -> Optional[str]:
        """Get the client name."""
        return self._client_name

    @client_name.setter
    def client_name(self, value: Optional[str]) -> None:
        if value is not None and not isinstance(value, str):
            raise ConfigurationException("client_name must be a string")
        self._client_name = value

    @property
    def network(self) -> NetworkConfig:
        """Get the network configuration."""
        return self._network

    @network.setter
    def network(self, value: NetworkConfig) -> None:
        self._network = value

    @property
    def security(self) -> SecurityConfig:
        """Get the security configuration."""
        return self._security

    @security.setter
    def security(self, value: SecurityConfig) -> None:
        self._security = value

    @classmethod
    def from_dict(cls, data: dict) -> "ClientConfig":
        """Create ClientConfig from a dictionary."""
        config = cls()

        if "client_name" in data:
            config.client_name = data["client_name"]

        if "network" in data:
            config.network = NetworkConfig.from_dict(data["network"] or {})

        if "security" in data:
            config.security = SecurityConfig.from_dict(data["security"] or {})

        return config

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "ClientConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            ClientConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", e)
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}", e)

        return cls.from_dict(_unwrap(data))

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "ClientConfig":
        """Load configuration from a YAML string.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", e)

        return cls.from_dict(_unwrap(data))


def _unwrap(data: Any) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationException(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    if ROOT_KEY in data:
        data = data[ROOT_KEY] or {}
        if not isinstance(data, dict):
            raise ConfigurationException(f"'{ROOT_KEY}' must be a mapping")
    return data
