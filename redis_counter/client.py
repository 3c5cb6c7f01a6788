"""Counter client implementation."""

import threading
from enum import Enum
from typing import Dict, Hashable, Optional, Sequence, Tuple, Type

from redis_counter.config import ClientConfig
from redis_counter.exceptions import (
    ClientOfflineException,
    CounterException,
    IllegalArgumentException,
    IllegalStateException,
)
from redis_counter.logging import get_logger
from redis_counter.network.connection import Connection, create_connection
from redis_counter.protocol.codec import NumericKind
from redis_counter.proxy.base import CounterProxy
from redis_counter.proxy.batch_counter import (
    HashMFieldsCounter,
    HashMFieldsCounterFloat64,
    HashMFieldsCounterInt64,
    MKeysCounter,
    MKeysCounterFloat64,
    MKeysCounterInt64,
)
from redis_counter.proxy.counter import (
    HashFieldCounter,
    HashFieldCounterFloat64,
    HashFieldCounterInt64,
    KeyCounter,
    KeyCounterFloat64,
    KeyCounterInt64,
)

_logger = get_logger("client")


class ClientState(Enum):
    """Internal client state for the state machine."""

    INITIAL = "INITIAL"
    STARTING = "STARTING"
    CONNECTED = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"
    SHUTTING_DOWN = "SHUTTING_DOWN"
    SHUTDOWN = "SHUTDOWN"


_VALID_TRANSITIONS = {
    ClientState.INITIAL: {ClientState.STARTING, ClientState.SHUTTING_DOWN},
    ClientState.STARTING: {ClientState.CONNECTED, ClientState.DISCONNECTED},
    ClientState.CONNECTED: {ClientState.SHUTTING_DOWN},
    ClientState.DISCONNECTED: {ClientState.SHUTTING_DOWN},
    ClientState.SHUTTING_DOWN: {ClientState.SHUTDOWN},
    ClientState.SHUTDOWN: set(),
}

_KEY_COUNTERS: Dict[NumericKind, Type[KeyCounter]] = {
    NumericKind.INT64: KeyCounterInt64,
    NumericKind.FLOAT64: KeyCounterFloat64,
}

_HASH_FIELD_COUNTERS: Dict[NumericKind, Type[HashFieldCounter]] = {
    NumericKind.INT64: HashFieldCounterInt64,
    NumericKind.FLOAT64: HashFieldCounterFloat64,
}

_MKEYS_COUNTERS: Dict[NumericKind, Type[MKeysCounter]] = {
    NumericKind.INT64: MKeysCounterInt64,
    NumericKind.FLOAT64: MKeysCounterFloat64,
}

_HASH_MFIELDS_COUNTERS: Dict[NumericKind, Type[HashMFieldsCounter]] = {
    NumericKind.INT64: HashMFieldsCounterInt64,
    NumericKind.FLOAT64: HashMFieldsCounterFloat64,
}


def _select(table: Dict[NumericKind, type], kind: NumericKind) -> type:
    try:
        return table[kind]
    except (KeyError, TypeError):
        raise IllegalArgumentException(f"Unknown numeric kind: {kind!r}")


def _as_tuple(values: Sequence[str], what: str) -> Tuple[str, ...]:
    if isinstance(values, (str, bytes)):
        raise IllegalArgumentException(f"{what} must be a sequence of names, not a single string")
    return tuple(values)


class CounterClient:
    """Entry point for typed counters over one store connection.

    The client owns the connection and hands out counter handles. One
    handle exists per identity set and numeric kind; asking for the same
    counter twice returns the same handle.

    Attributes:
        config: The client configuration.
        name: The client name.
        state: The current client state.
        running: Whether the client is connected.

    Example:
        Basic usage with context manager::

            from redis_counter import CounterClient, ClientConfig, NumericKind

            config = ClientConfig()
            config.network.host = "localhost"

            with CounterClient(config) as client:
                views = client.get_key_counter("page-views")
                views.increment()

                scores = client.get_hash_mfields_counter(
                    "scores", ["Bob", "George"], NumericKind.FLOAT64
                )
                scores.add_all(0.5)
                print(scores)   # scores[Bob = 0.500000, George = 0.500000]

    Note:
        Handles are not thread-safe. Share the client, not the handles.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        connection: Optional[Connection] = None,
    ):
        """Initialize the client.

        The client does not talk to the store until :meth:`start` is
        called.

        Args:
            config: Client configuration. If None, the defaults connect
                to ``localhost:6379``.
            connection: An already built connection to use instead of
                one created from ``config``. The client takes ownership
                and closes it on shutdown.
        """
        self._config = config or ClientConfig()
        self._state = ClientState.INITIAL
        self._state_lock = threading.Lock()
        self._client_name = self._config.client_name or "redis_counter.client"

        self._connection: Optional[Connection] = connection

        self._proxies: Dict[Tuple[Hashable, ...], CounterProxy] = {}
        self._proxies_lock = threading.Lock()

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def name(self) -> str:
        """Get the client name."""
        return self._client_name

    @property
    def state(self) -> ClientState:
        """Get the current client state."""
        with self._state_lock:
            return self._state

    @property
    def running(self) -> bool:
        """Check if the client is connected."""
        return self._state is ClientState.CONNECTED

    @property
    def connection(self) -> Optional[Connection]:
        """Get the store connection, once started."""
        return self._connection

    def _transition_state(self, new_state: ClientState) -> None:
        with self._state_lock:
            current = self._state
            if new_state not in _VALID_TRANSITIONS.get(current, set()):
                _logger.error(
                    "Invalid state transition attempted: %s -> %s",
                    current.value,
                    new_state.value,
                )
                raise IllegalStateException(
                    f"Invalid state transition: {current.value} -> {new_state.value}"
                )
            self._state = new_state
            _logger.debug("Client state changed: %s -> %s", current.value, new_state.value)

    def start(self) -> "CounterClient":
        """Connect to the store.

        Returns:
            This client instance for method chaining.

        Raises:
            IllegalStateException: If the client was already started.
            ClientOfflineException: If the store cannot be reached.
        """
        network = self._config.network
        _logger.info(
            "Starting counter client %s (%s)",
            self._client_name,
            network.url or f"{network.host}:{network.port}/{network.db}",
        )
        self._transition_state(ClientState.STARTING)

        try:
            if self._connection is None:
                self._connection = self._create_connection()
            if not self._connection.ping():
                raise ClientOfflineException("Store did not answer PING")
        except (CounterException, ValueError) as e:
            _logger.error("Failed to connect: %s", e)
            self._transition_state(ClientState.DISCONNECTED)
            raise ClientOfflineException(f"Failed to connect: {e}", cause=e)

        self._transition_state(ClientState.CONNECTED)
        _logger.info("Counter client %s connected", self._client_name)
        return self

    def _create_connection(self) -> Connection:
        network = self._config.network
        security = self._config.security
        options = {
            "socket_connect_timeout": network.connection_timeout,
            "socket_timeout": network.socket_timeout,
            "client_name": self._config.client_name,
        }
        if security.is_configured:
            options["username"] = security.username
            options["password"] = security.password
        if network.url:
            return create_connection(url=network.url, **options)
        options["ssl"] = network.ssl
        return create_connection(network.host, network.port, network.db, **options)

    def shutdown(self) -> None:
        """Destroy every handle and close the connection.

        This method is idempotent.
        """
        current_state = self.state
        if current_state in (ClientState.SHUTTING_DOWN, ClientState.SHUTDOWN):
            return

        _logger.info("Shutting down counter client %s", self._client_name)
        self._transition_state(ClientState.SHUTTING_DOWN)

        try:
            self._destroy_proxies()
            if self._connection is not None:
                self._connection.close()
        finally:
            self._transition_state(ClientState.SHUTDOWN)
            _logger.info("Counter client %s shutdown complete", self._client_name)

    def _destroy_proxies(self) -> None:
        with self._proxies_lock:
            for proxy in self._proxies.values():
                if not proxy.is_destroyed:
                    proxy.destroy()
            self._proxies.clear()

    def _check_running(self) -> None:
        if not self.running:
            raise ClientOfflineException("Client is not connected")

    def _get_or_create_proxy(self, key: Tuple[Hashable, ...], factory) -> CounterProxy:
        self._check_running()

        with self._proxies_lock:
            proxy = self._proxies.get(key)
            if proxy is not None and not proxy.is_destroyed:
                _logger.debug("Returning existing counter: %r", proxy)
                return proxy

            proxy = factory()
            self._proxies[key] = proxy
            _logger.debug("Created counter: %r", proxy)
        return proxy

    def get_key_counter(self, key: str, kind: NumericKind = NumericKind.INT64) -> KeyCounter:
        """Get the counter stored in a top-level key.

        Args:
            key: The key name.
            kind: Integer or float counter.

        Raises:
            ClientOfflineException: If the client is not connected.
            IllegalArgumentException: If the key is empty.

        Example:
            >>> views = client.get_key_counter("page-views")
            >>> views.add(10)
        """
        counter_class = _select(_KEY_COUNTERS, kind)
        return self._get_or_create_proxy(
            ("key", kind, key),
            lambda: counter_class(self._connection, key),
        )

    def get_hash_field_counter(
        self,
        key: str,
        field: str,
        kind: NumericKind = NumericKind.INT64,
    ) -> HashFieldCounter:
        """Get the counter stored in one field of a hash."""
        counter_class = _select(_HASH_FIELD_COUNTERS, kind)
        return self._get_or_create_proxy(
            ("hash_field", kind, key, field),
            lambda: counter_class(self._connection, key, field),
        )

    def get_mkeys_counter(
        self,
        keys: Sequence[str],
        kind: NumericKind = NumericKind.INT64,
    ) -> MKeysCounter:
        """Get a batch counter over several top-level keys.

        Args:
            keys: The key names, in display order.
            kind: Integer or float counters.

        Example:
            >>> scores = client.get_mkeys_counter(["Bob", "George"])
            >>> scores.increment_all()
            [1, 1]
        """
        counter_class = _select(_MKEYS_COUNTERS, kind)
        keys = _as_tuple(keys, "keys")
        return self._get_or_create_proxy(
            ("mkeys", kind, keys),
            lambda: counter_class(self._connection, *keys),
        )

    def get_hash_mfields_counter(
        self,
        key: str,
        fields: Sequence[str],
        kind: NumericKind = NumericKind.INT64,
    ) -> HashMFieldsCounter:
        """Get a batch counter over several fields of one hash."""
        counter_class = _select(_HASH_MFIELDS_COUNTERS, kind)
        fields = _as_tuple(fields, "fields")
        return self._get_or_create_proxy(
            ("hash_mfields", kind, key, fields),
            lambda: counter_class(self._connection, key, *fields),
        )

    def __enter__(self) -> "CounterClient":
        """Enter context manager - starts the client."""
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - shuts down the client."""
        self.shutdown()

    def __repr__(self) -> str:
        return f"CounterClient(name={self._client_name!r}, state={self._state.value})"
