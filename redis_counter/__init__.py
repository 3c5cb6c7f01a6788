"""Typed counters over Redis string and hash values."""

from redis_counter.client import CounterClient, ClientState
from redis_counter.config import ClientConfig, NetworkConfig, SecurityConfig
from redis_counter.exceptions import (
    CounterException,
    IllegalStateException,
    IllegalArgumentException,
    ConfigurationException,
    ClientOfflineException,
    TransportException,
    TimeoutException,
    CommandException,
    NotANumberException,
    ProtocolException,
)
from redis_counter.cache import ValueCache, LastObserved, ObservedState
from redis_counter.network import Connection, RedisConnection, create_connection
from redis_counter.protocol import NumericKind, Command
from redis_counter.proxy import (
    KeyCounterInt64,
    KeyCounterFloat64,
    HashFieldCounterInt64,
    HashFieldCounterFloat64,
    MKeysCounterInt64,
    MKeysCounterFloat64,
    HashMFieldsCounterInt64,
    HashMFieldsCounterFloat64,
)
from redis_counter.logging import get_logger, configure_logging, set_level

__version__ = "0.1.0"

__all__ = [
    "CounterClient",
    "ClientState",
    "ClientConfig",
    "NetworkConfig",
    "SecurityConfig",
    "CounterException",
    "IllegalStateException",
    "IllegalArgumentException",
    "ConfigurationException",
    "ClientOfflineException",
    "TransportException",
    "TimeoutException",
    "CommandException",
    "NotANumberException",
    "ProtocolException",
    "ValueCache",
    "LastObserved",
    "ObservedState",
    "Connection",
    "RedisConnection",
    "create_connection",
    "NumericKind",
    "Command",
    "KeyCounterInt64",
    "KeyCounterFloat64",
    "HashFieldCounterInt64",
    "HashFieldCounterFloat64",
    "MKeysCounterInt64",
    "MKeysCounterFloat64",
    "HashMFieldsCounterInt64",
    "HashMFieldsCounterFloat64",
    "get_logger",
    "configure_logging",
    "set_level",
]
