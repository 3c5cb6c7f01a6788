"""Store transport."""

from redis_counter.network.connection import (
    Connection,
    RedisConnection,
    create_connection,
    to_reply,
)

__all__ = [
    "Connection",
    "RedisConnection",
    "create_connection",
    "to_reply",
]
