"""Store connections.

:class:`Connection` is the transport contract the counter handles are
written against: execute one command, or execute an ordered batch of
independent commands in one pipelined round trip and return their
replies in submission order. :class:`RedisConnection` implements it on
top of a ``redis.Redis`` client.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

import redis
from redis.exceptions import RedisError, ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from redis_counter.exceptions import (
    ProtocolException,
    TimeoutException,
    TransportException,
)
from redis_counter.logging import get_logger
from redis_counter.protocol.command import Command
from redis_counter.protocol.reply import (
    NIL,
    ArrayReply,
    BulkReply,
    ErrorReply,
    IntegerReply,
    Reply,
)

_logger = get_logger("connection")


class Connection(ABC):
    """Transport used by counter handles.

    Implementations own connection setup, pooling, authentication and
    wire framing. A command the store rejects comes back as an
    :class:`ErrorReply`; a failure of the transport itself raises
    :class:`TransportException`.
    """

    @abstractmethod
    def execute(self, command: Command) -> Reply:
        """Send one command and return its reply."""
        pass

    @abstractmethod
    def execute_batch(self, commands: Sequence[Command]) -> List[Reply]:
        """Send commands as one pipelined request.

        The store processes them independently; replies come back in
        submission order. A transport failure fails the whole batch.
        """
        pass

    def ping(self) -> bool:
        """Check that the store answers."""
        reply = self.execute(Command("PING"))
        return not reply.is_error

    def close(self) -> None:
        """Release transport resources."""
        pass


def to_reply(value: Any) -> Reply:
    """Convert a redis-py response value to a :class:`Reply`.

    redis-py applies per-command response callbacks, so booleans stand
    for integer/status replies and floats for INCRBYFLOAT bulk text.
    """
    if isinstance(value, ResponseError):
        return ErrorReply(str(value))
    if isinstance(value, RedisError):
        raise _wrap_error(value)
    if value is None:
        return NIL
    if isinstance(value, bool):
        return IntegerReply(int(value))
    if isinstance(value, int):
        return IntegerReply(value)
    if isinstance(value, float):
        return BulkReply(repr(value))
    if isinstance(value, bytes):
        return BulkReply(value.decode("utf-8", "replace"))
    if isinstance(value, str):
        return BulkReply(value)
    if isinstance(value, (list, tuple)):
        return ArrayReply([to_reply(element) for element in value])
    raise ProtocolException(f"Unsupported response type: {type(value).__name__}")


def _wrap_error(error: RedisError) -> TransportException:
    if isinstance(error, RedisTimeoutError):
        return TimeoutException(f"Store timed out: {error}", cause=error)
    return TransportException(f"Store connection failed: {error}", cause=error)


class RedisConnection(Connection):
    """Connection backed by a redis-py client.

    Args:
        client: A configured ``redis.Redis`` instance.

    Example:
        >>> import redis
        >>> connection = RedisConnection(redis.Redis(host="localhost"))
        >>> counter = KeyCounterInt64(connection, "page-views")
    """

    def __init__(self, client: "redis.Redis"):
        self._client = client
        self._closed = False

    @classmethod
    def from_url(cls, url: str, **redis_kwargs: Any) -> "RedisConnection":
        return cls(redis.Redis.from_url(url, **redis_kwargs))

    @property
    def client(self) -> "redis.Redis":
        return self._client

    @property
    def is_closed(self) -> bool:
        return self._closed

    def execute(self, command: Command) -> Reply:
        _logger.debug("Executing %r", command)
        try:
            value = self._client.execute_command(command.verb, *command.args)
        except ResponseError as e:
            return ErrorReply(str(e))
        except RedisError as e:
            _logger.warning("Command %s failed: %s", command.verb, e)
            raise _wrap_error(e)
        return to_reply(value)

    def execute_batch(self, commands: Sequence[Command]) -> List[Reply]:
        _logger.debug("Executing batch of %d commands", len(commands))
        try:
            with self._client.pipeline(transaction=False) as pipe:
                for command in commands:
                    pipe.execute_command(command.verb, *command.args)
                values = pipe.execute(raise_on_error=False)
        except RedisError as e:
            _logger.warning("Batch of %d commands failed: %s", len(commands), e)
            raise _wrap_error(e)
        return [to_reply(value) for value in values]

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisError as e:
            raise _wrap_error(e)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._client.close()
        except RedisError as e:
            _logger.warning("Error closing connection: %s", e)

    def __repr__(self) -> str:
        return f"RedisConnection(client={self._client!r})"


def create_connection(
    host: str = "localhost",
    port: int = 6379,
    db: int = 0,
    url: Optional[str] = None,
    **redis_kwargs: Any,
) -> RedisConnection:
    """Create a :class:`RedisConnection` from connection parameters."""
    if url:
        return RedisConnection.from_url(url, **redis_kwargs)
    return RedisConnection(redis.Redis(host=host, port=port, db=db, **redis_kwargs))
