"""Base proxy classes for counter handles."""

from typing import TYPE_CHECKING, List, Sequence, Type

from redis_counter.exceptions import IllegalArgumentException, IllegalStateException
from redis_counter.invocation import InvocationService
from redis_counter.logging import get_logger
from redis_counter.protocol.codec import NumericCodec, NumericKind
from redis_counter.protocol.command import Command
from redis_counter.protocol.reply import Reply

if TYPE_CHECKING:
    from redis_counter.network.connection import Connection

_logger = get_logger("proxy")


def require_connection(connection: "Connection") -> "Connection":
    if connection is None:
        raise IllegalArgumentException("Nil redis connection")
    return connection


def require_name(value: str, what: str) -> str:
    """Validate one key or field name."""
    if not isinstance(value, str):
        raise IllegalArgumentException(f"{what} must be a string, got {type(value).__name__}")
    if not value:
        raise IllegalArgumentException(f"Empty {what}")
    return value


def require_names(values: Sequence[str], what: str) -> List[str]:
    """Validate an ordered, non-empty list of names.

    The error names the first offending position, e.g. ``Empty key[2]``.
    """
    values = list(values)
    if not values:
        raise IllegalArgumentException(f"Empty {what}s")
    for i, value in enumerate(values):
        if not isinstance(value, str):
            raise IllegalArgumentException(
                f"{what}[{i}] must be a string, got {type(value).__name__}"
            )
        if not value:
            raise IllegalArgumentException(f"Empty {what}[{i}]")
    return values


class CounterProxy:
    """Base class for counter handles.

    A handle is bound to one connection and one numeric codec for its
    whole life. Handles are not thread-safe: the cached values are
    mutated in place on every call.

    Args:
        connection: The store connection.
        codec: The numeric codec of the counter.

    Raises:
        IllegalArgumentException: If the connection is None.
    """

    def __init__(self, connection: "Connection", codec: Type[NumericCodec]):
        self._connection = require_connection(connection)
        self._codec = codec
        self._invocation_service = InvocationService(connection)
        self._destroyed = False

    @property
    def connection(self) -> "Connection":
        return self._connection

    @property
    def kind(self) -> NumericKind:
        return self._codec.KIND

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def _check_not_destroyed(self) -> None:
        """Raise an exception if this handle has been destroyed."""
        if self._destroyed:
            raise IllegalStateException(f"Counter {self!r} has been destroyed")

    def destroy(self) -> None:
        """Destroy this handle.

        Only the local handle is released; the stored values are kept.
        """
        self._check_not_destroyed()
        self._destroyed = True
        _logger.debug("Counter destroyed: %r", self)
        self._on_destroy()

    def _on_destroy(self) -> None:
        """Called when the handle is destroyed. Override in subclasses."""
        pass

    def _invoke(self, command: Command) -> Reply:
        self._check_not_destroyed()
        return self._invocation_service.invoke(command)

    def _execute_batch(self, commands: Sequence[Command]) -> List[Reply]:
        self._check_not_destroyed()
        return self._invocation_service.execute_batch(commands)
