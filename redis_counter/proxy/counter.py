"""Single-identity counter handles.

A counter handle treats one top-level key, or one field of a hash, as a
number and keeps the value seen by its most recent successful call.

Classes:
    Counter: Generic handle over a target and a numeric codec.
    KeyCounterInt64, KeyCounterFloat64: Top-level key counters.
    HashFieldCounterInt64, HashFieldCounterFloat64: Hash field counters.

Example:
    Basic counter operations::

        counter = KeyCounterInt64(connection, "page-views")

        counter.increment()      # INCR page-views
        counter.add(10)          # INCRBY page-views 10
        counter.sub(3)           # DECRBY page-views 3
        print(counter)           # page-views = 8

        ratio = HashFieldCounterFloat64(connection, "stats", "ratio")
        ratio.add(0.5)           # HINCRBYFLOAT stats ratio 0.5
        print(ratio)             # stats[ratio] = 0.500000
"""

from typing import TYPE_CHECKING, Optional, Type

from redis_counter.protocol.codec import (
    Float64Codec,
    Int64Codec,
    Number,
    NumericCodec,
    check_not_error,
    decode_exists,
    decode_reply,
)
from redis_counter.protocol.command import Command
from redis_counter.proxy.base import CounterProxy, require_connection, require_name
from redis_counter.proxy.target import HashFieldTarget, KeyTarget, Target

if TYPE_CHECKING:
    from redis_counter.network.connection import Connection


class Counter(CounterProxy):
    """Generic single-identity counter.

    Every operation first forgets the cached value. On success the cache
    holds exactly the value just read or written; on any error it stays
    empty and the error propagates.

    Args:
        connection: The store connection.
        target: The key or hash field being counted.
        codec: The numeric codec of the counter.
    """

    def __init__(
        self,
        connection: "Connection",
        target: Target,
        codec: Type[NumericCodec],
    ):
        super().__init__(connection, codec)
        self._target = target
        self._last_value: Optional[Number] = None

    @property
    def target(self) -> Target:
        return self._target

    @property
    def last_value(self) -> Optional[Number]:
        """Get the value observed by the last successful call, if any."""
        return self._last_value

    def get(self) -> Number:
        """Get the current value.

        Returns:
            The stored value, or zero if the key or field does not exist.

        Raises:
            NotANumberException: If the stored value is not numeric.
            CommandException: If the store rejected the command.
            TransportException: If the connection failed.
        """
        return self._read(self._target.get_command())

    def exists(self) -> bool:
        """Check whether the key or field exists.

        The cached value is cleared and not repopulated.
        """
        self._last_value = None
        return decode_exists(self._invoke(self._target.exists_command()))

    def delete(self) -> None:
        """Delete the key or field."""
        self._last_value = None
        check_not_error(self._invoke(self._target.delete_command()))

    def set(self, amount: Number) -> Number:
        """Replace the value.

        The store's acknowledgement is enough: the cache is set to
        ``amount`` without reading it back.

        Returns:
            The amount written.
        """
        self._last_value = None
        amount = self._codec.coerce(amount)
        check_not_error(self._invoke(self._target.set_command(self._codec, amount)))
        self._last_value = amount
        return amount

    def add(self, amount: Number) -> Number:
        """Add ``amount`` and return the value after the increment."""
        self._last_value = None
        amount = self._codec.coerce(amount)
        return self._read(self._target.add_command(self._codec, amount))

    def sub(self, amount: Number) -> Number:
        """Subtract ``amount`` and return the value after the decrement."""
        self._last_value = None
        amount = self._codec.coerce(amount)
        return self._read(self._target.sub_command(self._codec, amount))

    def increment(self) -> Number:
        """Add one and return the new value."""
        return self._read(self._target.increment_command(self._codec))

    def decrement(self) -> Number:
        """Subtract one and return the new value."""
        return self._read(self._target.decrement_command(self._codec))

    def _read(self, command: Command) -> Number:
        self._last_value = None
        value = decode_reply(self._invoke(command), self._codec)
        if value is None:
            return self._codec.ZERO
        self._last_value = value
        return value

    def __str__(self) -> str:
        return f"{self._target.label} = {self._codec.render_optional(self._last_value)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._target.label!r})"


class KeyCounter(Counter):
    """Counter stored in a top-level string key."""

    def __init__(self, connection: "Connection", key: str, codec: Type[NumericCodec]):
        require_connection(connection)
        super().__init__(connection, KeyTarget(require_name(key, "key")), codec)

    @property
    def key(self) -> str:
        return self._target.key


class KeyCounterInt64(KeyCounter):
    """Integer counter stored in a top-level key.

    Uses the store's ``INCRBY``, ``DECRBY``, ``INCR`` and ``DECR`` verbs.
    """

    def __init__(self, connection: "Connection", key: str):
        super().__init__(connection, key, Int64Codec)


class KeyCounterFloat64(KeyCounter):
    """Float counter stored in a top-level key.

    Every arithmetic operation is an ``INCRBYFLOAT``.
    """

    def __init__(self, connection: "Connection", key: str):
        super().__init__(connection, key, Float64Codec)


class HashFieldCounter(Counter):
    """Counter stored in one field of a hash."""

    def __init__(
        self,
        connection: "Connection",
        key: str,
        field: str,
        codec: Type[NumericCodec],
    ):
        require_connection(connection)
        target = HashFieldTarget(require_name(key, "key"), require_name(field, "field"))
        super().__init__(connection, target, codec)

    @property
    def key(self) -> str:
        return self._target.key

    @property
    def field(self) -> str:
        return self._target.field


class HashFieldCounterInt64(HashFieldCounter):
    """Integer counter stored in a hash field (``HINCRBY``)."""

    def __init__(self, connection: "Connection", key: str, field: str):
        super().__init__(connection, key, field, Int64Codec)


class HashFieldCounterFloat64(HashFieldCounter):
    """Float counter stored in a hash field (``HINCRBYFLOAT``)."""

    def __init__(self, connection: "Connection", key: str, field: str):
        super().__init__(connection, key, field, Float64Codec)
