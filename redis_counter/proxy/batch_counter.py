"""Batch counter handles.

A batch handle owns an ordered set of counters, either several top-level
keys or several fields of one hash, and one :class:`ValueCache` shared
by all of them.

Bulk reads, replaces and deletes go out as one native multi-argument
command. Per-identity arithmetic and existence checks have no bulk form
in the store and go out as a pipelined batch of single-identity
commands, correlated back to identities by position.

Whatever the strategy, the cache is reset before the call and populated
only after every reply has decoded; a single failure leaves it empty.

Example:
    Bulk operations over two keys::

        counters = MKeysCounterInt64(connection, "Bob", "George")
        counters.set_all(10)             # MSET Bob 10 George 10
        counters.add_all(5)              # INCRBY Bob 5 ; INCRBY George 5
        print(counters)                  # Bob = 15, George = 15
"""

from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Type

from redis_counter.cache import ValueCache
from redis_counter.logging import get_logger
from redis_counter.protocol.codec import (
    Float64Codec,
    Int64Codec,
    Number,
    NumericCodec,
    check_not_error,
    decode_array,
    decode_exists,
    decode_reply,
)
from redis_counter.protocol.command import Command
from redis_counter.proxy.base import (
    CounterProxy,
    require_connection,
    require_name,
    require_names,
)
from redis_counter.proxy.target import HashFieldsTarget, KeysTarget, MultiTarget, Target

if TYPE_CHECKING:
    from redis_counter.network.connection import Connection

_logger = get_logger("proxy.batch")


class BatchCounter(CounterProxy):
    """Generic batch counter over a multi-identity target.

    Args:
        connection: The store connection.
        target: The keys or hash fields being counted.
        codec: The numeric codec shared by every identity.
    """

    def __init__(
        self,
        connection: "Connection",
        target: MultiTarget,
        codec: Type[NumericCodec],
    ):
        super().__init__(connection, codec)
        self._target = target
        self._cache = ValueCache(target.identities, codec)

    @property
    def target(self) -> MultiTarget:
        return self._target

    @property
    def identities(self) -> List[str]:
        """Get the identities in construction order."""
        return self._target.identities

    @property
    def cache(self) -> ValueCache:
        return self._cache

    def last_value(self, identity: str) -> Optional[Number]:
        """Get the cached value of one identity, or None if unknown."""
        return self._cache.get(identity)

    def get_all(self) -> List[Number]:
        """Read every identity with one bulk command.

        Returns:
            The values in construction order; absent identities read as
            zero and stay UNKNOWN in the cache.

        Raises:
            NotANumberException: If any stored value is not numeric. No
                value is returned and the cache stays empty.
        """
        self._cache.reset()
        reply = self._invoke(self._target.get_all_command())
        values = decode_array(reply, len(self._target.identities), self._codec)
        return self._populate(values)

    def set_all(self, amount: Number) -> List[Number]:
        """Replace every identity with ``amount`` using one bulk command.

        The cache is filled from ``amount`` once the store acknowledges.
        """
        self._cache.reset()
        amount = self._codec.coerce(amount)
        check_not_error(self._invoke(self._target.set_all_command(self._codec, amount)))
        return self._populate([amount] * len(self._target.identities))

    def add_all(self, amount: Number) -> List[Number]:
        """Add ``amount`` to every identity in one pipelined round trip.

        Returns:
            The post-increment values in construction order.
        """
        self._cache.reset()
        amount = self._codec.coerce(amount)
        return self._pipeline(lambda target: target.add_command(self._codec, amount))

    def sub_all(self, amount: Number) -> List[Number]:
        """Subtract ``amount`` from every identity in one pipelined round trip."""
        self._cache.reset()
        amount = self._codec.coerce(amount)
        return self._pipeline(lambda target: target.sub_command(self._codec, amount))

    def increment_all(self) -> List[Number]:
        """Add one to every identity."""
        self._cache.reset()
        return self._pipeline(lambda target: target.increment_command(self._codec))

    def decrement_all(self) -> List[Number]:
        """Subtract one from every identity."""
        self._cache.reset()
        return self._pipeline(lambda target: target.decrement_command(self._codec))

    def exists_all(self) -> List[bool]:
        """Check the existence of every identity.

        Returns:
            One boolean per identity, in construction order. The cache is
            reset and not repopulated.
        """
        self._cache.reset()
        commands = [target.exists_command() for target in self._target.targets]
        self._execute_batch(commands)
        return [decode_exists(command.reply()) for command in commands]

    def delete_all(self) -> None:
        """Delete every identity with one bulk command."""
        self._cache.reset()
        check_not_error(self._invoke(self._target.delete_all_command()))

    def _pipeline(self, build: Callable[[Target], Command]) -> List[Number]:
        commands = [build(target) for target in self._target.targets]
        self._execute_batch(commands)
        values = [decode_reply(command.reply(), self._codec) for command in commands]
        return self._populate(values)

    def _populate(self, values: Sequence[Optional[Number]]) -> List[Number]:
        self._cache.populate(values)
        _logger.debug("Cache populated: %r", self._cache)
        zero = self._codec.ZERO
        return [zero if value is None else value for value in values]

    def __str__(self) -> str:
        return self._target.label(self._cache.render())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._target!r})"


class MKeysCounter(BatchCounter):
    """Batch counter over several top-level keys."""

    def __init__(self, connection: "Connection", keys: Sequence[str], codec: Type[NumericCodec]):
        require_connection(connection)
        super().__init__(connection, KeysTarget(require_names(keys, "key")), codec)

    @property
    def keys(self) -> List[str]:
        return self._target.keys


class MKeysCounterInt64(MKeysCounter):
    """Integer counters over several keys.

    Subtraction and unit steps use the store's ``DECRBY``, ``INCR`` and
    ``DECR`` verbs per key.
    """

    def __init__(self, connection: "Connection", *keys: str):
        super().__init__(connection, keys, Int64Codec)


class MKeysCounterFloat64(MKeysCounter):
    """Float counters over several keys (``INCRBYFLOAT`` per key)."""

    def __init__(self, connection: "Connection", *keys: str):
        super().__init__(connection, keys, Float64Codec)


class HashMFieldsCounter(BatchCounter):
    """Batch counter over several fields of one hash."""

    def __init__(
        self,
        connection: "Connection",
        key: str,
        fields: Sequence[str],
        codec: Type[NumericCodec],
    ):
        require_connection(connection)
        target = HashFieldsTarget(require_name(key, "key"), require_names(fields, "field"))
        super().__init__(connection, target, codec)

    @property
    def key(self) -> str:
        return self._target.key

    @property
    def fields(self) -> List[str]:
        return self._target.fields


class HashMFieldsCounterInt64(HashMFieldsCounter):
    """Integer counters over several hash fields (``HINCRBY`` per field)."""

    def __init__(self, connection: "Connection", key: str, *fields: str):
        super().__init__(connection, key, fields, Int64Codec)


class HashMFieldsCounterFloat64(HashMFieldsCounter):
    """Float counters over several hash fields (``HINCRBYFLOAT`` per field)."""

    def __init__(self, connection: "Connection", key: str, *fields: str):
        super().__init__(connection, key, fields, Float64Codec)
