"""Counter targets.

A target names what a handle counts (one key, one hash field, several
keys, or several fields of one hash) and builds the store commands for
it. The numeric codec picks between integer and float verbs; the target
picks between top-level and hash verbs.

Top-level integer keys keep the store's dedicated ``DECRBY``, ``INCR``
and ``DECR`` verbs. Hash fields and float counters have no such verbs
and express subtraction and unit steps as increments.
"""

from typing import List, Sequence, Type

from redis_counter.protocol.codec import Number, NumericCodec
from redis_counter.protocol.command import Command


class Target:
    """Commands for a single counter identity."""

    @property
    def identity(self) -> str:
        raise NotImplementedError

    @property
    def label(self) -> str:
        """Display name used when rendering the counter."""
        raise NotImplementedError

    def get_command(self) -> Command:
        raise NotImplementedError

    def set_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        raise NotImplementedError

    def exists_command(self) -> Command:
        raise NotImplementedError

    def delete_command(self) -> Command:
        raise NotImplementedError

    def add_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        raise NotImplementedError

    def sub_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        return self.add_command(codec, codec.negate(amount))

    def increment_command(self, codec: Type[NumericCodec]) -> Command:
        return self.add_command(codec, codec.ONE)

    def decrement_command(self, codec: Type[NumericCodec]) -> Command:
        return self.sub_command(codec, codec.ONE)


class KeyTarget(Target):
    """A top-level string key."""

    def __init__(self, key: str):
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def identity(self) -> str:
        return self._key

    @property
    def label(self) -> str:
        return self._key

    def get_command(self) -> Command:
        return Command("GET", self._key)

    def set_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        return Command("SET", self._key, amount)

    def exists_command(self) -> Command:
        return Command("EXISTS", self._key)

    def delete_command(self) -> Command:
        return Command("DEL", self._key)

    def add_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        return Command(codec.INCRBY_VERB, self._key, amount)

    def sub_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        if codec.NATIVE_DECREMENT:
            return Command("DECRBY", self._key, amount)
        return super().sub_command(codec, amount)

    def increment_command(self, codec: Type[NumericCodec]) -> Command:
        if codec.NATIVE_DECREMENT:
            return Command("INCR", self._key)
        return super().increment_command(codec)

    def decrement_command(self, codec: Type[NumericCodec]) -> Command:
        if codec.NATIVE_DECREMENT:
            return Command("DECR", self._key)
        return super().decrement_command(codec)

    def __repr__(self) -> str:
        return f"KeyTarget({self._key!r})"


class HashFieldTarget(Target):
    """One field of a hash key."""

    def __init__(self, key: str, field: str):
        self._key = key
        self._field = field

    @property
    def key(self) -> str:
        return self._key

    @property
    def field(self) -> str:
        return self._field

    @property
    def identity(self) -> str:
        return self._field

    @property
    def label(self) -> str:
        return f"{self._key}[{self._field}]"

    def get_command(self) -> Command:
        return Command("HGET", self._key, self._field)

    def set_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        return Command("HSET", self._key, self._field, amount)

    def exists_command(self) -> Command:
        return Command("HEXISTS", self._key, self._field)

    def delete_command(self) -> Command:
        return Command("HDEL", self._key, self._field)

    def add_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        return Command(codec.HINCRBY_VERB, self._key, self._field, amount)

    def __repr__(self) -> str:
        return f"HashFieldTarget({self._key!r}, {self._field!r})"


class MultiTarget:
    """Commands for an ordered set of identities.

    Bulk reads, replaces and deletes are one native multi-argument
    command; everything else is built per identity from :attr:`targets`
    and sent as a pipelined batch.
    """

    @property
    def identities(self) -> List[str]:
        raise NotImplementedError

    @property
    def targets(self) -> List[Target]:
        raise NotImplementedError

    def get_all_command(self) -> Command:
        raise NotImplementedError

    def set_all_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        raise NotImplementedError

    def delete_all_command(self) -> Command:
        raise NotImplementedError

    def label(self, rendered: str) -> str:
        return rendered


class KeysTarget(MultiTarget):
    """Several top-level string keys."""

    def __init__(self, keys: Sequence[str]):
        self._keys = list(keys)
        self._targets: List[Target] = [KeyTarget(key) for key in self._keys]

    @property
    def keys(self) -> List[str]:
        return list(self._keys)

    @property
    def identities(self) -> List[str]:
        return list(self._keys)

    @property
    def targets(self) -> List[Target]:
        return self._targets

    def get_all_command(self) -> Command:
        return Command("MGET", *self._keys)

    def set_all_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        args = []
        for key in self._keys:
            args.extend((key, amount))
        return Command("MSET", *args)

    def delete_all_command(self) -> Command:
        return Command("DEL", *self._keys)

    def __repr__(self) -> str:
        return f"KeysTarget({self._keys!r})"


class HashFieldsTarget(MultiTarget):
    """Several fields of one hash key."""

    def __init__(self, key: str, fields: Sequence[str]):
        self._key = key
        self._fields = list(fields)
        self._targets: List[Target] = [HashFieldTarget(key, field) for field in self._fields]

    @property
    def key(self) -> str:
        return self._key

    @property
    def fields(self) -> List[str]:
        return list(self._fields)

    @property
    def identities(self) -> List[str]:
        return list(self._fields)

    @property
    def targets(self) -> List[Target]:
        return self._targets

    def get_all_command(self) -> Command:
        return Command("HMGET", self._key, *self._fields)

    def set_all_command(self, codec: Type[NumericCodec], amount: Number) -> Command:
        args = []
        for field in self._fields:
            args.extend((field, amount))
        return Command("HMSET", self._key, *args)

    def delete_all_command(self) -> Command:
        return Command("HDEL", self._key, *self._fields)

    def label(self, rendered: str) -> str:
        return f"{self._key}[{rendered}]"

    def __repr__(self) -> str:
        return f"HashFieldsTarget({self._key!r}, {self._fields!r})"
