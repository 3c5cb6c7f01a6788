"""Shared pytest fixtures for redis counter tests."""

import re
import pytest
from typing import Dict, List, Optional, Sequence, Tuple
from unittest.mock import MagicMock

from redis_counter.config import ClientConfig, NetworkConfig, SecurityConfig
from redis_counter.exceptions import TransportException
from redis_counter.network.connection import Connection
from redis_counter.protocol.command import Command
from redis_counter.protocol.reply import (
    NIL,
    ArrayReply,
    BulkReply,
    ErrorReply,
    IntegerReply,
    Reply,
)

_INTEGER_TEXT = re.compile(r"^-?\d+$")

NOT_AN_INTEGER = "ERR value is not an integer or out of range"
NOT_A_FLOAT = "ERR value is not a valid float"
WRONG_TYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"


def _format_float(value: float) -> str:
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


class FakeConnection(Connection):
    """In-memory store implementing the string and hash commands.

    Values are stored as text like the real server, so a counter can be
    pointed at a key holding ``"Gary"`` to exercise decode failures.

    Attributes:
        strings: Top-level string keys.
        hashes: Hash keys mapping to field dictionaries.
        commands: Every executed command as ``(verb, *args)`` text tuples.
        batch_sizes: The size of every pipelined batch.
    """

    def __init__(self):
        self.strings: Dict[str, str] = {}
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.commands: List[Tuple[str, ...]] = []
        self.batch_sizes: List[int] = []
        self.closed = False
        self._failure: Optional[Exception] = None

    def fail_next(self, error: Optional[Exception] = None) -> None:
        """Make the next execute or execute_batch call raise."""
        self._failure = error or TransportException("Connection reset by peer")

    def execute(self, command: Command) -> Reply:
        self._raise_pending_failure()
        return self._apply(command)

    def execute_batch(self, commands: Sequence[Command]) -> List[Reply]:
        self._raise_pending_failure()
        self.batch_sizes.append(len(commands))
        return [self._apply(command) for command in commands]

    def close(self) -> None:
        self.closed = True

    @property
    def verbs(self) -> List[str]:
        return [command[0] for command in self.commands]

    def _raise_pending_failure(self) -> None:
        if self._failure is not None:
            error, self._failure = self._failure, None
            raise error

    def _apply(self, command: Command) -> Reply:
        args = [arg.decode("utf-8") for arg in command.args]
        self.commands.append((command.verb, *args))
        handler = getattr(self, "_cmd_" + command.verb.lower(), None)
        if handler is None:
            return ErrorReply(f"ERR unknown command '{command.verb}'")
        return handler(*args)

    # Connection

    def _cmd_ping(self) -> Reply:
        return BulkReply("PONG")

    # Top-level keys

    def _string(self, key: str) -> Optional[str]:
        if key in self.hashes:
            raise _WrongType()
        return self.strings.get(key)

    def _cmd_get(self, key):
        try:
            value = self._string(key)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        return NIL if value is None else BulkReply(value)

    def _cmd_set(self, key, value):
        self.hashes.pop(key, None)
        self.strings[key] = value
        return BulkReply("OK")

    def _cmd_mget(self, *keys):
        return ArrayReply(
            [BulkReply(self.strings[key]) if key in self.strings else NIL for key in keys]
        )

    def _cmd_mset(self, *pairs):
        for key, value in zip(pairs[::2], pairs[1::2]):
            self._cmd_set(key, value)
        return BulkReply("OK")

    def _cmd_exists(self, *keys):
        return IntegerReply(sum(1 for key in keys if key in self.strings or key in self.hashes))

    def _cmd_del(self, *keys):
        removed = 0
        for key in keys:
            if self.strings.pop(key, None) is not None or self.hashes.pop(key, None) is not None:
                removed += 1
        return IntegerReply(removed)

    def _cmd_incr(self, key):
        return self._incr_string(key, 1)

    def _cmd_decr(self, key):
        return self._incr_string(key, -1)

    def _cmd_incrby(self, key, amount):
        return self._incr_string(key, int(amount))

    def _cmd_decrby(self, key, amount):
        return self._incr_string(key, -int(amount))

    def _cmd_incrbyfloat(self, key, amount):
        try:
            current = self._string(key)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        reply, text = _add_float(current, amount)
        if text is not None:
            self.strings[key] = text
        return reply

    def _incr_string(self, key: str, delta: int) -> Reply:
        try:
            current = self._string(key)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        reply, text = _add_integer(current, delta)
        if text is not None:
            self.strings[key] = text
        return reply

    # Hash fields

    def _hash(self, key: str, create: bool = False) -> Optional[Dict[str, str]]:
        if key in self.strings:
            raise _WrongType()
        if create:
            return self.hashes.setdefault(key, {})
        return self.hashes.get(key)

    def _cmd_hget(self, key, field):
        try:
            fields = self._hash(key)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        if fields is None or field not in fields:
            return NIL
        return BulkReply(fields[field])

    def _cmd_hset(self, key, field, value):
        try:
            fields = self._hash(key, create=True)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        created = field not in fields
        fields[field] = value
        return IntegerReply(1 if created else 0)

    def _cmd_hmget(self, key, *fields):
        try:
            stored = self._hash(key) or {}
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        return ArrayReply(
            [BulkReply(stored[field]) if field in stored else NIL for field in fields]
        )

    def _cmd_hmset(self, key, *pairs):
        try:
            fields = self._hash(key, create=True)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        for field, value in zip(pairs[::2], pairs[1::2]):
            fields[field] = value
        return BulkReply("OK")

    def _cmd_hexists(self, key, field):
        try:
            fields = self._hash(key) or {}
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        return IntegerReply(1 if field in fields else 0)

    def _cmd_hdel(self, key, *fields):
        try:
            stored = self._hash(key)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        if stored is None:
            return IntegerReply(0)
        removed = sum(1 for field in fields if stored.pop(field, None) is not None)
        if not stored:
            del self.hashes[key]
        return IntegerReply(removed)

    def _cmd_hincrby(self, key, field, amount):
        try:
            fields = self._hash(key, create=True)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        reply, text = _add_integer(fields.get(field), int(amount))
        if text is not None:
            fields[field] = text
        return reply

    def _cmd_hincrbyfloat(self, key, field, amount):
        try:
            fields = self._hash(key, create=True)
        except _WrongType:
            return ErrorReply(WRONG_TYPE)
        reply, text = _add_float(fields.get(field), amount)
        if text is not None:
            fields[field] = text
        return reply


class _WrongType(Exception):
    pass


def _add_integer(current: Optional[str], delta: int) -> Tuple[Reply, Optional[str]]:
    current = "0" if current is None else current
    if not _INTEGER_TEXT.match(current):
        return ErrorReply(NOT_AN_INTEGER), None
    value = int(current) + delta
    return IntegerReply(value), str(value)


def _add_float(current: Optional[str], amount: str) -> Tuple[Reply, Optional[str]]:
    current = "0" if current is None else current
    try:
        value = float(current) + float(amount)
    except ValueError:
        return ErrorReply(NOT_A_FLOAT), None
    text = _format_float(value)
    return BulkReply(text), text


@pytest.fixture
def connection():
    """Create an empty in-memory store connection."""
    return FakeConnection()


@pytest.fixture
def redis_client():
    """Create a MagicMock standing in for ``redis.Redis``."""
    client = MagicMock()
    pipe = MagicMock()
    pipe.__enter__.return_value = pipe
    pipe.__exit__.return_value = False
    client.pipeline.return_value = pipe
    return client


@pytest.fixture
def default_config():
    """Create a default ClientConfig."""
    return ClientConfig()


@pytest.fixture
def custom_config():
    """Create a ClientConfig with every option set."""
    config = ClientConfig()
    config.client_name = "test-client"
    config.network = NetworkConfig(
        host="cache.internal",
        port=6380,
        db=2,
        connection_timeout=2.5,
        socket_timeout=1.0,
        ssl=True,
    )
    config.security = SecurityConfig(username="app", password="secret")
    return config
