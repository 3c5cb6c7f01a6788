"""Store reply types.

A reply is one of five tagged shapes produced by the transport: an
error, a nil, an integer, a bulk string, or an array of replies. Every
reply carries its :class:`ReplyType` tag so consumers dispatch on the
tag instead of on the Python class.
"""

from enum import Enum
from typing import Iterator, Sequence, Tuple


class ReplyType(Enum):
    """Tag identifying the shape of a reply."""
    ERROR = "ERROR"
    NIL = "NIL"
    INTEGER = "INTEGER"
    BULK = "BULK"
    ARRAY = "ARRAY"


class Reply:
    """Base class for all replies."""

    type: ReplyType

    @property
    def is_error(self) -> bool:
        return self.type is ReplyType.ERROR

    @property
    def is_nil(self) -> bool:
        return self.type is ReplyType.NIL


class ErrorReply(Reply):
    """The store rejected the command."""

    type = ReplyType.ERROR

    def __init__(self, message: str):
        self._message = message

    @property
    def message(self) -> str:
        return self._message

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ErrorReply) and self._message == other._message

    def __hash__(self) -> int:
        return hash((self.type, self._message))

    def __repr__(self) -> str:
        return f"ErrorReply({self._message!r})"


class NilReply(Reply):
    """The key or field does not exist."""

    type = ReplyType.NIL

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NilReply)

    def __hash__(self) -> int:
        return hash(self.type)

    def __repr__(self) -> str:
        return "NilReply()"


class IntegerReply(Reply):
    """A 64-bit signed integer reply."""

    type = ReplyType.INTEGER

    def __init__(self, value: int):
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IntegerReply) and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.type, self._value))

    def __repr__(self) -> str:
        return f"IntegerReply({self._value})"


class BulkReply(Reply):
    """A bulk string reply, already decoded to text."""

    type = ReplyType.BULK

    def __init__(self, value: str):
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BulkReply) and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.type, self._value))

    def __repr__(self) -> str:
        return f"BulkReply({self._value!r})"


class ArrayReply(Reply):
    """An ordered array of nested replies."""

    type = ReplyType.ARRAY

    def __init__(self, elements: Sequence[Reply]):
        self._elements: Tuple[Reply, ...] = tuple(elements)

    @property
    def elements(self) -> Tuple[Reply, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Reply]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Reply:
        return self._elements[index]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ArrayReply) and self._elements == other._elements

    def __hash__(self) -> int:
        return hash((self.type, self._elements))

    def __repr__(self) -> str:
        return f"ArrayReply({list(self._elements)!r})"


NIL = NilReply()
