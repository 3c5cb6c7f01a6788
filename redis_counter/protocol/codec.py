"""Numeric codecs and reply decoding.

A codec describes one numeric kind: how to parse store text, how to
widen an integer reply, how to encode an amount on the wire, how to
render a cached value, and which increment verbs the store exposes for
it. :func:`decode_reply` turns one scalar reply into an optional value
of the codec's kind.
"""

from enum import Enum
from typing import List, Optional, Type, Union

from redis_counter.exceptions import (
    CommandException,
    IllegalArgumentException,
    NotANumberException,
    ProtocolException,
)
from redis_counter.protocol.reply import Reply, ReplyType

Number = Union[int, float]

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class NumericKind(Enum):
    """Numeric kind of a counter handle."""
    INT64 = "INT64"
    FLOAT64 = "FLOAT64"


def _check_numeric_text(text: str) -> None:
    # int() and float() tolerate whitespace, digit separators and non-ASCII
    # digits; the store does not.
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        raise NotANumberException(f"Not a number: {text!r}", text)


class NumericCodec:
    """Base codec for counter values."""

    KIND: NumericKind
    ZERO: Number
    ONE: Number
    INCRBY_VERB: str
    HINCRBY_VERB: str
    NATIVE_DECREMENT: bool = False

    @classmethod
    def parse(cls, text: str) -> Number:
        raise NotImplementedError

    @classmethod
    def from_integer(cls, value: int) -> Number:
        raise NotImplementedError

    @classmethod
    def coerce(cls, amount: Number) -> Number:
        raise NotImplementedError

    @classmethod
    def render(cls, value: Number) -> str:
        raise NotImplementedError

    @classmethod
    def negate(cls, amount: Number) -> Number:
        return -amount

    @classmethod
    def render_optional(cls, value: Optional[Number]) -> str:
        if value is None:
            return "NaN"
        return cls.render(value)


class Int64Codec(NumericCodec):
    """Codec for signed 64-bit integer counters."""

    KIND = NumericKind.INT64
    ZERO = 0
    ONE = 1
    INCRBY_VERB = "INCRBY"
    HINCRBY_VERB = "HINCRBY"
    NATIVE_DECREMENT = True

    @classmethod
    def parse(cls, text: str) -> int:
        _check_numeric_text(text)
        try:
            value = int(text, 10)
        except ValueError:
            raise NotANumberException(f"Not an integer: {text!r}", text)
        return cls._check_range(value, text)

    @classmethod
    def from_integer(cls, value: int) -> int:
        return cls._check_range(value, str(value))

    @classmethod
    def coerce(cls, amount: Number) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise IllegalArgumentException(
                f"Integer counter amount must be int, got {type(amount).__name__}"
            )
        if amount < INT64_MIN or amount > INT64_MAX:
            raise IllegalArgumentException(f"Amount {amount} is out of int64 range")
        return amount

    @classmethod
    def render(cls, value: int) -> str:
        return "%d" % value

    @staticmethod
    def _check_range(value: int, text: str) -> int:
        if value < INT64_MIN or value > INT64_MAX:
            raise NotANumberException(f"Integer out of int64 range: {text!r}", text)
        return value


class Float64Codec(NumericCodec):
    """Codec for double-precision float counters.

    The store has no float decrement verb, so subtraction is always an
    increment by the negated amount.
    """

    KIND = NumericKind.FLOAT64
    ZERO = 0.0
    ONE = 1.0
    INCRBY_VERB = "INCRBYFLOAT"
    HINCRBY_VERB = "HINCRBYFLOAT"

    @classmethod
    def parse(cls, text: str) -> float:
        _check_numeric_text(text)
        try:
            return float(text)
        except ValueError:
            raise NotANumberException(f"Not a float: {text!r}", text)

    @classmethod
    def from_integer(cls, value: int) -> float:
        return float(value)

    @classmethod
    def coerce(cls, amount: Number) -> float:
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise IllegalArgumentException(
                f"Float counter amount must be int or float, got {type(amount).__name__}"
            )
        return float(amount)

    @classmethod
    def render(cls, value: float) -> str:
        return "%0.6f" % value


_CODECS = {
    NumericKind.INT64: Int64Codec,
    NumericKind.FLOAT64: Float64Codec,
}


def codec_for(kind: NumericKind) -> Type[NumericCodec]:
    """Get the codec class for a numeric kind."""
    try:
        return _CODECS[kind]
    except KeyError:
        raise IllegalArgumentException(f"Unknown numeric kind: {kind!r}")


def check_not_error(reply: Reply) -> Reply:
    """Raise the store's error verbatim if the reply is an error."""
    if reply.type is ReplyType.ERROR:
        raise CommandException(reply.message)
    return reply


def decode_reply(reply: Reply, codec: Type[NumericCodec]) -> Optional[Number]:
    """Decode one scalar reply into an optional number.

    Args:
        reply: The reply to decode.
        codec: The numeric codec of the counter.

    Returns:
        The decoded value, or None when the key or field is absent.

    Raises:
        CommandException: If the reply is an error reply.
        NotANumberException: If a bulk reply is not valid numeric text.
        ProtocolException: If the reply is an array.
    """
    reply_type = reply.type
    if reply_type is ReplyType.ERROR:
        raise CommandException(reply.message)
    if reply_type is ReplyType.NIL:
        return None
    if reply_type is ReplyType.INTEGER:
        return codec.from_integer(reply.value)
    if reply_type is ReplyType.BULK:
        return codec.parse(reply.value)
    if reply_type is ReplyType.ARRAY:
        raise ProtocolException("Array replies must be unpacked before decoding")
    raise ProtocolException(f"Unknown reply type: {reply_type!r}")


def decode_array(reply: Reply, count: int, codec: Type[NumericCodec]) -> List[Optional[Number]]:
    """Decode an array reply element by element.

    The first element that fails to decode aborts the whole array.

    Raises:
        ProtocolException: If the reply is not an array of ``count`` elements.
    """
    check_not_error(reply)
    if reply.type is not ReplyType.ARRAY:
        raise ProtocolException(f"Expected array reply, got {reply.type.value}")
    if len(reply) != count:
        raise ProtocolException(
            f"Expected {count} array elements, got {len(reply)}"
        )
    return [decode_reply(element, codec) for element in reply]


def decode_exists(reply: Reply) -> bool:
    """Interpret an EXISTS/HEXISTS reply as a boolean."""
    check_not_error(reply)
    if reply.type is not ReplyType.INTEGER:
        raise ProtocolException(f"Expected integer reply, got {reply.type.value}")
    return reply.value == 1
