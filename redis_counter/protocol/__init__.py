"""Store command and reply protocol."""

from redis_counter.protocol.reply import (
    Reply,
    ReplyType,
    ErrorReply,
    NilReply,
    IntegerReply,
    BulkReply,
    ArrayReply,
    NIL,
)
from redis_counter.protocol.command import Command, encode_arg
from redis_counter.protocol.codec import (
    NumericKind,
    NumericCodec,
    Int64Codec,
    Float64Codec,
    codec_for,
    decode_reply,
    decode_array,
    decode_exists,
    check_not_error,
)

__all__ = [
    "Reply",
    "ReplyType",
    "ErrorReply",
    "NilReply",
    "IntegerReply",
    "BulkReply",
    "ArrayReply",
    "NIL",
    "Command",
    "encode_arg",
    "NumericKind",
    "NumericCodec",
    "Int64Codec",
    "Float64Codec",
    "codec_for",
    "decode_reply",
    "decode_array",
    "decode_exists",
    "check_not_error",
]
