"""Outbound store commands."""

from typing import Any, Optional, Tuple

from redis_counter.exceptions import IllegalArgumentException, IllegalStateException
from redis_counter.protocol.reply import Reply


def encode_arg(arg: Any) -> bytes:
    """Encode one command argument to its wire bytes.

    Strings are UTF-8, integers base-10 ASCII, floats the shortest text
    that round-trips (``repr``), which the store parses natively.
    """
    if isinstance(arg, bytes):
        return arg
    if isinstance(arg, str):
        return arg.encode("utf-8")
    if isinstance(arg, bool):
        raise IllegalArgumentException(f"Cannot encode boolean argument {arg!r}")
    if isinstance(arg, int):
        return str(arg).encode("ascii")
    if isinstance(arg, float):
        return repr(arg).encode("ascii")
    raise IllegalArgumentException(
        f"Cannot encode argument of type {type(arg).__name__}"
    )


class Command:
    """A single store command targeted at one key or key+field.

    Once the command has been executed, its reply is attached to it so
    a batch of commands can be walked back in submission order.
    """

    def __init__(self, verb: str, *args: Any):
        self._verb = verb.upper()
        self._args: Tuple[bytes, ...] = tuple(encode_arg(a) for a in args)
        self._reply: Optional[Reply] = None

    @property
    def verb(self) -> str:
        return self._verb

    @property
    def args(self) -> Tuple[bytes, ...]:
        return self._args

    @property
    def has_reply(self) -> bool:
        return self._reply is not None

    def reply(self) -> Reply:
        """Get the reply correlated to this command.

        Raises:
            IllegalStateException: If the command has not been executed.
        """
        if self._reply is None:
            raise IllegalStateException(f"Command {self._verb} has not been executed")
        return self._reply

    def set_reply(self, reply: Reply) -> None:
        self._reply = reply

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return False
        return self._verb == other._verb and self._args == other._args

    def __hash__(self) -> int:
        return hash((self._verb, self._args))

    def __repr__(self) -> str:
        args = " ".join(a.decode("utf-8", "replace") for a in self._args)
        return f"Command({self._verb} {args})" if args else f"Command({self._verb})"
