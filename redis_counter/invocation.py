"""Request/response invocation handling.

:class:`InvocationService` sends single commands and pipelined batches
through a :class:`~redis_counter.network.connection.Connection` and
attaches every reply to the command that produced it. A batch is
correlated by position: reply ``i`` belongs to command ``i``.
"""

import itertools
from typing import TYPE_CHECKING, List, Sequence

from redis_counter.exceptions import ProtocolException, TransportException
from redis_counter.logging import get_logger
from redis_counter.protocol.command import Command
from redis_counter.protocol.reply import Reply

if TYPE_CHECKING:
    from redis_counter.network.connection import Connection

_logger = get_logger("invocation")


class InvocationService:
    """Executes commands against one connection.

    No retries are performed: every transport error is the final answer
    for the call that raised it.
    """

    def __init__(self, connection: "Connection"):
        self._connection = connection
        self._correlation_ids = itertools.count(1)

    @property
    def connection(self) -> "Connection":
        return self._connection

    def invoke(self, command: Command) -> Reply:
        """Execute one command and return its reply."""
        correlation_id = next(self._correlation_ids)
        _logger.debug("Invocation %d: %r", correlation_id, command)
        try:
            reply = self._connection.execute(command)
        except TransportException as e:
            _logger.warning("Invocation %d failed: %s", correlation_id, e)
            raise
        command.set_reply(reply)
        return reply

    def execute_batch(self, commands: Sequence[Command]) -> List[Reply]:
        """Execute independent commands in one pipelined round trip.

        After a successful call each command exposes its own ``reply()``.

        Raises:
            TransportException: If the pipeline failed; no reply is attached.
            ProtocolException: If the reply count does not match.
        """
        correlation_id = next(self._correlation_ids)
        if not commands:
            return []

        _logger.debug("Batch %d: %d commands", correlation_id, len(commands))
        try:
            replies = self._connection.execute_batch(commands)
        except TransportException as e:
            _logger.warning("Batch %d failed: %s", correlation_id, e)
            raise

        if len(replies) != len(commands):
            raise ProtocolException(
                f"Batch sent {len(commands)} commands but received {len(replies)} replies"
            )

        for command, reply in zip(commands, replies):
            command.set_reply(reply)
        return list(replies)
