"""Redis counter exceptions.

This module defines the exception hierarchy for the redis counter package.
All exceptions inherit from :class:`CounterException`.

Example:
    Handling counter exceptions::

        from redis_counter.exceptions import (
            CounterException,
            NotANumberException,
            TransportException,
        )

        try:
            value = counter.get()
        except NotANumberException as e:
            print(f"Key does not hold a number: {e.text!r}")
        except TransportException:
            print("Connection to the store failed")
        except CounterException as e:
            print(f"Counter error: {e}")
"""


class CounterException(Exception):
    """Base class for all redis counter exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class IllegalStateException(CounterException):
    """Raised when an operation is invoked on an illegal state.

    Example:
        - Calling operations on a destroyed counter handle
        - Reading the reply of a command that was never executed
    """
    pass


class IllegalArgumentException(CounterException):
    """Raised when an illegal or inappropriate argument is passed.

    Example:
        - Passing None as the connection
        - An empty key, field, or identity list
        - A float amount for an integer counter
    """
    pass


class ConfigurationException(CounterException):
    """Raised when there is a configuration error.

    Example:
        - Port outside 1..65535
        - Negative timeout values
        - Unreadable or malformed YAML file
    """
    pass


class ClientOfflineException(CounterException):
    """Raised when the client is not connected to the store.

    Example:
        >>> try:
        ...     counter = client.get_key_counter("hits")
        ... except ClientOfflineException:
        ...     client.start()
    """
    pass


class TransportException(CounterException):
    """Raised when the connection or a pipelined batch fails.

    A transport failure during a batch fails the whole batch; no
    partial reply list is usable.
    """
    pass


class TimeoutException(TransportException):
    """Raised when the store did not answer within the socket timeout."""
    pass


class CommandException(CounterException):
    """Raised when the store answers a command with an error reply.

    The message is the store's error text, carried verbatim.

    Example:
        >>> try:
        ...     counter.add(1)
        ... except CommandException as e:
        ...     print(e)  # ERR value is not an integer or out of range
    """
    pass


class NotANumberException(CounterException):
    """Raised when a stored value cannot be parsed as the counter's type.

    Args:
        message: The error message.
        text: The offending text returned by the store.

    Attributes:
        text: The text that failed to parse.
    """

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self._text = text

    @property
    def text(self) -> str:
        """Get the text that failed to parse."""
        return self._text


class ProtocolException(CounterException):
    """Raised when a reply has an unexpected shape.

    Example:
        - An array reply passed to the scalar decoder
        - A bulk read returning fewer elements than identities requested
        - A batch returning a different number of replies than commands sent
    """
    pass
