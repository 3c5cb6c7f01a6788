"""Local cache of last observed counter values.

Each identity owned by a batch handle has one :class:`LastObserved`
record. A record is either UNKNOWN (never observed, reset, absent in
the store, or the last call failed) or KNOWN with the value decoded by
the most recent successful call.

The cache is not synchronized; a handle and its cache belong to one
logical owner.

Example:
    >>> from redis_counter.cache import ValueCache
    >>> from redis_counter.protocol.codec import Int64Codec
    >>> cache = ValueCache(["Bob", "George"], Int64Codec)
    >>> cache.set("Bob", 123)
    >>> cache.render()
    'Bob = 123, George = NaN'
    >>> len(cache)
    1
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Type

from redis_counter.exceptions import IllegalArgumentException
from redis_counter.protocol.codec import Number, NumericCodec


class ObservedState(Enum):
    """State of a cached identity."""
    UNKNOWN = "UNKNOWN"
    KNOWN = "KNOWN"


@dataclass(frozen=True)
class LastObserved:
    """The last observed value of one identity.

    Attributes:
        state: UNKNOWN or KNOWN.
        value: The decoded value when KNOWN, otherwise None.
    """

    state: ObservedState = ObservedState.UNKNOWN
    value: Optional[Number] = None

    @property
    def is_known(self) -> bool:
        return self.state is ObservedState.KNOWN

    @classmethod
    def unknown(cls) -> "LastObserved":
        return _UNKNOWN

    @classmethod
    def known(cls, value: Number) -> "LastObserved":
        return cls(ObservedState.KNOWN, value)


_UNKNOWN = LastObserved()


class ValueCache:
    """Mapping from identity to its last observed value.

    The identity list is fixed at construction and defines display
    order; after :meth:`reset` the mapping still holds every identity,
    each one UNKNOWN.

    Args:
        identities: Ordered identity names (keys or hash fields).
        codec: Codec used to render values.
    """

    def __init__(self, identities: Sequence[str], codec: Type[NumericCodec]):
        self._identities: List[str] = list(identities)
        self._codec = codec
        self._records: Dict[str, LastObserved] = {}
        self.reset()

    @property
    def identities(self) -> List[str]:
        return list(self._identities)

    def reset(self) -> None:
        """Mark every identity UNKNOWN."""
        self._records = {identity: _UNKNOWN for identity in self._identities}

    def record(self, identity: str) -> LastObserved:
        return self._records.get(identity, _UNKNOWN)

    def get(self, identity: str) -> Optional[Number]:
        """Get the last observed value, or None if it is not known."""
        return self.record(identity).value

    def set(self, identity: str, value: Optional[Number]) -> None:
        """Set the value of an identity; None marks it UNKNOWN."""
        if value is None:
            self._records[identity] = _UNKNOWN
        else:
            self._records[identity] = LastObserved.known(value)

    def populate(self, values: Sequence[Optional[Number]]) -> None:
        """Set every identity at once, in construction order.

        Raises:
            IllegalArgumentException: If the value count does not match
                the identity count.
        """
        if len(values) != len(self._identities):
            raise IllegalArgumentException(
                f"Expected {len(self._identities)} values, got {len(values)}"
            )
        for identity, value in zip(self._identities, values):
            self.set(identity, value)

    def __len__(self) -> int:
        return sum(1 for record in self._records.values() if record.is_known)

    def __contains__(self, identity: object) -> bool:
        return identity in self._records and self._records[identity].is_known

    def render(self, identities: Optional[Iterable[str]] = None) -> str:
        """Render ``"<identity> = <value>"`` pairs joined by ``", "``.

        Args:
            identities: Display order; defaults to construction order.
        """
        order = self._identities if identities is None else identities
        return ", ".join(
            f"{identity} = {self._codec.render_optional(self.get(identity))}"
            for identity in order
        )

    def to_dict(self) -> Dict[str, Optional[Number]]:
        return {identity: self.get(identity) for identity in self._identities}

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ValueCache({self.render()})"
