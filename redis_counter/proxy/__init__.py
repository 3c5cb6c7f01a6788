"""Counter handles.

Each handle is a client-side view of one or more numeric values stored
in top-level string keys or hash fields.

Available Handles:
    - KeyCounterInt64, KeyCounterFloat64: One top-level key
    - HashFieldCounterInt64, HashFieldCounterFloat64: One hash field
    - MKeysCounterInt64, MKeysCounterFloat64: Several top-level keys
    - HashMFieldsCounterInt64, HashMFieldsCounterFloat64: Several fields
      of one hash

Example:
    >>> from redis_counter import CounterClient
    >>> client = CounterClient().start()
    >>> views = client.get_key_counter("page-views")
    >>> views.increment()
"""

from redis_counter.proxy.base import CounterProxy
from redis_counter.proxy.target import (
    Target,
    KeyTarget,
    HashFieldTarget,
    MultiTarget,
    KeysTarget,
    HashFieldsTarget,
)
from redis_counter.proxy.counter import (
    Counter,
    KeyCounter,
    KeyCounterInt64,
    KeyCounterFloat64,
    HashFieldCounter,
    HashFieldCounterInt64,
    HashFieldCounterFloat64,
)
from redis_counter.proxy.batch_counter import (
    BatchCounter,
    MKeysCounter,
    MKeysCounterInt64,
    MKeysCounterFloat64,
    HashMFieldsCounter,
    HashMFieldsCounterInt64,
    HashMFieldsCounterFloat64,
)

__all__ = [
    "CounterProxy",
    "Target",
    "KeyTarget",
    "HashFieldTarget",
    "MultiTarget",
    "KeysTarget",
    "HashFieldsTarget",
    "Counter",
    "KeyCounter",
    "KeyCounterInt64",
    "KeyCounterFloat64",
    "HashFieldCounter",
    "HashFieldCounterInt64",
    "HashFieldCounterFloat64",
    "BatchCounter",
    "MKeysCounter",
    "MKeysCounterInt64",
    "MKeysCounterFloat64",
    "HashMFieldsCounter",
    "HashMFieldsCounterInt64",
    "HashMFieldsCounterFloat64",
]
