"""Batch counter example.

This example demonstrates how to:
- Update several keys in one pipelined round trip
- Read several hash fields with one HMGET
- Observe that a failed bulk read leaves the cache empty
"""

import logging

from redis_counter import (
    CounterClient,
    NotANumberException,
    NumericKind,
    configure_logging,
)


def main():
    # Log every command and batch
    configure_logging(level=logging.DEBUG)

    with CounterClient() as client:
        players = client.get_mkeys_counter(["example:Bob", "example:George"])
        players.delete_all()

        print(f"set_all(10)   -> {players.set_all(10)}")
        print(f"add_all(5)    -> {players.add_all(5)}")
        print(f"decrement_all -> {players.decrement_all()}")
        print(f"exists_all    -> {players.exists_all()}")
        print(f"get_all       -> {players.get_all()}")
        print(f"Cached: {players}")

        scores = client.get_hash_mfields_counter(
            "example:scores", ["Bob", "George"], NumericKind.FLOAT64
        )
        scores.set_all(1.5)
        scores.add_all(0.25)
        print(f"Scores: {scores}")

        # One bad field fails the whole call
        client.connection.client.hset("example:scores", "George", "Gary")
        try:
            scores.get_all()
        except NotANumberException as e:
            print(f"Bulk read failed on {e.text!r}; cached entries: {len(scores.cache)}")
            print(f"Scores: {scores}")

        players.delete_all()
        scores.delete_all()


if __name__ == "__main__":
    main()
