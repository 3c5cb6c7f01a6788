"""Basic usage example for redis counters.

This example demonstrates how to:
- Create and configure a client
- Use single key and hash field counters
- Read the cached value of a counter
- Handle a key that does not hold a number
"""

from redis_counter import ClientConfig, CounterClient, NotANumberException, NumericKind


def main():
    # Create configuration
    config = ClientConfig()
    config.network.host = "localhost"
    config.network.port = 6379

    client = CounterClient(config)

    try:
        client.start()
        print(f"Connected as {client.name}")

        # A missing key reads as zero and stays unknown in the cache
        views = client.get_key_counter("example:page-views")
        views.delete()
        print(f"get() -> {views.get()}   {views}")

        # Arithmetic returns the value after the change
        views.increment()
        views.add(10)
        views.sub(3)
        print(f"After updates: {views}")

        # Float counter in a hash field
        ratio = client.get_hash_field_counter("example:stats", "ratio", NumericKind.FLOAT64)
        ratio.set(0.5)
        ratio.add(0.125)
        print(f"Ratio: {ratio}")

        # A key holding text cannot be read as a counter
        client.connection.client.set("example:name", "Gary")
        name = client.get_key_counter("example:name")
        try:
            name.get()
        except NotANumberException as e:
            print(f"Not a number: {e.text!r}   {name}")

        print(f"Exists: {views.exists()}")
        views.delete()
        ratio.delete()
        name.delete()

    finally:
        client.shutdown()
        print("\nClient shutdown complete")


if __name__ == "__main__":
    main()
