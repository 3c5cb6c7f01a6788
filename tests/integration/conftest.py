"""Integration test fixtures against a live Redis server.

Set ``REDIS_URL`` (e.g. ``redis://localhost:6379/15``) to run them. The
selected database is flushed before every test.
"""

import os
import pytest
from typing import Generator

from redis_counter.network.connection import RedisConnection

REDIS_URL = os.environ.get("REDIS_URL")
SKIP_INTEGRATION = os.environ.get("SKIP_INTEGRATION_TESTS", "false").lower() == "true"


@pytest.fixture
def redis_connection() -> Generator[RedisConnection, None, None]:
    """Connection to a flushed test database."""
    if SKIP_INTEGRATION or not REDIS_URL:
        pytest.skip("Integration tests disabled or REDIS_URL not set")
    connection = RedisConnection.from_url(REDIS_URL)
    connection.client.flushdb()
    yield connection
    connection.client.flushdb()
    connection.close()
