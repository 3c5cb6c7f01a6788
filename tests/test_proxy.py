"""Unit tests for proxy base classes and counter targets."""

import pytest

from redis_counter.exceptions import IllegalArgumentException, IllegalStateException
from redis_counter.protocol.codec import Float64Codec, Int64Codec, NumericKind
from redis_counter.protocol.command import Command
from redis_counter.proxy.base import CounterProxy, require_name, require_names
from redis_counter.proxy.target import (
    HashFieldsTarget,
    HashFieldTarget,
    KeysTarget,
    KeyTarget,
)


class TestNameValidation:
    """Tests for key and field name validation."""

    def test_require_name(self):
        assert require_name("Bob", "key") == "Bob"

    def test_require_name_empty(self):
        with pytest.raises(IllegalArgumentException) as exc_info:
            require_name("", "field")
        assert str(exc_info.value) == "Empty field"

    def test_require_name_type(self):
        with pytest.raises(IllegalArgumentException):
            require_name(None, "key")

    def test_require_names(self):
        assert require_names(("a", "b"), "key") == ["a", "b"]

    def test_require_names_empty_list(self):
        with pytest.raises(IllegalArgumentException) as exc_info:
            require_names([], "key")
        assert str(exc_info.value) == "Empty keys"

    def test_require_names_indexed(self):
        with pytest.raises(IllegalArgumentException) as exc_info:
            require_names(["a", "", "c"], "field")
        assert str(exc_info.value) == "Empty field[1]"


class TestCounterProxy:
    """Tests for the CounterProxy base class."""

    def test_nil_connection(self):
        with pytest.raises(IllegalArgumentException) as exc_info:
            CounterProxy(None, Int64Codec)
        assert str(exc_info.value) == "Nil redis connection"

    def test_kind(self, connection):
        assert CounterProxy(connection, Float64Codec).kind is NumericKind.FLOAT64

    def test_destroy_calls_hook(self, connection):
        calls = []

        class Tracking(CounterProxy):
            def _on_destroy(self):
                calls.append(True)

        proxy = Tracking(connection, Int64Codec)
        proxy.destroy()

        assert proxy.is_destroyed
        assert calls == [True]

    def test_invoke_after_destroy(self, connection):
        proxy = CounterProxy(connection, Int64Codec)
        proxy.destroy()

        with pytest.raises(IllegalStateException):
            proxy._invoke(Command("GET", "Bob"))
        assert connection.commands == []


class TestKeyTarget:
    """Tests for top-level key command tables."""

    def test_int_commands(self):
        target = KeyTarget("Bob")

        assert target.get_command() == Command("GET", "Bob")
        assert target.set_command(Int64Codec, 5) == Command("SET", "Bob", 5)
        assert target.exists_command() == Command("EXISTS", "Bob")
        assert target.delete_command() == Command("DEL", "Bob")
        assert target.add_command(Int64Codec, 5) == Command("INCRBY", "Bob", 5)
        assert target.sub_command(Int64Codec, 5) == Command("DECRBY", "Bob", 5)
        assert target.increment_command(Int64Codec) == Command("INCR", "Bob")
        assert target.decrement_command(Int64Codec) == Command("DECR", "Bob")

    def test_float_commands(self):
        target = KeyTarget("Bob")

        assert target.add_command(Float64Codec, 0.5) == Command("INCRBYFLOAT", "Bob", 0.5)
        assert target.sub_command(Float64Codec, 0.5) == Command("INCRBYFLOAT", "Bob", -0.5)
        assert target.increment_command(Float64Codec) == Command("INCRBYFLOAT", "Bob", 1.0)
        assert target.decrement_command(Float64Codec) == Command("INCRBYFLOAT", "Bob", -1.0)

    def test_label(self):
        target = KeyTarget("Bob")

        assert target.identity == "Bob"
        assert target.label == "Bob"


class TestHashFieldTarget:
    """Tests for hash field command tables."""

    def test_int_commands(self):
        target = HashFieldTarget("scores", "Bob")

        assert target.get_command() == Command("HGET", "scores", "Bob")
        assert target.set_command(Int64Codec, 1) == Command("HSET", "scores", "Bob", 1)
        assert target.exists_command() == Command("HEXISTS", "scores", "Bob")
        assert target.delete_command() == Command("HDEL", "scores", "Bob")
        assert target.sub_command(Int64Codec, 3) == Command("HINCRBY", "scores", "Bob", -3)
        assert target.increment_command(Int64Codec) == Command("HINCRBY", "scores", "Bob", 1)
        assert target.decrement_command(Int64Codec) == Command("HINCRBY", "scores", "Bob", -1)

    def test_float_commands(self):
        target = HashFieldTarget("scores", "Bob")

        assert target.add_command(Float64Codec, 2.0) == Command(
            "HINCRBYFLOAT", "scores", "Bob", 2.0
        )

    def test_label(self):
        target = HashFieldTarget("scores", "Bob")

        assert target.identity == "Bob"
        assert target.label == "scores[Bob]"


class TestMultiTargets:
    """Tests for bulk command tables."""

    def test_keys_target(self):
        target = KeysTarget(["a", "b"])

        assert target.identities == ["a", "b"]
        assert target.get_all_command() == Command("MGET", "a", "b")
        assert target.set_all_command(Int64Codec, 3) == Command("MSET", "a", 3, "b", 3)
        assert target.delete_all_command() == Command("DEL", "a", "b")
        assert [t.identity for t in target.targets] == ["a", "b"]
        assert target.label("a = 1") == "a = 1"

    def test_hash_fields_target(self):
        target = HashFieldsTarget("scores", ["a", "b"])

        assert target.identities == ["a", "b"]
        assert target.get_all_command() == Command("HMGET", "scores", "a", "b")
        assert target.set_all_command(Float64Codec, 0.5) == Command(
            "HMSET", "scores", "a", 0.5, "b", 0.5
        )
        assert target.delete_all_command() == Command("HDEL", "scores", "a", "b")
        assert target.label("a = NaN") == "scores[a = NaN]"
