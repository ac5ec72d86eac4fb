"""Unit tests for ContextTypeRegistry.

Tests first-writer-wins registration, lookups and thread safety.
"""

import threading
from dataclasses import dataclass

import pytest

from dynamic_healthcheck.exceptions import ConfigurationMismatchError
from dynamic_healthcheck.registry import ContextTypeRegistry


class DatabasePing:
    pass


class HttpProbe:
    pass


@dataclass
class DatabasePingContext:
    host: str = ""


@dataclass
class OtherContext:
    url: str = ""


class TestRegistration:
    """Tests for register and lookup."""

    def test_register_and_lookup(self, registry):
        """Test a registered shape can be looked up."""
        assert registry.register(DatabasePing, DatabasePingContext) is True
        assert registry.lookup(DatabasePing) is DatabasePingContext

    def test_lookup_unregistered(self, registry):
        """Test lookup of an unknown kind returns None."""
        assert registry.lookup(DatabasePing) is None
        assert registry.is_registered(DatabasePing) is False

    def test_register_same_shape_twice_is_idempotent(self, registry):
        """Test registering the same pair twice leaves one entry."""
        registry.register(DatabasePing, DatabasePingContext)
        assert registry.register(DatabasePing, DatabasePingContext) is False
        assert len(registry) == 1
        assert registry.lookup(DatabasePing) is DatabasePingContext

    def test_first_registration_wins(self, registry):
        """Test a second shape for the same kind is ignored."""
        registry.register(DatabasePing, DatabasePingContext)
        assert registry.register(DatabasePing, OtherContext) is False
        assert registry.lookup(DatabasePing) is DatabasePingContext

    def test_registered_kinds_in_order(self, registry):
        """Test registered kinds keep registration order."""
        registry.register(HttpProbe, OtherContext)
        registry.register(DatabasePing, DatabasePingContext)
        assert registry.registered_kinds == [HttpProbe, DatabasePing]
        assert DatabasePing in registry

    def test_registries_are_independent(self):
        """Test two registries share no state."""
        first = ContextTypeRegistry()
        second = ContextTypeRegistry()
        first.register(DatabasePing, DatabasePingContext)
        assert second.lookup(DatabasePing) is None


class TestEnsure:
    """Tests for the kind/shape check."""

    def test_ensure_matching(self, registry):
        """Test ensure passes for the registered shape."""
        registry.register(DatabasePing, DatabasePingContext)
        registry.ensure(DatabasePing, DatabasePingContext)

    def test_ensure_other_shape(self, registry):
        """Test ensure fails for a different shape."""
        registry.register(DatabasePing, DatabasePingContext)
        with pytest.raises(ConfigurationMismatchError) as exc_info:
            registry.ensure(DatabasePing, OtherContext)
        assert exc_info.value.health_check == "DatabasePing"
        assert exc_info.value.details["expected"] == "DatabasePingContext"

    def test_ensure_rejects_subclass_of_shape(self, registry):
        """Test a subclass of the registered shape is a different shape."""

        @dataclass
        class ExtendedContext(DatabasePingContext):
            port: int = 5432

        registry.register(DatabasePing, DatabasePingContext)
        with pytest.raises(ConfigurationMismatchError) as exc_info:
            registry.ensure(DatabasePing, ExtendedContext)
        assert exc_info.value.details == {
            "expected": "DatabasePingContext",
            "requested": "ExtendedContext",
        }

    def test_ensure_unregistered(self, registry):
        """Test ensure fails for an unregistered kind."""
        with pytest.raises(ConfigurationMismatchError, match="DatabasePing"):
            registry.ensure(DatabasePing, DatabasePingContext)


class TestConcurrency:
    """Tests for concurrent registration."""

    def test_concurrent_registration_single_winner(self, registry):
        """Test racing registrations produce exactly one effective write."""
        shapes = [
            dataclass(type(f"Shape{i}", (), {"__annotations__": {}})) for i in range(20)
        ]
        barrier = threading.Barrier(len(shapes))
        results = []
        errors = []

        def register(shape):
            try:
                barrier.wait()
                results.append((shape, registry.register(DatabasePing, shape)))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register, args=(s,)) for s in shapes]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        winners = [shape for shape, won in results if won]
        assert len(winners) == 1
        assert registry.lookup(DatabasePing) is winners[0]
        assert len(registry) == 1
