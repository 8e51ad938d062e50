"""
pytest configuration and shared fixtures for harness tests.

The harness fixtures themselves come from the at_consumer_harness pytest
plugin; this module overrides the registry and clock they are built from.
"""

import pytest

from at_consumer_harness.ports import InMemoryRegistry, Topic
from tests.fixtures import (
    FakeClock,
    create_test_clock,
    RecordingConsumer,
    EchoConsumer,
    SelfFeedingConsumer,
    ManualConsumer,
)


def build_registry() -> InMemoryRegistry:
    """
    Routing used across the suite.

    - "orders" lives only in consumer group "cg"
    - "events" is consumed by both "cg" and "analytics"
    - "audit" is in two subscription groups of "analytics"
    """
    registry = InMemoryRegistry()
    registry.register("cg", [
        Topic("orders", RecordingConsumer),
        Topic("events", RecordingConsumer),
        Topic("echo", EchoConsumer),
        Topic("loop", SelfFeedingConsumer),
        Topic("manual", ManualConsumer, manual_offset_management=True),
    ])
    registry.register("analytics", [Topic("events", RecordingConsumer)])
    registry.register("analytics", [Topic("audit", RecordingConsumer)], subscription_group="audit-a")
    registry.register("analytics", [Topic("audit", RecordingConsumer)], subscription_group="audit-b")
    return registry


@pytest.fixture
def registry() -> InMemoryRegistry:
    return build_registry()


@pytest.fixture
def harness_registry(registry):
    return registry


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a controllable clock for testing."""
    return create_test_clock()


@pytest.fixture
def harness_clock(fake_clock):
    return fake_clock


@pytest.fixture
def orders_consumer(harness):
    """Consumer bound to the "orders" topic."""
    return harness.consumer_for("orders")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "e2e: mark test as an end-to-end harness flow"
    )
