"""
pytest integration.

Loaded through the pytest11 entry point. Projects point the harness at their
routing by overriding the harness_registry fixture in a conftest.py:

    @pytest.fixture
    def harness_registry():
        return app_routes()

and then request the harness fixture in their tests.
"""

import pytest

from .config import HarnessConfig
from .helpers import Harness
from .ports.clock import SystemClock
from .ports.consumer import StrategySelector
from .ports.producer import Producer
from .ports.routing import InMemoryRegistry


@pytest.fixture(scope="session")
def harness_config() -> HarnessConfig:
    """Harness configuration, read once per session from the environment."""
    return HarnessConfig.from_env()


@pytest.fixture
def harness_registry():
    """Routing registry to resolve topics from. Override in your conftest.py."""
    return InMemoryRegistry()


@pytest.fixture
def harness_producer() -> Producer:
    """Producer whose client is replaced for the duration of each test."""
    return Producer()


@pytest.fixture
def harness_clock():
    return SystemClock()


@pytest.fixture
def harness_strategy_selector():
    return StrategySelector()


@pytest.fixture
def harness(harness_registry, harness_producer, harness_strategy_selector,
            harness_clock, harness_config):
    """A set-up Harness, torn down after the test."""
    h = Harness(
        harness_registry,
        harness_producer,
        strategy_selector=harness_strategy_selector,
        clock=harness_clock,
        config=harness_config,
    )
    h.setup()
    yield h
    h.teardown()
