"""
at-consumer-harness: broker-less test harness for topic consumers.

This package provides:
- Routing resolution of topics across consumer and subscription groups
- A consumer factory wiring strategies, coordinators and a fake client
- Simulated message delivery into a consumer's batch
- A producer interceptor capturing outbound messages for assertions
"""

from .errors import (
    HarnessError,
    TopicNotFound,
    TopicInManyConsumerGroups,
    ConsumerGroupNotFound,
    HarnessNotSetUp,
    NoConsumerBound,
)
from .resolver import RoutingResolver
from .factory import ConsumerFactory
from .delivery import DeliverySimulator
from .clients import FakeConsumerClient, ProducerInterceptor
from .config import HarnessConfig
from .helpers import Harness

__version__ = "1.0.0"

__all__ = [
    "Harness",
    "HarnessConfig",
    "RoutingResolver",
    "ConsumerFactory",
    "DeliverySimulator",
    "FakeConsumerClient",
    "ProducerInterceptor",
    "HarnessError",
    "TopicNotFound",
    "TopicInManyConsumerGroups",
    "ConsumerGroupNotFound",
    "HarnessNotSetUp",
    "NoConsumerBound",
]
