"""
Test-author surface of the harness.

A Harness is set up once per test: it swaps the producer's client for a
recording interceptor, resets every buffer, and exposes consumer_for(),
produce() and produced_messages().

Example:
    harness = Harness(registry, producer)
    with harness:
        consumer = harness.consumer_for("orders")
        harness.produce({"order_id": 1})
        consumer.on_consume()
"""

from typing import Any, Dict, List, Mapping, Optional
from unittest import mock

import structlog

from .clients import FakeConsumerClient, ProducerInterceptor
from .config import HarnessConfig
from .delivery import DeliverySimulator
from .errors import HarnessNotSetUp, NoConsumerBound
from .factory import ConsumerFactory
from .logging_config import configure_logging
from .ports.clock import Clock, SystemClock
from .ports.consumer import BaseConsumer, StrategySelector
from .ports.producer import DeliveryReport, Producer
from .ports.routing import Registry
from .resolver import RoutingResolver

logger = structlog.get_logger(__name__)


class Harness:
    """Resolves, builds and feeds consumers for a single test."""

    def __init__(self, registry: Registry, producer: Producer,
                 strategy_selector: Optional[StrategySelector] = None,
                 clock: Optional[Clock] = None,
                 config: Optional[HarnessConfig] = None):
        self.registry = registry
        self.producer = producer
        self.strategy_selector = strategy_selector or StrategySelector()
        self.clock = clock or SystemClock()
        self.config = config or HarnessConfig()
        self.resolver = RoutingResolver(registry)

        self.simulator: Optional[DeliverySimulator] = None
        self.consumer_client: Optional[FakeConsumerClient] = None
        self.producer_client: Optional[ProducerInterceptor] = None
        self._consumer: Any = None
        self._client_patch = None

    def setup(self):
        """Reset buffers and bind the recording client in place of the real one."""
        if self._client_patch is not None:
            self.teardown()

        if self.config.configure_logging:
            configure_logging(self.config.log_level, json=self.config.log_json)

        self.simulator = DeliverySimulator(self.clock)
        self.consumer_client = FakeConsumerClient()
        self.producer_client = ProducerInterceptor(self._deliver)

        self.simulator.reset()
        self.producer_client.reset()

        self._client_patch = mock.patch.object(self.producer, "client", self.producer_client)
        self._client_patch.start()
        logger.debug("Harness set up")

    def teardown(self):
        """Restore the producer's original client and unbind the consumer."""
        if self._client_patch is not None:
            self._client_patch.stop()
            self._client_patch = None
        self._consumer = None
        logger.debug("Harness torn down")

    def __enter__(self) -> "Harness":
        self.setup()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.teardown()

    @property
    def consumer(self) -> Any:
        """Object delivered messages are targeted at."""
        return self._consumer

    def bind(self, obj: Any):
        """
        Bind any object as the delivery target; non-consumers receive nothing.

        Changing the target drops messages delivered to the previous one, so
        the new consumer's offsets start at 0.
        """
        if obj is not self._consumer and self.simulator is not None:
            self.simulator.reset()
        self._consumer = obj

    def consumer_for(self, topic_name: Any, consumer_group_name: Optional[Any] = None) -> BaseConsumer:
        """
        Build a consumer for a registered topic and bind it to this test.

        Args:
            topic_name: Name of the topic to consume
            consumer_group_name: Consumer group to look in when the topic is
                registered in more than one of them

        Returns:
            A consumer wired with a fake client, its strategy and a coordinator

        Raises:
            TopicNotFound: If the topic is not registered
            TopicInManyConsumerGroups: If the topic is ambiguous without a consumer group
            ConsumerGroupNotFound: If the requested consumer group is not registered
        """
        self._ensure_set_up()
        topic = self.resolver.resolve(topic_name, consumer_group_name)
        factory = ConsumerFactory(self.producer, self.strategy_selector, self.consumer_client, self.clock)
        consumer = factory.build(topic)
        self.bind(consumer)
        return consumer

    def produce(self, payload: Any, metadata: Optional[Mapping[str, Any]] = None) -> DeliveryReport:
        """
        Produce a message to the bound consumer's topic.

        Args:
            payload: Message payload
            metadata: Optional overrides such as partition, key or headers
        """
        self._ensure_set_up()
        if not isinstance(self._consumer, BaseConsumer):
            raise NoConsumerBound()

        message = {"topic": self._consumer.topic.name, "payload": payload}
        message.update(metadata or {})
        return self.producer.produce_sync(message)

    def produced_messages(self) -> List[Dict[str, Any]]:
        self._ensure_set_up()
        return self.producer_client.produced_messages()

    def produced_messages_for(self, topic: str) -> List[Dict[str, Any]]:
        self._ensure_set_up()
        return self.producer_client.messages_for(topic)

    def reset(self):
        """Clear recorded production and delivered messages within a test."""
        self._ensure_set_up()
        self.producer_client.reset()
        self.simulator.reset()
        self.consumer_client.reset()

    def _deliver(self, message: Mapping[str, Any]):
        return self.simulator.deliver(self._consumer, message)

    def _ensure_set_up(self):
        if self._client_patch is None:
            raise HarnessNotSetUp()
