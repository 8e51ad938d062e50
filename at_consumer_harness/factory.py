"""Builds broker-less consumer instances for resolved topics."""

from typing import Optional

import structlog

from . import metrics
from .ports.clock import Clock, SystemClock
from .ports.consumer import BaseConsumer, ConsumerOrigin
from .ports.coordination import CoordinatorsBuffer
from .ports.routing import Topic, Topics

logger = structlog.get_logger(__name__)

SIMULATED_PARTITION = 0


class ConsumerFactory:
    """
    Assembles a consumer with its strategy, coordinator and fake client.

    Each build gets its own strategy object and coordinator, so consumers of
    the same topic class never share processing state.
    """

    def __init__(self, producer, strategy_selector, client, clock: Optional[Clock] = None):
        self.producer = producer
        self.strategy_selector = strategy_selector
        self.client = client
        self.clock = clock or SystemClock()

    def build(self, topic: Topic) -> BaseConsumer:
        strategy = self.strategy_selector.find(topic)

        coordinators = CoordinatorsBuffer(Topics([topic]))
        coordinator = coordinators.find_or_create(topic.name, SIMULATED_PARTITION)
        coordinator.seek_offset = 0

        consumer = topic.consumer(
            topic=topic,
            producer=self.producer,
            client=self.client,
            coordinator=coordinator,
            strategy=strategy,
            origin=ConsumerOrigin.SIMULATED,
            clock=self.clock,
        )

        metrics.consumers_built.labels(topic=topic.name).inc()
        logger.debug("Consumer built", topic=topic.name, consumer=type(consumer).__name__,
                     strategy=getattr(strategy, "name", type(strategy).__name__))
        return consumer
