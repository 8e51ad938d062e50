"""Consumer base class and the processing strategies composed into it."""
from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Protocol

import structlog

from .clock import Clock, SystemClock
from .messages import Message, MessageBatch, build_batch_metadata

logger = structlog.get_logger(__name__)


class ConsumerOrigin(Enum):
    LIVE = "live"
    SIMULATED = "simulated"


class Strategy(Protocol):
    name: str
    def mark_as_consumed(self, consumer: "BaseConsumer", message: Message) -> bool: ...
    def should_mark_after_batch(self) -> bool: ...


class AutoOffsetStrategy:
    """Marks the last message of every successfully consumed batch."""

    name = "auto"

    def mark_as_consumed(self, consumer: "BaseConsumer", message: Message) -> bool:
        if not consumer.client.mark_as_consumed(message):
            return False
        consumer.coordinator.mark(message.offset)
        return True

    def should_mark_after_batch(self) -> bool:
        return True


class ManualOffsetStrategy(AutoOffsetStrategy):
    """Offsets are only marked when the consumer asks for it."""

    name = "manual"

    def should_mark_after_batch(self) -> bool:
        return False


class StrategySelector:
    def find(self, topic) -> Strategy:
        if topic.manual_offset_management:
            return ManualOffsetStrategy()
        return AutoOffsetStrategy()


class BaseConsumer(ABC):
    """
    Base class for all topic consumers.

    Collaborators are passed in at construction time. A consumer built with
    ConsumerOrigin.SIMULATED counts as used from the start, so lifecycle hooks
    that normally wait for a first enqueued batch run right away.
    """

    def __init__(self, topic, producer, client, coordinator, strategy: Strategy,
                 origin: ConsumerOrigin = ConsumerOrigin.LIVE, clock: Clock | None = None):
        self.topic = topic
        self.producer = producer
        self.client = client
        self.coordinator = coordinator
        self.strategy = strategy
        self.origin = origin
        self._enqueued = False
        self.messages = MessageBatch(
            (), build_batch_metadata((), topic, coordinator.partition, (clock or SystemClock()).now_utc())
        )

    @property
    def partition(self) -> int:
        return self.coordinator.partition

    @property
    def used(self) -> bool:
        return self.origin is ConsumerOrigin.SIMULATED or self._enqueued

    def on_enqueue(self) -> None:
        self._enqueued = True

    @abstractmethod
    def consume(self) -> None:
        """Process the current batch in self.messages."""

    def on_consume(self) -> None:
        """Run consume() and apply the strategy's post-batch marking."""
        self.consume()
        last = self.messages.last()
        if last is not None and self.strategy.should_mark_after_batch():
            self.mark_as_consumed(last)

    def mark_as_consumed(self, message: Message) -> bool:
        return self.strategy.mark_as_consumed(self, message)

    def produce_sync(self, **message: Any):
        return self.producer.produce_sync(message)

    def revoked(self) -> None:
        pass

    def shutdown(self) -> None:
        pass

    def on_revoked(self) -> None:
        if not self.used:
            return
        logger.debug("Consumer revoked", topic=self.topic.name, partition=self.partition)
        self.revoked()

    def on_shutdown(self) -> None:
        if not self.used:
            return
        logger.debug("Consumer shutdown", topic=self.topic.name, partition=self.partition)
        self.shutdown()
