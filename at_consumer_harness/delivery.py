"""
Delivery simulator.

Appends messages to the bound consumer's batch as if a broker had delivered
them. The consumer always sees every message delivered so far in the test,
with offsets assigned in arrival order starting at 0.
"""

from typing import Any, Dict, List, Mapping, Optional

import structlog

from . import metrics
from .factory import SIMULATED_PARTITION
from .ports.clock import Clock, SystemClock
from .ports.consumer import BaseConsumer
from .ports.messages import Message, MessageBatch, MessageMetadata, build_batch_metadata

logger = structlog.get_logger(__name__)


class DeliverySimulator:
    """Owns the per-test message buffer and rebuilds consumer batches from it."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self._messages: List[Message] = []

    @property
    def messages(self) -> List[Message]:
        """Messages delivered so far, in arrival order."""
        return list(self._messages)

    def reset(self):
        """Drop every delivered message; the next delivery gets offset 0."""
        self._messages.clear()

    def deliver(self, consumer: Any, message: Mapping[str, Any]) -> Optional[Message]:
        """
        Append a message to the consumer's batch if it is addressed to it.

        Unrelated objects and messages for other topics are ignored, so tests
        that produce elsewhere never fail because of delivery.

        Args:
            consumer: Object bound in the current test, usually a consumer
            message: Candidate message with "topic", "payload" and optional
                metadata fields (key, headers, partition, offset, ...)

        Returns:
            The appended message, or None when the message was ignored
        """
        reason = self._skip_reason(consumer, message)
        if reason:
            metrics.deliveries_skipped.labels(reason=reason).inc()
            logger.debug("Delivery skipped", reason=reason, topic=message.get("topic"))
            return None

        metadata = self._metadata_defaults(consumer)
        for field in MessageMetadata.FIELDS:
            if field in message:
                metadata[field] = message[field]

        delivered = Message(message.get("payload"), MessageMetadata(**metadata))
        self._messages.append(delivered)

        batch_metadata = build_batch_metadata(
            self._messages, consumer.topic, SIMULATED_PARTITION, self.clock.now_utc()
        )
        consumer.messages = MessageBatch(self._messages, batch_metadata)

        metrics.messages_delivered.labels(topic=consumer.topic.name).inc()
        logger.debug("Message delivered", topic=delivered.topic,
                     partition=delivered.partition, offset=delivered.offset)
        return delivered

    @staticmethod
    def _skip_reason(consumer: Any, message: Mapping[str, Any]) -> Optional[str]:
        if consumer is None:
            return "no_consumer"
        if not isinstance(consumer, BaseConsumer):
            return "not_a_consumer"
        if message.get("topic") != consumer.topic.name:
            return "topic_mismatch"
        return None

    def _metadata_defaults(self, consumer: BaseConsumer) -> Dict[str, Any]:
        now = self.clock.now_utc()
        return {
            "deserializer": consumer.topic.deserializer,
            "timestamp": now,
            "headers": {},
            "key": None,
            "offset": len(self._messages),
            "partition": SIMULATED_PARTITION,
            "received_at": now,
            "topic": consumer.topic.name,
        }
