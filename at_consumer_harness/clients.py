"""Client stand-ins injected in place of the real transport."""

from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from . import metrics
from .ports.messages import Message
from .ports.producer import DeliveryReport, DummyClient

logger = structlog.get_logger(__name__)


class FakeConsumerClient:
    """
    Broker-less consumer client.

    Offset operations succeed without side effects; marked messages are kept
    so tests can assert on what a consumer acknowledged.
    """

    def __init__(self):
        self.marked: List[Message] = []

    def mark_as_consumed(self, message: Message) -> bool:
        self.marked.append(message)
        return True

    def commit_offsets(self) -> bool:
        return True

    def pause(self, topic: str, partition: int, offset: Optional[int] = None) -> None:
        pass

    def resume(self, topic: str, partition: int) -> None:
        pass

    def seek(self, topic: str, partition: int, offset: int) -> None:
        pass

    def assignment_lost(self) -> bool:
        return False

    def reset(self):
        self.marked.clear()


class ProducerInterceptor(DummyClient):
    """
    Producer client that records outbound messages instead of sending them.

    Every recorded message is also handed to on_produce, which the harness
    wires to the delivery simulator so a consumer observes what it produced
    to its own topic.
    """

    def __init__(self, on_produce: Callable[[Mapping[str, Any]], Any]):
        super().__init__()
        self._on_produce = on_produce
        self._messages: List[Dict[str, Any]] = []

    @property
    def messages(self) -> List[Dict[str, Any]]:
        return list(self._messages)

    def produced_messages(self) -> List[Dict[str, Any]]:
        return self.messages

    def messages_for(self, topic: str) -> List[Dict[str, Any]]:
        return [m for m in self._messages if m.get("topic") == topic]

    def produce(self, message: Mapping[str, Any]) -> DeliveryReport:
        self._messages.append(dict(message))
        metrics.messages_produced.labels(topic=message["topic"]).inc()
        logger.debug("Message captured", topic=message["topic"], count=len(self._messages))

        self._on_produce(message)
        return super().produce(message)

    def reset(self):
        self._messages.clear()
