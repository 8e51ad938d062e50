"""Synchronous producer API and its default transport client."""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = structlog.get_logger(__name__)


class MessageInvalidError(ValueError):
    """Raised when an outbound message fails validation."""

    def __init__(self, message: Mapping[str, Any], errors: list):
        super().__init__(f"Invalid message for topic {message.get('topic')!r}: {errors}")
        self.errors = errors


class OutboundMessage(BaseModel):
    """Shape every message must have before it is handed to a client."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    topic: str = Field(..., min_length=1)
    payload: Any = None
    key: Optional[Union[str, bytes]] = None
    partition: Optional[int] = Field(None, ge=0)
    partition_key: Optional[str] = None
    headers: Dict[str, Union[str, bytes]] = Field(default_factory=dict)
    timestamp: Optional[Union[datetime, int]] = None


@dataclass(frozen=True)
class DeliveryReport:
    topic: str
    partition: int
    offset: int

    def wait(self) -> "DeliveryReport":
        return self


class Client(Protocol):
    def produce(self, message: Mapping[str, Any]) -> DeliveryReport: ...


class DummyClient(Client):
    """Client that acknowledges every message without transmitting anything."""

    def __init__(self) -> None:
        self._offsets: dict[tuple[str, int], int] = defaultdict(int)

    def produce(self, message: Mapping[str, Any]) -> DeliveryReport:
        key = (message["topic"], message.get("partition") or 0)
        offset = self._offsets[key]
        self._offsets[key] += 1
        return DeliveryReport(topic=key[0], partition=key[1], offset=offset)


class Producer:
    def __init__(self, client: Client | None = None) -> None:
        self.client: Client = client or DummyClient()

    def produce_sync(self, message: Mapping[str, Any]) -> DeliveryReport:
        """
        Validate and dispatch a single message, waiting for its delivery report.

        Args:
            message: Mapping with at least "topic"; "payload" and metadata such as
                "key", "partition" or "headers" are optional

        Returns:
            Delivery report from the client

        Raises:
            MessageInvalidError: If the message does not pass validation
        """
        try:
            OutboundMessage.model_validate(dict(message))
        except ValidationError as e:
            logger.warning("Rejected outbound message", topic=message.get("topic"), errors=e.errors())
            raise MessageInvalidError(message, e.errors()) from e

        return self.client.produce(dict(message)).wait()

    def produce_many_sync(self, messages: Iterable[Mapping[str, Any]]) -> List[DeliveryReport]:
        return [self.produce_sync(m) for m in messages]
