"""Message value types delivered to consumers."""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterator, Mapping, Sequence

_UNSET = object()


def json_deserializer(message: "Message") -> Any:
    """Decode a JSON text payload. Already-decoded payloads are returned as-is."""
    raw = message.raw_payload
    if isinstance(raw, (str, bytes, bytearray)):
        return json.loads(raw)
    return raw


@dataclass(frozen=True)
class MessageMetadata:
    deserializer: Callable[["Message"], Any]
    timestamp: datetime
    headers: Mapping[str, Any] = field(default_factory=dict)
    key: Any = None
    offset: int = 0
    partition: int = 0
    received_at: datetime | None = None
    topic: str = ""

    FIELDS = ("deserializer", "timestamp", "headers", "key",
              "offset", "partition", "received_at", "topic")


class Message:
    """A raw payload plus its metadata. The payload is deserialized on first access."""

    __slots__ = ("raw_payload", "metadata", "_payload")

    def __init__(self, raw_payload: Any, metadata: MessageMetadata):
        self.raw_payload = raw_payload
        self.metadata = metadata
        self._payload = _UNSET

    @property
    def payload(self) -> Any:
        if self._payload is _UNSET:
            self._payload = self.metadata.deserializer(self)
        return self._payload

    @property
    def deserialized(self) -> bool:
        return self._payload is not _UNSET

    @property
    def offset(self) -> int:
        return self.metadata.offset

    @property
    def partition(self) -> int:
        return self.metadata.partition

    @property
    def topic(self) -> str:
        return self.metadata.topic

    @property
    def key(self) -> Any:
        return self.metadata.key

    @property
    def headers(self) -> Mapping[str, Any]:
        return self.metadata.headers

    @property
    def timestamp(self) -> datetime:
        return self.metadata.timestamp

    def __repr__(self) -> str:
        return f"Message(topic={self.topic!r}, partition={self.partition}, offset={self.offset})"


@dataclass(frozen=True)
class BatchMetadata:
    size: int
    first_offset: int | None
    last_offset: int | None
    deserializer: Callable[[Message], Any] | None
    partition: int
    topic: str
    consumer_group: str
    created_at: datetime | None
    processed_at: datetime

    @property
    def count(self) -> int:
        return self.size


def build_batch_metadata(messages: Sequence[Message], topic, partition: int,
                         processed_at: datetime) -> BatchMetadata:
    """Summarise a full batch of messages for the given topic and partition."""
    first = messages[0] if messages else None
    last = messages[-1] if messages else None
    return BatchMetadata(
        size=len(messages),
        first_offset=first.offset if first else None,
        last_offset=last.offset if last else None,
        deserializer=topic.deserializer,
        partition=partition,
        topic=topic.name,
        consumer_group=topic.consumer_group,
        created_at=last.timestamp if last else None,
        processed_at=processed_at,
    )


class MessageBatch:
    """Immutable, ordered batch of messages with its batch metadata."""

    def __init__(self, messages: Sequence[Message], metadata: BatchMetadata):
        self._messages = tuple(messages)
        self.metadata = metadata

    def first(self) -> Message | None:
        return self._messages[0] if self._messages else None

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def payloads(self) -> list[Any]:
        return [m.payload for m in self._messages]

    def raw_payloads(self) -> list[Any]:
        return [m.raw_payload for m in self._messages]

    def is_empty(self) -> bool:
        return not self._messages

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageBatch(topic={self.metadata.topic!r}, size={len(self)})"
