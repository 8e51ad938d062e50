from __future__ import annotations
from .routing import Topics

class Coordinator:
    """Per (topic, partition) processing state."""

    def __init__(self, topic, partition: int) -> None:
        self.topic = topic
        self.partition = partition
        self.seek_offset: int | None = None
        self.marked_offset: int | None = None

    def mark(self, offset: int) -> None:
        self.marked_offset = offset
        self.seek_offset = offset + 1

    def __repr__(self) -> str:
        return f"Coordinator(topic={self.topic.name!r}, partition={self.partition}, seek_offset={self.seek_offset})"

class CoordinatorsBuffer:
    def __init__(self, topics: Topics) -> None:
        self._topics = topics
        self._coordinators: dict[tuple[str, int], Coordinator] = {}
    def find_or_create(self, topic_name: str, partition: int) -> Coordinator:
        key = (topic_name, partition)
        if key not in self._coordinators:
            self._coordinators[key] = Coordinator(self._topics.find(topic_name), partition)
        return self._coordinators[key]