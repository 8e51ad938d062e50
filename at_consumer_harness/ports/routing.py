"""Routing registry: consumer groups, subscription groups and their topics."""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Iterator, Mapping, Protocol, Sequence

from .messages import json_deserializer


class TopicNotFoundError(LookupError):
    """Raised by a subscription group lookup when it does not own the topic."""

    def __init__(self, topic_name: str):
        super().__init__(f"Topic not found: {topic_name}")
        self.topic_name = topic_name


class DuplicateTopicError(ValueError):
    def __init__(self, topic_name: str):
        super().__init__(f"Topic defined more than once in a subscription group: {topic_name}")
        self.topic_name = topic_name


@dataclass(frozen=True)
class Topic:
    name: str
    consumer: type
    deserializer: Callable[[Any], Any] = json_deserializer
    manual_offset_management: bool = False
    consumer_group: str = ""
    subscription_group: str = ""


class Topics:
    """Ordered set of topics keyed by name."""

    def __init__(self, topics: Iterable[Topic] = ()):
        self._topics: dict[str, Topic] = {}
        for topic in topics:
            if topic.name in self._topics:
                raise DuplicateTopicError(topic.name)
            self._topics[topic.name] = topic

    def find(self, name: str) -> Topic:
        try:
            return self._topics[name]
        except KeyError:
            raise TopicNotFoundError(name) from None

    def names(self) -> list[str]:
        return list(self._topics)

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._topics.values())

    def __len__(self) -> int:
        return len(self._topics)

    def __contains__(self, name: object) -> bool:
        return name in self._topics

    def __repr__(self) -> str:
        return f"Topics({self.names()!r})"


@dataclass(frozen=True)
class ConsumerGroup:
    name: str


@dataclass(frozen=True)
class SubscriptionGroup:
    id: str
    consumer_group: ConsumerGroup
    topics: Topics = field(default_factory=Topics, compare=False)


class Registry(Protocol):
    def consumer_groups(self) -> Mapping[ConsumerGroup, Sequence[SubscriptionGroup]]: ...


class InMemoryRegistry(Registry):
    def __init__(self) -> None:
        self._groups: dict[ConsumerGroup, list[SubscriptionGroup]] = {}

    def register(self, consumer_group: str, topics: Iterable[Topic],
                 subscription_group: str | None = None) -> SubscriptionGroup:
        """
        Add a subscription group with the given topics to a consumer group.

        Args:
            consumer_group: Consumer group name, created on first use
            topics: Topics owned by the new subscription group
            subscription_group: Subscription group id (defaults to "<group>-<n>")

        Returns:
            The registered subscription group
        """
        group = ConsumerGroup(consumer_group)
        groups = self._groups.setdefault(group, [])
        sg_id = subscription_group or f"{consumer_group}-{len(groups)}"
        bound = Topics(replace(t, consumer_group=consumer_group, subscription_group=sg_id) for t in topics)
        sg = SubscriptionGroup(id=sg_id, consumer_group=group, topics=bound)
        groups.append(sg)
        return sg

    def consumer_groups(self) -> Mapping[ConsumerGroup, Sequence[SubscriptionGroup]]:
        return {cg: tuple(sgs) for cg, sgs in self._groups.items()}
