"""
Routing resolver.

Maps a requested topic name, optionally narrowed to one consumer group, to
exactly one registered topic.
"""

from typing import Any, List, Optional

import structlog

from . import metrics
from .errors import ConsumerGroupNotFound, TopicInManyConsumerGroups, TopicNotFound
from .ports.routing import Registry, SubscriptionGroup, Topic, TopicNotFoundError

logger = structlog.get_logger(__name__)


class RoutingResolver:
    """Pure lookup over a routing registry."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def resolve(self, topic_name: Any, consumer_group_name: Optional[Any] = None) -> Topic:
        """
        Find the single topic matching the request.

        Args:
            topic_name: Name of the topic to resolve
            consumer_group_name: Optional consumer group to search in; all
                consumer groups are searched when omitted or empty

        Returns:
            The matching topic

        Raises:
            ConsumerGroupNotFound: If the requested consumer group is not registered
            TopicNotFound: If no subscription group owns the topic
            TopicInManyConsumerGroups: If more than one subscription group owns it
        """
        topic_name = str(topic_name)
        try:
            candidates = self.candidates(topic_name, consumer_group_name)
            if len(candidates) > 1:
                raise TopicInManyConsumerGroups(topic_name)
            if not candidates:
                raise TopicNotFound(topic_name)
        except (ConsumerGroupNotFound, TopicNotFound, TopicInManyConsumerGroups) as e:
            metrics.resolution_errors.labels(error=e.error_code).inc()
            logger.debug("Topic resolution failed", topic=topic_name,
                         consumer_group=consumer_group_name, error=e.error_code)
            raise

        topic = candidates[0]
        logger.debug("Topic resolved", topic=topic.name,
                     consumer_group=topic.consumer_group, subscription_group=topic.subscription_group)
        return topic

    def candidates(self, topic_name: Any, consumer_group_name: Optional[Any] = None) -> List[Topic]:
        """All topics named topic_name within the selected subscription groups."""
        found = []
        for subscription_group in self.subscription_groups(consumer_group_name):
            topic = self._find_in(subscription_group, str(topic_name))
            if topic is not None:
                found.append(topic)
        return found

    def subscription_groups(self, consumer_group_name: Optional[Any] = None) -> List[SubscriptionGroup]:
        """Subscription groups of the named consumer group, or of all of them."""
        groups = self.registry.consumer_groups()
        name = "" if consumer_group_name is None else str(consumer_group_name)

        if not name:
            return [sg for sgs in groups.values() for sg in sgs]

        for consumer_group, subscription_groups in groups.items():
            if consumer_group.name == name:
                return list(subscription_groups)

        raise ConsumerGroupNotFound(name)

    @staticmethod
    def _find_in(subscription_group: SubscriptionGroup, topic_name: str) -> Optional[Topic]:
        # A subscription group without the topic is a normal miss, not an error
        try:
            return subscription_group.topics.find(topic_name)
        except TopicNotFoundError:
            return None
