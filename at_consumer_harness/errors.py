"""
Errors raised by the harness to the test that called it.

Every error carries a stable error_code and a details mapping so test
reports and logs can tell them apart without parsing messages.
"""

from typing import Any, Dict, Optional


class HarnessError(Exception):
    """Base exception for harness errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class TopicNotFound(HarnessError):
    """Raised when no registered subscription group owns the requested topic."""

    def __init__(self, topic_name: str):
        super().__init__(
            f"Topic not found: {topic_name}",
            error_code="topic_not_found",
            details={"topic": topic_name},
        )
        self.topic_name = topic_name


class TopicInManyConsumerGroups(HarnessError):
    """Raised when a topic matches in several groups and no consumer group was given."""

    def __init__(self, topic_name: str):
        super().__init__(
            f"Topic {topic_name} is used in multiple consumer groups, "
            "pass the consumer group name to select one",
            error_code="topic_in_many_consumer_groups",
            details={"topic": topic_name},
        )
        self.topic_name = topic_name


class ConsumerGroupNotFound(HarnessError):
    """Raised when an explicitly requested consumer group is not registered."""

    def __init__(self, consumer_group_name: str):
        super().__init__(
            f"Consumer group not found: {consumer_group_name}",
            error_code="consumer_group_not_found",
            details={"consumer_group": consumer_group_name},
        )
        self.consumer_group_name = consumer_group_name


class HarnessNotSetUp(HarnessError):
    """Raised when the harness is used before setup() ran."""

    def __init__(self):
        super().__init__("Harness is not set up, call setup() first", error_code="harness_not_set_up")


class NoConsumerBound(HarnessError):
    """Raised when an operation needs a bound consumer and there is none."""

    def __init__(self):
        super().__init__(
            "No consumer is bound, call consumer_for() or bind() first",
            error_code="no_consumer_bound",
        )
