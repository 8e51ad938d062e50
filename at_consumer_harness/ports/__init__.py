"""Host-side interfaces the harness drives, with in-memory reference adapters."""
from .clock import Clock, SystemClock
from .messages import (Message, MessageMetadata, MessageBatch, BatchMetadata,
                       build_batch_metadata, json_deserializer)
from .routing import (Topic, Topics, ConsumerGroup, SubscriptionGroup, Registry,
                      InMemoryRegistry, TopicNotFoundError, DuplicateTopicError)
from .coordination import Coordinator, CoordinatorsBuffer
from .consumer import (BaseConsumer, ConsumerOrigin, Strategy, StrategySelector,
                       AutoOffsetStrategy, ManualOffsetStrategy)
from .producer import Producer, DummyClient, DeliveryReport, MessageInvalidError, OutboundMessage
__all__ = ["Clock","SystemClock",
           "Message","MessageMetadata","MessageBatch","BatchMetadata","build_batch_metadata","json_deserializer",
           "Topic","Topics","ConsumerGroup","SubscriptionGroup","Registry","InMemoryRegistry",
           "TopicNotFoundError","DuplicateTopicError",
           "Coordinator","CoordinatorsBuffer",
           "BaseConsumer","ConsumerOrigin","Strategy","StrategySelector",
           "AutoOffsetStrategy","ManualOffsetStrategy",
           "Producer","DummyClient","DeliveryReport","MessageInvalidError","OutboundMessage"]
