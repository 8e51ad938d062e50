"""
Tests for the test-author surface: consumer_for, produce and produced_messages.
"""

import pytest
import structlog

from at_consumer_harness import (
    Harness,
    HarnessNotSetUp,
    NoConsumerBound,
    ProducerInterceptor,
    TopicInManyConsumerGroups,
    TopicNotFound,
    ConsumerGroupNotFound,
    HarnessConfig,
)
from at_consumer_harness.ports import DummyClient, MessageInvalidError, Producer
from tests.conftest import build_registry
from tests.fixtures import RecordingConsumer


class TestHarnessSetup:
    """Binding and restoring the producer client"""

    def test_setup_binds_interceptor(self, harness, harness_producer):
        assert isinstance(harness_producer.client, ProducerInterceptor)
        assert harness_producer.client is harness.producer_client

    def test_teardown_restores_original_client(self):
        original = DummyClient()
        producer = Producer(original)
        harness = Harness(build_registry(), producer)

        harness.setup()
        assert producer.client is not original
        harness.teardown()

        assert producer.client is original
        assert harness.consumer is None

    def test_context_manager(self):
        producer = Producer()
        original = producer.client

        with Harness(build_registry(), producer) as harness:
            harness.consumer_for("orders")
            harness.produce("{}")
            assert len(harness.produced_messages()) == 1

        assert producer.client is original

    def test_setup_twice_starts_fresh(self):
        producer = Producer()
        original = producer.client
        harness = Harness(build_registry(), producer)

        harness.setup()
        harness.consumer_for("orders")
        harness.produce("{}")
        harness.setup()

        assert harness.produced_messages() == []
        assert harness.consumer is None
        harness.teardown()
        assert producer.client is original

    def test_use_before_setup_raises(self):
        harness = Harness(build_registry(), Producer())

        with pytest.raises(HarnessNotSetUp):
            harness.consumer_for("orders")
        with pytest.raises(HarnessNotSetUp):
            harness.produce("{}")
        with pytest.raises(HarnessNotSetUp):
            harness.produced_messages()


class TestConsumerFor:
    """Resolving and building consumers through the harness"""

    def test_returns_bound_consumer(self, harness):
        consumer = harness.consumer_for("orders")

        assert isinstance(consumer, RecordingConsumer)
        assert consumer.topic.name == "orders"
        assert consumer.coordinator.seek_offset == 0
        assert harness.consumer is consumer

    def test_consumer_uses_harness_client(self, harness):
        consumer = harness.consumer_for("orders")

        assert consumer.client is harness.consumer_client

    def test_ambiguous_topic(self, harness):
        with pytest.raises(TopicInManyConsumerGroups):
            harness.consumer_for("events")

        assert harness.consumer_for("events", "analytics").topic.consumer_group == "analytics"

    def test_unknown_topic(self, harness):
        with pytest.raises(TopicNotFound):
            harness.consumer_for("nope")

    def test_unknown_consumer_group(self, harness):
        with pytest.raises(ConsumerGroupNotFound):
            harness.consumer_for("orders", "missing-group")


class TestProduce:
    """Producing through the interceptor and self-delivery"""

    def test_produce_requires_bound_consumer(self, harness):
        with pytest.raises(NoConsumerBound):
            harness.produce("{}")

    def test_produce_with_non_consumer_bound(self, harness):
        harness.bind(object())

        with pytest.raises(NoConsumerBound):
            harness.produce("{}")

    def test_partition_override_is_recorded(self, harness, orders_consumer):
        harness.produce('{"hello": "world"}', {"partition": 6})

        record = harness.produced_messages()[0]
        assert record == {"topic": "orders", "payload": '{"hello": "world"}', "partition": 6}
        assert orders_consumer.messages[0].partition == 6
        assert orders_consumer.messages[0].offset == 0

    def test_produce_delivers_to_bound_consumer(self, harness, orders_consumer):
        harness.produce('"a"')
        harness.produce('"b"')

        assert [m.offset for m in orders_consumer.messages] == [0, 1]
        assert orders_consumer.messages.payloads() == ["a", "b"]

    def test_other_topic_not_delivered(self, harness, orders_consumer, harness_producer):
        harness_producer.produce_sync({"topic": "payments", "payload": "{}"})

        assert len(orders_consumer.messages) == 0
        assert harness.produced_messages_for("payments") == [{"topic": "payments", "payload": "{}"}]

    def test_produce_without_consumer_only_records(self, harness, harness_producer):
        harness_producer.produce_sync({"topic": "orders", "payload": "{}"})

        assert len(harness.produced_messages()) == 1
        assert harness.simulator.messages == []

    def test_invalid_message_not_recorded(self, harness, orders_consumer):
        with pytest.raises(MessageInvalidError):
            harness.produce("{}", {"partition": -1})

        assert harness.produced_messages() == []
        assert len(orders_consumer.messages) == 0

    def test_reset_clears_records_and_offsets(self, harness, orders_consumer):
        harness.produce("{}")
        harness.produce("{}")

        harness.reset()

        assert harness.produced_messages() == []
        harness.produce("{}")
        assert orders_consumer.messages.last().offset == 0
        assert orders_consumer.messages.metadata.count == 1

    def test_rebinding_starts_new_consumer_empty(self, harness):
        first = harness.consumer_for("orders")
        harness.produce('"a"')
        harness.produce('"b"')

        second = harness.consumer_for("echo")
        assert len(second.messages) == 0

        harness.produce('"c"')

        assert [m.offset for m in second.messages] == [0]
        assert [m.topic for m in second.messages] == ["echo"]
        assert second.messages.metadata.count == 1
        assert second.messages.metadata.topic == "echo"
        assert first.messages.payloads() == ["a", "b"]

    def test_bind_new_target_clears_delivered_messages(self, harness):
        consumer = harness.consumer_for("orders")
        harness.produce("{}")

        harness.bind(object())
        harness.bind(consumer)

        assert harness.simulator.messages == []
        harness.produce("{}")
        assert consumer.messages.last().offset == 0

    def test_bind_same_target_keeps_delivered_messages(self, harness):
        consumer = harness.consumer_for("orders")
        harness.produce("{}")

        harness.bind(consumer)
        harness.produce("{}")

        assert [m.offset for m in consumer.messages] == [0, 1]


class TestHarnessConfig:
    """Configuration applied by setup()"""

    def test_setup_configures_logging_when_enabled(self):
        config = HarnessConfig(log_level="WARNING", log_json=False, configure_logging=True)
        harness = Harness(build_registry(), Producer(), config=config)

        structlog.reset_defaults()
        try:
            harness.setup()
            assert structlog.is_configured()
        finally:
            harness.teardown()
            structlog.reset_defaults()

    def test_setup_leaves_logging_alone_by_default(self):
        structlog.reset_defaults()

        with Harness(build_registry(), Producer(), config=HarnessConfig()):
            assert not structlog.is_configured()

    def test_empty_batch_uses_harness_clock(self, harness, fake_clock):
        consumer = harness.consumer_for("orders")

        assert consumer.messages.metadata.processed_at == fake_clock.now_utc()
