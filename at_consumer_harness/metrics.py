"""Prometheus counters for harness activity."""

from prometheus_client import Counter

consumers_built = Counter('harness_consumers_built_total', 'Consumers built for tests', ['topic'])
messages_delivered = Counter('harness_messages_delivered_total', 'Messages appended to a consumer batch', ['topic'])
deliveries_skipped = Counter('harness_deliveries_skipped_total', 'Delivery attempts ignored by a guard', ['reason'])
messages_produced = Counter('harness_messages_produced_total', 'Messages captured by the producer interceptor', ['topic'])
resolution_errors = Counter('harness_resolution_errors_total', 'Topic resolution failures', ['error'])
