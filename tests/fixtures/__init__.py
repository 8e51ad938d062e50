"""
Test fixtures for the consumer harness.

- FakeClock: Controllable time for deterministic timestamps
- Consumer classes registered as routing targets
"""

from .fake_clock import FakeClock, create_test_clock
from .consumers import (
    RecordingConsumer,
    EchoConsumer,
    SelfFeedingConsumer,
    ManualConsumer,
    BrokenConsumer,
)

__all__ = [
    "FakeClock",
    "create_test_clock",
    "RecordingConsumer",
    "EchoConsumer",
    "SelfFeedingConsumer",
    "ManualConsumer",
    "BrokenConsumer",
]
