"""
Unit tests for the in-memory event bus.
"""
import uuid
from dataclasses import dataclass

import pytest

from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import InMemoryEventBus


@dataclass(frozen=True, kw_only=True)
class SampleHappened(DomainEvent):
    subject_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.subject_id)


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("side effect failed")


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_reaches_subscribers(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(SampleHappened, handler)

        event = SampleHappened(subject_id=uuid.uuid4())
        await bus.publish(event)

        assert handler.events == [event]

    async def test_subscribe_ignores_second_handler_of_same_type(self):
        bus = InMemoryEventBus()
        bus.subscribe(SampleHappened, RecordingHandler())
        bus.subscribe(SampleHappened, RecordingHandler())

        assert len(bus.handlers_for(SampleHappened)) == 1

    async def test_failing_handler_does_not_reach_publisher(self):
        bus = InMemoryEventBus()
        recorder = RecordingHandler()
        bus.subscribe(SampleHappened, FailingHandler())
        bus.subscribe(SampleHappened, recorder)

        await bus.publish(SampleHappened(subject_id=uuid.uuid4()))

        assert len(recorder.events) == 1

    async def test_publish_without_subscribers(self):
        await InMemoryEventBus().publish(SampleHappened(subject_id=uuid.uuid4()))

    async def test_clear_removes_subscriptions(self):
        bus = InMemoryEventBus()
        bus.subscribe(SampleHappened, RecordingHandler())
        bus.clear()

        assert bus.handlers_for(SampleHappened) == []


class TestDomainEvent:
    """Tests for DomainEvent serialization."""

    def test_idempotency_key_names_type_and_aggregate(self):
        subject_id = uuid.uuid4()
        event = SampleHappened(subject_id=subject_id)

        assert event.idempotency_key == f"SampleHappened:{subject_id}"

    def test_to_dict_uses_primitives(self):
        subject_id = uuid.uuid4()
        data = SampleHappened(subject_id=subject_id).to_dict()

        assert data["event_type"] == "SampleHappened"
        assert data["aggregate_id"] == str(subject_id)
        assert data["data"] == {"subject_id": str(subject_id)}
