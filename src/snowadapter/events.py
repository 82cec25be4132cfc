"""Event manager for adapter status events and Server-Sent Events (SSE)."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from collections.abc import Iterable


class EventType(str, Enum):
    """Types of events that can be emitted."""

    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    HEARTBEAT = "HEARTBEAT"


@dataclass
class Event:
    """An event to be sent via SSE."""

    event_type: EventType
    data: dict[str, Any]
    adapter_id: str | None = None

    def to_sse(self) -> str:
        """Convert to SSE format."""
        return f"event: {self.event_type.value}\ndata: {json.dumps(self.data)}\n\n"


@dataclass
class Subscriber:
    """A subscriber to the event stream."""

    id: str
    queue: asyncio.Queue[Event]
    adapter_id: str | None = None  # None means subscribe to all adapters
    statuses: frozenset[EventType] | None = None  # None means ONLINE and OFFLINE
    loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def create(
        cls,
        adapter_id: str | None = None,
        statuses: Iterable[EventType | str] | None = None,
    ) -> Subscriber:
        """Create a new subscriber bound to the running loop, if any."""
        try:
            loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        return cls(
            id=str(uuid4()),
            queue=asyncio.Queue(),
            adapter_id=adapter_id,
            statuses=frozenset(EventType(s) for s in statuses) if statuses else None,
            loop=loop,
        )

    def wants(self, event: Event) -> bool:
        """Whether this subscriber should receive the event.

        Heartbeats go to everyone. Status events are filtered by adapter ID
        and by the requested statuses.
        """
        if event.event_type is EventType.HEARTBEAT:
            return True
        if self.statuses is not None and event.event_type not in self.statuses:
            return False
        return (
            self.adapter_id is None
            or event.adapter_id is None
            or self.adapter_id == event.adapter_id
        )

    def deliver(self, event: Event) -> None:
        """Put an event on the queue from any thread."""
        if self.loop is None or self.loop.is_closed():
            self.queue.put_nowait(event)
            return
        try:
            current: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            current = None
        if current is self.loop:
            self.queue.put_nowait(event)
        else:
            self.loop.call_soon_threadsafe(self.queue.put_nowait, event)


@dataclass
class EventManager:
    """Manager for status events."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)
    _heartbeat_interval: int = 30  # seconds

    def subscribe(
        self,
        adapter_id: str | None = None,
        statuses: Iterable[EventType | str] | None = None,
    ) -> Subscriber:
        """Subscribe a client to events.

        Args:
            adapter_id: Optional adapter ID to filter events. None means all adapters.
            statuses: Optional status events to receive. None means ONLINE and OFFLINE.

        Returns:
            Subscriber instance for receiving events.
        """
        subscriber = Subscriber.create(adapter_id, statuses)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Unsubscribe a client from events.

        Args:
            subscriber_id: ID of the subscriber to remove.
        """
        self._subscribers.pop(subscriber_id, None)

    async def emit(self, event: Event) -> None:
        """Emit an event to all matching subscribers.

        Args:
            event: Event to emit.
        """
        for subscriber in list(self._subscribers.values()):
            if subscriber.wants(event):
                await subscriber.queue.put(event)

    def emit_sync(self, event: Event) -> None:
        """Emit an event synchronously, from any thread.

        Args:
            event: Event to emit.
        """
        for subscriber in list(self._subscribers.values()):
            if subscriber.wants(event):
                subscriber.deliver(event)

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    @staticmethod
    def create_status_event(status: str, adapter_id: str) -> Event:
        """Create an ONLINE or OFFLINE event for an adapter."""
        event_type = EventType(status)
        if event_type is EventType.HEARTBEAT:
            raise ValueError(f"{status!r} is not an adapter status")
        return Event(event_type=event_type, adapter_id=adapter_id, data={"id": adapter_id})

    def emit_status(self, status: str, adapter_id: str) -> None:
        """Emit an ONLINE or OFFLINE event for an adapter."""
        self.emit_sync(self.create_status_event(status, adapter_id))

    def create_heartbeat_event(self) -> Event:
        """Create a heartbeat event."""
        return Event(
            event_type=EventType.HEARTBEAT,
            adapter_id=None,  # Heartbeat goes to all subscribers
            data={"timestamp": datetime.now(UTC).isoformat()},
        )
