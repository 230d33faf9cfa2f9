"""
Event bus for spinwheel.

Lets renderers, sound cues and the CLI observe the wheel without the wheel
knowing about any of them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
from collections import defaultdict
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Wheel lifecycle
    SPIN_STARTED = auto()
    SPIN_REJECTED = auto()
    SPIN_SETTLED = auto()
    PHASE_CHANGED = auto()

    # Input
    SPIN_REQUESTED = auto()

    # System
    TICK = auto()  # Frame tick


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Central event bus for component communication.

    Wheel lifecycle events are emitted immediately to synchronous handlers.
    Input events are queued and dispatched once per frame by
    ``process_queue``, which also awaits async handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function (sync or async)

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """
        Emit an event immediately (synchronous handlers only).

        Async handlers only see events that go through queue_event.
        """
        for handler in list(self._handlers.get(event.type, [])):
            if inspect.iscoroutinefunction(handler):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next process_queue call."""
        self._queue.put_nowait(event)

    @property
    def queued(self) -> int:
        """Number of events waiting for process_queue."""
        return self._queue.qsize()

    async def process_queue(self) -> int:
        """Dispatch all queued events. Returns how many were processed."""
        processed = 0
        while not self._queue.empty():
            event = await self._queue.get()
            await self._dispatch_async(event)
            self._queue.task_done()
            processed += 1
        return processed

    async def _dispatch_async(self, event: Event) -> None:
        """Dispatch event to all handlers (sync and async)."""
        tasks = []
        for handler in list(self._handlers.get(event.type, [])):
            if inspect.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Error in sync handler: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler: {result}")


def spin_request_event(source: str = "button") -> Event:
    """Create a spin request event."""
    return Event(EventType.SPIN_REQUESTED, source=source)


def tick_event(delta_ms: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta_ms": delta_ms, "frame": frame})
