"""Event queue implementation for super-dense discrete event simulation."""

import bisect
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from .model import SimulationModel
from .time import SuperDenseTime


class EventKind(Enum):
    """Kinds of events a model can receive."""
    INTERNAL = "internal"
    EXTERNAL = "external"
    # Internal and external event of one model at the same instant
    CONFLUENT = "confluent"


@dataclass(frozen=True)
class Event:
    """Event in the discrete event simulation.

    Attributes:
        kind: Which transition the event triggers
        time: Super-dense time stamp
        model: Model the event is addressed to (not owned)
        payload: Input payload; always None for internal events
    """
    kind: EventKind
    time: SuperDenseTime
    model: SimulationModel
    payload: Any = None

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time.r < 0:
            raise ValueError("Event time cannot be negative")
        if self.kind is EventKind.INTERNAL and self.payload is not None:
            raise ValueError("Internal events cannot carry a payload")

    def __repr__(self) -> str:
        return (f"Event({self.kind.value}, t={self.time}, model={self.model.name!r}, "
                f"payload={self.payload!r})")


def _real_time(event: Event) -> float:
    return event.time.r


class EventQueue:
    """Sorted queue of events keyed by super-dense time.

    Events that share a real time form a bucket whose causal indices are
    consecutive in insertion order. A bucket starts at 0, or right after the
    last popped index when it continues an instant already being processed,
    so popped events are ordered across the whole run. Scheduling merges an
    internal and an external event of the same model at the same real time
    into one confluent event, and never keeps two internal reactions of one
    model at one instant.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._queue: List[Event] = []
        self._last_popped: Optional[SuperDenseTime] = None
        self.merge_count = 0

    def _bucket(self, r: float) -> Tuple[int, int]:
        """Index range [start, end) of events at real time r."""
        start = bisect.bisect_left(self._queue, r, key=_real_time)
        end = bisect.bisect_right(self._queue, r, lo=start, key=_real_time)
        return start, end

    def _next_slot(self, r: float, start: int, end: int) -> SuperDenseTime:
        if end > start:
            return self._queue[end - 1].time.next()
        if self._last_popped is not None and self._last_popped.r == r:
            return self._last_popped.next()
        return SuperDenseTime(r, 0)

    @property
    def last_popped(self) -> Optional[SuperDenseTime]:
        """Time of the last event handed out by pop_next_batch."""
        return self._last_popped

    def _check_time(self, r: float) -> None:
        if not math.isfinite(r):
            raise ValueError(f"Cannot schedule an event at non-finite time {r}")
        if r < 0:
            raise ValueError("Event time cannot be negative")
        if self._last_popped is not None and r < self._last_popped.r:
            raise ValueError(
                f"Cannot schedule an event at {r}, before the last processed time "
                f"{self._last_popped.r}"
            )

    def schedule_internal(self, model: SimulationModel, r: float) -> Optional[Event]:
        """Schedule an internal event for a model.

        Args:
            model: Model whose internal transition is due
            r: Real time of the internal event

        Returns:
            The inserted or merged event, or None if the model already had
            an internal reaction queued at r
        """
        self._check_time(r)
        start, end = self._bucket(r)

        pending_external = None
        for i in range(start, end):
            event = self._queue[i]
            if event.model is not model:
                continue
            if event.kind is not EventKind.EXTERNAL:
                return None
            if pending_external is None:
                pending_external = i

        if pending_external is not None:
            existing = self._queue[pending_external]
            merged = Event(EventKind.CONFLUENT, existing.time, model, existing.payload)
            self._queue[pending_external] = merged
            self.merge_count += 1
            return merged

        event = Event(EventKind.INTERNAL, self._next_slot(r, start, end), model)
        self._queue.insert(end, event)
        return event

    def schedule_external(self, payload: Any, r: float, model: SimulationModel) -> Event:
        """Schedule delivery of an input to a model.

        Args:
            payload: Input payload
            r: Real time of arrival
            model: Receiving model

        Returns:
            The inserted or merged event
        """
        self._check_time(r)
        start, end = self._bucket(r)

        for i in range(start, end):
            event = self._queue[i]
            if event.model is model and event.kind is EventKind.INTERNAL:
                merged = Event(EventKind.CONFLUENT, event.time, model, payload)
                self._queue[i] = merged
                self.merge_count += 1
                return merged

        event = Event(EventKind.EXTERNAL, self._next_slot(r, start, end), model, payload)
        self._queue.insert(end, event)
        return event

    def withdraw_internal(self, model: SimulationModel, keep_time: float) -> int:
        """Drop a model's internal events scheduled at any time but keep_time.

        Stale internal events are removed and stale confluent events fall back
        to plain external events, so queued inputs are still delivered.

        Args:
            model: Model whose schedule changed
            keep_time: Real time of the model's current schedule (NEVER drops all)

        Returns:
            Number of events withdrawn or demoted
        """
        withdrawn = 0
        i = 0
        while i < len(self._queue):
            event = self._queue[i]
            if (event.model is not model or event.kind is EventKind.EXTERNAL
                    or event.time.r == keep_time):
                i += 1
                continue

            withdrawn += 1
            if event.kind is EventKind.CONFLUENT:
                self._queue[i] = Event(EventKind.EXTERNAL, event.time, model, event.payload)
                i += 1
                continue

            del self._queue[i]
            # Close the gap in the causal indices of the bucket
            j = i
            while j < len(self._queue) and self._queue[j].time.r == event.time.r:
                later = self._queue[j]
                self._queue[j] = Event(
                    later.kind,
                    SuperDenseTime(later.time.r, later.time.c - 1),
                    later.model,
                    later.payload,
                )
                j += 1
        return withdrawn

    def pop_next_batch(self) -> List[Event]:
        """Remove and return every event at the earliest real time.

        Returns:
            Events of the earliest bucket, in causal order

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot pop from empty event queue")
        _, end = self._bucket(self._queue[0].time.r)
        batch = self._queue[:end]
        del self._queue[:end]
        self._last_popped = batch[-1].time
        return batch

    def peek_next_time(self) -> float:
        """Return the earliest real time without removing anything.

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot peek into empty event queue")
        return self._queue[0].time.r

    def is_empty(self) -> bool:
        """Check if queue is empty.

        Returns:
            True if queue is empty
        """
        return len(self._queue) == 0

    def size(self) -> int:
        """Get number of events in queue.

        Returns:
            Number of events
        """
        return len(self._queue)

    def clear(self) -> None:
        """Remove all events from queue."""
        self._queue.clear()
        self._last_popped = None
        self.merge_count = 0

    def __len__(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    def __iter__(self) -> Iterator[Event]:
        """Iterate over queued events in time order."""
        return iter(list(self._queue))

    def __repr__(self) -> str:
        """String representation of event queue."""
        head = self._queue[0] if self._queue else None
        return f"EventQueue(size={len(self._queue)}, next={head})"
