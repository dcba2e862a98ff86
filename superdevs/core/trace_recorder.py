"""Trace and run statistics collection."""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from dataclasses_json import dataclass_json

from .event_queue import Event, EventKind


@dataclass_json
@dataclass
class TraceEntry:
    """One observable output of the simulation.

    Attributes:
        time: Real time at which the output was produced
        payload: Output payload
        source: Name of the model that produced it
    """
    time: float
    payload: Any
    source: Optional[str] = None

    def as_pair(self) -> Tuple[float, Any]:
        return self.time, self.payload


class TraceRecorder:
    """Collect the output trace and dispatch statistics of one run."""

    def __init__(self):
        """Initialize recorder."""
        self.entries: List[TraceEntry] = []
        self.batch_sizes: List[int] = []
        self.transitions: Counter = Counter()
        self.in_batch_merges = 0
        self.queue_merges = 0

    def reset(self) -> None:
        """Forget everything recorded so far."""
        self.entries.clear()
        self.batch_sizes.clear()
        self.transitions.clear()
        self.in_batch_merges = 0
        self.queue_merges = 0

    def record_batch(self, batch: List[Event]) -> None:
        """Record a dispatched batch.

        Args:
            batch: Events dispatched in one step
        """
        self.batch_sizes.append(len(batch))
        for event in batch:
            self.transitions[event.kind] += 1

    def record_output(self, time: float, payload: Any, source: Optional[str] = None) -> None:
        """Record an output that left the simulation."""
        self.entries.append(TraceEntry(time=time, payload=payload, source=source))

    def record_merge(self) -> None:
        """Record an input absorbed by an imminent internal event."""
        self.in_batch_merges += 1

    @property
    def trace(self) -> List[Tuple[float, Any]]:
        """Trace as (time, payload) pairs in emission order."""
        return [entry.as_pair() for entry in self.entries]

    @property
    def steps(self) -> int:
        return len(self.batch_sizes)

    def compute_metrics(self) -> Dict:
        """Compute summary statistics for the run.

        Returns:
            Dictionary of run statistics
        """
        metrics = {
            'steps': self.steps,
            'events_dispatched': int(sum(self.batch_sizes)),
            'internal_transitions': self.transitions[EventKind.INTERNAL],
            'external_transitions': self.transitions[EventKind.EXTERNAL],
            'confluent_transitions': self.transitions[EventKind.CONFLUENT],
            'confluent_merges': self.queue_merges + self.in_batch_merges,
            'outputs': len(self.entries),
        }

        if self.batch_sizes:
            sizes = np.asarray(self.batch_sizes)
            metrics['mean_batch_size'] = float(np.mean(sizes))
            metrics['max_batch_size'] = int(np.max(sizes))
        else:
            metrics['mean_batch_size'] = 0.0
            metrics['max_batch_size'] = 0

        if self.entries:
            times = np.asarray([entry.time for entry in self.entries])
            metrics['first_output_time'] = float(times[0])
            metrics['last_output_time'] = float(times[-1])
            metrics['mean_output_interval'] = (
                float(np.mean(np.diff(times))) if len(times) > 1 else 0.0
            )

        return metrics
