"""Core simulation components."""

from .time import SuperDenseTime
from .model import NEVER, OUTSIDE_WORLD, SimulationModel
from .event_queue import Event, EventKind, EventQueue
from .trace_recorder import TraceEntry, TraceRecorder
from .simulator import Simulator

__all__ = [
    "SuperDenseTime",
    "NEVER",
    "OUTSIDE_WORLD",
    "SimulationModel",
    "Event",
    "EventKind",
    "EventQueue",
    "TraceEntry",
    "TraceRecorder",
    "Simulator",
]
