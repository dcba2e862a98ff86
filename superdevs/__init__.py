"""superdevs: DEVS simulation kernel with super-dense time."""

from .core.simulator import Simulator
from .core.event_queue import Event, EventKind, EventQueue
from .core.model import NEVER, OUTSIDE_WORLD, SimulationModel
from .core.time import SuperDenseTime
from .core.trace_recorder import TraceEntry, TraceRecorder
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "Simulator",
    "Event",
    "EventKind",
    "EventQueue",
    "NEVER",
    "OUTSIDE_WORLD",
    "SimulationModel",
    "SuperDenseTime",
    "TraceEntry",
    "TraceRecorder",
    "setup_logger",
]
