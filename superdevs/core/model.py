"""Capability contract for simulated models."""

from abc import ABC, abstractmethod
from typing import Any, Optional

NEVER = float('inf')


class _OutsideWorld:
    """Sentinel for the simulation boundary in the coupling graph."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OUTSIDE_WORLD"


OUTSIDE_WORLD = _OutsideWorld()


class SimulationModel(ABC):
    """Black-box DEVS state machine driven by the simulator.

    The simulator only ever talks to a model through these five operations.
    Output is always requested before the transition of the same event, so
    ``output_function`` sees the pre-transition state.
    """

    def __init__(self, name: Optional[str] = None):
        """Initialize model.

        Args:
            name: Human readable name used in logs and plots
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def output_function(self) -> Any:
        """Produce the output for the imminent internal event.

        Returns:
            Output payload, or None for no output
        """

    @abstractmethod
    def internal_transition(self, current_time: float) -> None:
        """Apply the internal state transition."""

    @abstractmethod
    def external_transition(self, payload: Any, current_time: float) -> None:
        """Apply the external state transition for an arriving input."""

    @abstractmethod
    def confluent_transition(self, payload: Any, current_time: float) -> None:
        """Apply the combined transition when internal and external coincide."""

    @abstractmethod
    def next_internal_event_time(self) -> float:
        """Absolute time of the next internal event, or NEVER."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
