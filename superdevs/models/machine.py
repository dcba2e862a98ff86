"""Single-server machine models that process parts one at a time."""

from typing import Any, Optional

from ..core.model import NEVER, SimulationModel
from ..utils.logger import setup_logger


class Machine(SimulationModel):
    """Machine that works through a stock of parts.

    Each input adds a number of parts to the stock. One part completes every
    ``processing_time`` time units while the stock is not empty, and every
    completion emits ``output``.
    """

    def __init__(self, processing_time: float, output: Any = "1",
                 name: Optional[str] = None):
        """Initialize machine.

        Args:
            processing_time: Time to complete one part
            output: Payload emitted for every completed part
            name: Model name
        """
        super().__init__(name)
        if processing_time <= 0:
            raise ValueError("Processing time must be positive")

        self.processing_time = processing_time
        self.output = output
        self.logger = setup_logger(self.__class__.__name__)

        self.parts = 0
        self.completed = 0
        self.rejected_inputs = 0
        self._next_internal_event = NEVER

    def output_function(self) -> Any:
        return self.output

    def internal_transition(self, current_time: float) -> None:
        self.parts -= 1
        self.completed += 1

        if self.parts > 0:
            self._next_internal_event = current_time + self.processing_time
        else:
            self._next_internal_event = NEVER

    def external_transition(self, payload: Any, current_time: float) -> None:
        added = self._parse(payload, current_time)
        if added is None:
            return

        was_idle = self.parts == 0
        self.parts += added

        if self.parts == 0:
            self._next_internal_event = NEVER
        elif was_idle:
            self._next_internal_event = current_time + self.processing_time

    def confluent_transition(self, payload: Any, current_time: float) -> None:
        # Finish the current part first, then take the new stock
        self.internal_transition(current_time)
        self.external_transition(payload, current_time)

    def next_internal_event_time(self) -> float:
        return self._next_internal_event

    def _parse(self, payload: Any, current_time: float) -> Optional[int]:
        """Turn a payload into a part count, or reject it.

        Returns:
            Number of parts to add, or None if the payload is rejected
        """
        try:
            added = int(payload)
        except (TypeError, ValueError):
            added = None

        if added is None or self.parts + added < 0:
            self.rejected_inputs += 1
            self.logger.warning(
                f"{self.name} rejected input {payload!r} at t={current_time}"
            )
            return None
        return added


class Press(Machine):
    """Press taking one time unit per part."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(processing_time=1, output="1", name=name)


class Drill(Machine):
    """Drill taking two time units per part."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(processing_time=2, output="1 part completed", name=name)
