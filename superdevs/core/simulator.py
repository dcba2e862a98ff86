"""Main simulator class orchestrating the DEVS step loop."""

import math
import time
from typing import Any, Dict, List, Optional, Tuple

from .event_queue import Event, EventKind, EventQueue
from .model import OUTSIDE_WORLD, SimulationModel
from .trace_recorder import TraceRecorder
from ..utils.logger import setup_logger


def _is_empty_output(output: Any) -> bool:
    return output is None or (isinstance(output, str) and not output)


class Simulator:
    """Discrete event simulator for coupled DEVS models.

    Each step takes every event at the earliest real time and:
    - collects outputs of the imminent models from their pre-transition state
    - routes outputs along the couplings (to another model or to the trace)
    - dispatches one transition per event
    - reschedules every model touched by the step
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize simulator.

        Args:
            config: Optional configuration dictionary ('simulation' and
                'logging' sections are read)
        """
        self.config = config or {}
        sim_config = self.config.get('simulation') or {}
        log_level = (self.config.get('logging') or {}).get('level', 'INFO')
        self.logger = setup_logger(self.__class__.__name__, level=log_level)

        # Simulation state
        self.current_time = 0.0
        self.event_queue = EventQueue()
        self.recorder = TraceRecorder()

        # Run guards
        self.max_steps = sim_config.get('max_steps')
        self.end_time = sim_config.get('end_time')

        # Topology
        self.models: List[SimulationModel] = []
        self.couplings: Dict[Any, Any] = {}
        self.inputs: Dict[float, Any] = {}

    def _is_registered(self, model: Any) -> bool:
        return any(model is registered for registered in self.models)

    def add_model(self, model: SimulationModel) -> SimulationModel:
        """Register a model with the simulator.

        Args:
            model: Model to register

        Returns:
            The registered model
        """
        if not self._is_registered(model):
            self.models.append(model)
            self.logger.debug(f"Registered model {model.name}")
        return model

    def add_coupling(self, source: Any, destination: Any) -> None:
        """Direct the output of source to the input of destination.

        Either end may be OUTSIDE_WORLD. A source has at most one
        destination; coupling it again replaces the previous one.

        Raises:
            ValueError: If an end is not a registered model
        """
        for end in (source, destination):
            if end is not OUTSIDE_WORLD and not self._is_registered(end):
                raise ValueError(f"Cannot couple unregistered model {end!r}")
        if source is OUTSIDE_WORLD and destination is OUTSIDE_WORLD:
            raise ValueError("Cannot couple the outside world to itself")

        previous = self.couplings.get(source)
        if previous is not None and previous is not destination:
            self.logger.debug(f"Coupling of {source!r} changed from {previous!r} to {destination!r}")
        self.couplings[source] = destination

    def route_input_to(self, model: SimulationModel) -> None:
        """Deliver the exogenous input schedule to model."""
        self.add_coupling(OUTSIDE_WORLD, model)

    def take_output_from(self, model: SimulationModel) -> None:
        """Emit the output of model into the simulation trace."""
        self.add_coupling(model, OUTSIDE_WORLD)

    def add_input(self, payload: Any, real_time: float) -> None:
        """Add an entry to the exogenous input schedule.

        Args:
            payload: Input payload
            real_time: Simulated time of arrival
        """
        if not math.isfinite(real_time) or real_time < 0:
            raise ValueError(f"Input time must be finite and non-negative, got {real_time}")
        real_time = float(real_time)
        if real_time in self.inputs:
            self.logger.warning(
                f"Input {self.inputs[real_time]!r} at t={real_time} replaced by {payload!r}"
            )
        self.inputs[real_time] = payload

    @property
    def trace(self) -> List[Tuple[float, Any]]:
        """Output trace of the last run."""
        return self.recorder.trace

    def simulate(self, max_steps: Optional[int] = None,
                 end_time: Optional[float] = None) -> List[Tuple[float, Any]]:
        """Run the simulation until the event queue is empty.

        Args:
            max_steps: Stop after this many steps (overrides config)
            end_time: Do not process events after this time (overrides config)

        Returns:
            Trace of (time, payload) outputs taken from the simulation
        """
        max_steps = self.max_steps if max_steps is None else max_steps
        end_time = self.end_time if end_time is None else end_time

        start_time = time.time()
        self.logger.info("Starting simulation...")

        self._initialize()

        steps = 0
        while not self.event_queue.is_empty():
            if max_steps is not None and steps >= max_steps:
                self.logger.warning(
                    f"Stopped after {steps} steps at t={self.current_time}; "
                    f"{len(self.event_queue)} events left in queue"
                )
                break
            if end_time is not None and self.event_queue.peek_next_time() > end_time:
                self.logger.info(
                    f"Reached end time {end_time}; {len(self.event_queue)} events left in queue"
                )
                break

            self._step()
            steps += 1

        self.recorder.queue_merges = self.event_queue.merge_count

        elapsed_time = time.time() - start_time
        self.logger.info(
            f"Simulation completed in {elapsed_time:.2f}s "
            f"({steps} steps, {len(self.recorder.entries)} outputs)"
        )

        return self.trace

    def metrics(self) -> Dict:
        """Summary statistics of the last run."""
        return self.recorder.compute_metrics()

    def _initialize(self) -> None:
        """Seed the event queue from the input schedule and model states."""
        self.event_queue.clear()
        self.recorder.reset()
        self.current_time = 0.0

        input_model = self.couplings.get(OUTSIDE_WORLD)
        if self.inputs and input_model is None:
            raise ValueError("Inputs were added but no model receives them; call route_input_to()")

        for real_time in sorted(self.inputs):
            self.event_queue.schedule_external(self.inputs[real_time], real_time, input_model)

        # Models may start with an internal event already pending
        for model in self.models:
            next_time = model.next_internal_event_time()
            if math.isfinite(next_time):
                self.event_queue.schedule_internal(model, next_time)

        self.logger.info(
            f"Seeded {len(self.event_queue)} events for {len(self.models)} models"
        )

    def _step(self) -> None:
        """Process every event at the earliest real time."""
        r = self.event_queue.peek_next_time()
        batch = self.event_queue.pop_next_batch()
        self.current_time = r

        # Outputs reflect the state before any transition of this step
        outputs: Dict[SimulationModel, Any] = {}
        for event in batch:
            if event.kind is not EventKind.EXTERNAL:
                outputs[event.model] = event.model.output_function()

        batch = self._route_outputs(r, batch, outputs)
        self.recorder.record_batch(batch)
        self.logger.debug(f"t={r}: {batch}")

        for event in batch:
            self._dispatch(event, r)

        touched: List[SimulationModel] = []
        for event in batch:
            if not any(event.model is model for model in touched):
                touched.append(event.model)
        for model in touched:
            self._reschedule(model, r)

    def _route_outputs(self, r: float, batch: List[Event],
                       outputs: Dict[SimulationModel, Any]) -> List[Event]:
        """Send outputs along the couplings.

        An input for a model that is itself imminent in this step turns its
        internal event into a confluent one. Any other input is queued at the
        same real time and delivered at the next causal index.

        Returns:
            The batch with merged events replaced
        """
        batch = list(batch)
        for model in self.models:
            if model not in outputs or _is_empty_output(outputs[model]):
                continue
            output = outputs[model]

            target = self.couplings.get(model)
            if target is None:
                self.logger.debug(f"Output {output!r} of {model.name} at t={r} is not coupled")
            elif target is OUTSIDE_WORLD:
                self.recorder.record_output(r, output, model.name)
            else:
                index = self._imminent_internal(batch, target)
                if index is not None:
                    event = batch[index]
                    batch[index] = Event(EventKind.CONFLUENT, event.time, target, output)
                    self.recorder.record_merge()
                    self.logger.debug(f"t={r}: {target.name} goes confluent with input {output!r}")
                else:
                    self.event_queue.schedule_external(output, r, target)
        return batch

    @staticmethod
    def _imminent_internal(batch: List[Event], model: SimulationModel) -> Optional[int]:
        for index, event in enumerate(batch):
            if event.model is model and event.kind is EventKind.INTERNAL:
                return index
        return None

    @staticmethod
    def _dispatch(event: Event, r: float) -> None:
        """Invoke the transition matching the event kind."""
        model = event.model
        if event.kind is EventKind.INTERNAL:
            model.internal_transition(r)
        elif event.kind is EventKind.EXTERNAL:
            model.external_transition(event.payload, r)
        else:
            model.confluent_transition(event.payload, r)

    def _reschedule(self, model: SimulationModel, r: float) -> None:
        """Replace the pending internal event of model with its new schedule."""
        next_time = model.next_internal_event_time()
        if math.isnan(next_time) or next_time < r:
            raise ValueError(
                f"Model {model.name} scheduled its next internal event at {next_time}, "
                f"before the current time {r}"
            )

        self.event_queue.withdraw_internal(model, keep_time=next_time)
        if math.isfinite(next_time):
            self.event_queue.schedule_internal(model, next_time)
