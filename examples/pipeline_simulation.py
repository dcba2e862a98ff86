"""Press and drill pipeline example."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from superdevs.core.simulator import Simulator
from superdevs.models.machine import Drill, Press
from superdevs.utils.io import format_trace
from superdevs.utils.logger import setup_logger


def main():
    """Run the two-stage pipeline."""
    logger = setup_logger("PipelineSimulation")

    logger.info("=== Press -> Drill Pipeline ===")

    simulator = Simulator()
    press = simulator.add_model(Press())
    drill = simulator.add_model(Drill())

    simulator.add_coupling(press, drill)
    simulator.route_input_to(press)
    simulator.take_output_from(drill)

    simulator.add_input("12", 1.5)
    simulator.add_input("2", 2.7)

    trace = simulator.simulate()
    print(format_trace(trace))

    metrics = simulator.metrics()
    logger.info(f"Parts pressed: {press.completed}")
    logger.info(f"Parts drilled: {drill.completed}")
    logger.info(f"Confluent transitions: {metrics['confluent_transitions']}")
    logger.info(f"Last part finished at t={metrics['last_output_time']}")


if __name__ == "__main__":
    main()
