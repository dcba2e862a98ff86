"""Main entry point for the superdevs simulator."""

import argparse
import sys
from pathlib import Path

import yaml

from configs import DEFAULT_CONFIG_PATH, load_config
from superdevs.models.topology import build_simulator
from superdevs.utils.io import format_trace, save_trace
from superdevs.utils.logger import setup_logger


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="superdevs: DEVS simulation kernel with super-dense time"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to topology configuration file",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save the trace and run metrics",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Stop after this many simulation steps",
    )
    parser.add_argument(
        "--end-time",
        type=float,
        default=None,
        help="Do not process events after this simulated time",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Generate a trace timeline plot (needs --output-dir)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else "INFO"
    logger = setup_logger("superdevs", level=log_level)

    logger.info(f"Loading configuration from {args.config}")

    try:
        config = load_config(args.config)
        config['logging'] = {**(config.get('logging') or {}), 'level': log_level}

        simulator, models = build_simulator(config)
        logger.info(f"Models: {', '.join(models)}")
        logger.info(f"Inputs: {len(simulator.inputs)}")

        trace = simulator.simulate(max_steps=args.max_steps, end_time=args.end_time)
        metrics = simulator.metrics()

        print(format_trace(trace), end="")

        logger.info(f"Steps: {metrics['steps']}")
        logger.info(f"Events dispatched: {metrics['events_dispatched']}")
        logger.info(f"Confluent transitions: {metrics['confluent_transitions']}")
        logger.info(f"Outputs: {metrics['outputs']}")

        if args.output_dir:
            output_dir = Path(args.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

            save_trace(simulator.recorder.entries, output_dir / "trace.yaml")
            save_trace(simulator.recorder.entries, output_dir / "trace.csv")

            metrics_file = output_dir / "metrics.yaml"
            with open(metrics_file, 'w') as f:
                yaml.dump(metrics, f, default_flow_style=False)
            logger.info(f"Results saved to {output_dir}")

            if args.visualize:
                from superdevs.utils.visualization import plot_trace_timeline
                plot_trace_timeline(simulator.recorder, output_dir / "trace_timeline.png", metrics)
                logger.info(f"Plots saved to {output_dir}")
        elif args.visualize:
            logger.warning("--visualize needs --output-dir; skipping plots")

        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
