"""Build a simulator and its models from a configuration dictionary."""

from typing import Dict, Tuple

from ..core.model import SimulationModel
from ..core.simulator import Simulator
from .machine import Drill, Machine, Press

MODEL_TYPES = {
    'machine': Machine,
    'press': Press,
    'drill': Drill,
}


def create_model(entry: Dict) -> SimulationModel:
    """Create one model from its configuration entry.

    Args:
        entry: Model entry with 'name', 'type' and type-specific settings

    Returns:
        The new model
    """
    model_type = entry.get('type', 'machine')
    if model_type not in MODEL_TYPES:
        raise ValueError(f"Unknown model type: {model_type}")

    name = entry.get('name')
    if model_type == 'machine':
        if 'processing_time' not in entry:
            raise ValueError(f"Machine {name!r} needs a processing_time")
        return Machine(
            processing_time=entry['processing_time'],
            output=entry.get('output', "1"),
            name=name,
        )
    return MODEL_TYPES[model_type](name=name)


def build_simulator(config: Dict) -> Tuple[Simulator, Dict[str, SimulationModel]]:
    """Wire a simulator from configuration.

    Args:
        config: Configuration with 'models', 'couplings', 'input_to',
            'output_from' and 'inputs' sections

    Returns:
        Tuple of (simulator, models by name)
    """
    simulator = Simulator(config)

    models: Dict[str, SimulationModel] = {}
    for entry in config.get('models') or []:
        model = create_model(entry)
        if model.name in models:
            raise ValueError(f"Duplicate model name: {model.name}")
        models[model.name] = model
        simulator.add_model(model)

    def lookup(name: str) -> SimulationModel:
        if name not in models:
            raise ValueError(f"Unknown model: {name}")
        return models[name]

    for source, destination in config.get('couplings') or []:
        simulator.add_coupling(lookup(source), lookup(destination))

    if config.get('input_to'):
        simulator.route_input_to(lookup(config['input_to']))
    output_from = config.get('output_from') or []
    if isinstance(output_from, str):
        output_from = [output_from]
    for name in output_from:
        simulator.take_output_from(lookup(name))

    for entry in config.get('inputs') or []:
        simulator.add_input(entry['value'], entry['time'])

    return simulator, models
