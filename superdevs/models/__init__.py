"""Example models and topology builders."""

from .machine import Machine, Press, Drill
from .topology import MODEL_TYPES, build_simulator, create_model

__all__ = ["Machine", "Press", "Drill", "MODEL_TYPES", "build_simulator", "create_model"]
