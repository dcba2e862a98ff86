"""Utility functions and helpers."""

from .logger import setup_logger
from .io import format_trace, load_trace, save_trace, trace_to_dataframe

__all__ = ["setup_logger", "format_trace", "load_trace", "save_trace", "trace_to_dataframe"]
