"""Trace formatting and persistence helpers."""

import json
from pathlib import Path
from typing import Any, Iterable, List, Tuple, Union

import pandas as pd
import yaml

from ..core.trace_recorder import TraceEntry

TraceLike = Iterable[Union[TraceEntry, Tuple[float, Any]]]


def _as_entries(trace: TraceLike) -> List[TraceEntry]:
    entries = []
    for item in trace:
        if isinstance(item, TraceEntry):
            entries.append(item)
        else:
            time, payload = item
            entries.append(TraceEntry(time=time, payload=payload))
    return entries


def format_trace(trace: TraceLike) -> str:
    """Render a trace as one "time - payload" line per output.

    Args:
        trace: Trace pairs or TraceEntry records

    Returns:
        Formatted trace text
    """
    return "".join(f"{entry.time:g} - {entry.payload}\n" for entry in _as_entries(trace))


def trace_to_dataframe(trace: TraceLike) -> pd.DataFrame:
    """Convert a trace to a DataFrame with time, payload and source columns."""
    entries = _as_entries(trace)
    return pd.DataFrame(
        [entry.to_dict() for entry in entries],
        columns=['time', 'payload', 'source'],
    )


def save_trace(trace: TraceLike, file_path: Union[str, Path]) -> Path:
    """Save a trace; the format follows the file suffix.

    Args:
        trace: Trace pairs or TraceEntry records
        file_path: Output path ending in .json, .yaml/.yml or .csv

    Returns:
        Path of the written file
    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix not in ('.json', '.yaml', '.yml', '.csv'):
        raise ValueError(f"Unsupported trace format: {suffix}")

    path.parent.mkdir(parents=True, exist_ok=True)
    records = [entry.to_dict() for entry in _as_entries(trace)]

    if suffix == '.json':
        with open(path, 'w') as f:
            json.dump(records, f, indent=2, default=str)
    elif suffix == '.csv':
        trace_to_dataframe(trace).to_csv(path, index=False)
    else:
        with open(path, 'w') as f:
            yaml.safe_dump(records, f, default_flow_style=False, sort_keys=False)

    return path


def load_trace(file_path: Union[str, Path]) -> List[Tuple[float, Any]]:
    """Load a trace written by save_trace.

    Returns:
        Trace as (time, payload) pairs
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Trace file not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix == '.json':
        with open(path, 'r') as f:
            records = json.load(f)
    elif suffix in ('.yaml', '.yml'):
        with open(path, 'r') as f:
            records = yaml.safe_load(f) or []
    elif suffix == '.csv':
        frame = pd.read_csv(path, dtype={'payload': str}, keep_default_na=False)
        records = frame.to_dict(orient='records')
    else:
        raise ValueError(f"Unsupported trace format: {suffix}")

    return [(float(record['time']), record['payload']) for record in records]
