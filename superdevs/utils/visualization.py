"""Visualization utilities for simulation traces."""

from pathlib import Path
from typing import Dict, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from ..core.trace_recorder import TraceRecorder

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_trace_timeline(recorder: TraceRecorder, output_path: Path,
                        metrics: Optional[Dict] = None) -> None:
    """Plot emitted outputs over simulated time.

    Args:
        recorder: Recorder of a finished run
        output_path: Output file path
        metrics: Optional run statistics shown next to the timeline
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, (ax1, ax2) = plt.subplots(
        1, 2, figsize=(14, 5), gridspec_kw={'width_ratios': [3, 1]}
    )

    # One row of markers per source model
    sources = sorted({entry.source or "?" for entry in recorder.entries})
    rows = {source: i for i, source in enumerate(sources)}
    palette = sns.color_palette(n_colors=max(len(sources), 1))
    for source, row in rows.items():
        times = [entry.time for entry in recorder.entries if (entry.source or "?") == source]
        ax1.scatter(times, [row] * len(times), color=palette[row], label=source, s=40)

    ax1.set_yticks(range(len(sources)))
    ax1.set_yticklabels(sources)
    ax1.set_xlabel('Simulated time')
    ax1.set_title('Outputs Over Time')
    ax1.grid(axis='x', alpha=0.3)

    metrics = metrics if metrics is not None else recorder.compute_metrics()
    metrics_text = [
        f"Steps: {metrics.get('steps', 0)}",
        f"Events: {metrics.get('events_dispatched', 0)}",
        f"Confluent: {metrics.get('confluent_transitions', 0)}",
        f"Outputs: {metrics.get('outputs', 0)}",
        f"Mean batch: {metrics.get('mean_batch_size', 0):.2f}",
    ]
    ax2.text(0.1, 0.5, '\n'.join(metrics_text), fontsize=12,
             verticalalignment='center', family='monospace')
    ax2.axis('off')
    ax2.set_title('Run Summary')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_batch_sizes(recorder: TraceRecorder, output_path: Path) -> None:
    """Plot the number of events dispatched per step.

    Args:
        recorder: Recorder of a finished run
        output_path: Output file path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.bar(range(len(recorder.batch_sizes)), recorder.batch_sizes, color='steelblue')
    ax.set_xlabel('Step')
    ax.set_ylabel('Events')
    ax.set_title('Events Dispatched per Step')
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
