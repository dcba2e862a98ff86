"""Tests for trace I/O, plotting and the command line entry point."""

import logging
import tempfile
import unittest
from pathlib import Path

from configs import DEFAULT_CONFIG_PATH
from superdevs.core.trace_recorder import TraceEntry, TraceRecorder
from superdevs.main import main
from superdevs.utils.io import format_trace, load_trace, save_trace, trace_to_dataframe
from superdevs.utils.logger import setup_logger


class TestTraceIO(unittest.TestCase):
    """Test cases for trace formatting and persistence."""

    def setUp(self):
        """Set up test fixtures."""
        self.trace = [(4.5, "1 part completed"), (6.5, "1 part completed")]
        self.tmpdir = tempfile.TemporaryDirectory()
        self.out = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_format_trace(self):
        """One "time - payload" line per output."""
        self.assertEqual(
            format_trace([(1.5, "a"), (2.0, "b")]),
            "1.5 - a\n2 - b\n",
        )
        self.assertEqual(format_trace([]), "")

    def test_format_accepts_entries(self):
        """TraceEntry records format like plain pairs."""
        entries = [TraceEntry(time=3.0, payload="x", source="m")]
        self.assertEqual(format_trace(entries), "3 - x\n")

    def test_dataframe(self):
        """Trace converts to a time/payload/source frame."""
        frame = trace_to_dataframe(self.trace)
        self.assertEqual(list(frame.columns), ['time', 'payload', 'source'])
        self.assertEqual(frame['time'].tolist(), [4.5, 6.5])

    def test_yaml_and_csv(self):
        """Saved traces load back with their times and string payloads."""
        for name in ("trace.yaml", "trace.csv", "trace.json"):
            path = save_trace(self.trace, self.out / name)
            self.assertTrue(path.exists())
            self.assertEqual(load_trace(path), self.trace, name)

    def test_unsupported_format(self):
        """Only json, yaml and csv are supported."""
        with self.assertRaises(ValueError):
            save_trace(self.trace, self.out / "trace.txt")
        with self.assertRaises(FileNotFoundError):
            load_trace(self.out / "missing.json")

    def test_entry_serialization(self):
        """Trace entries serialize through dataclasses-json."""
        entry = TraceEntry(time=1.0, payload="p", source="press")
        self.assertEqual(entry.to_dict(), {'time': 1.0, 'payload': "p", 'source': "press"})
        self.assertEqual(TraceEntry.from_json(entry.to_json()), entry)


class TestVisualization(unittest.TestCase):
    """Test cases for trace plots."""

    def test_plot_trace_timeline(self):
        """Timeline plot is written to disk."""
        from superdevs.utils.visualization import plot_batch_sizes, plot_trace_timeline

        recorder = TraceRecorder()
        recorder.record_output(1.0, "a", "left")
        recorder.record_output(2.0, "b", "right")
        recorder.batch_sizes.extend([1, 2])

        with tempfile.TemporaryDirectory() as tmp:
            timeline = Path(tmp) / "timeline.png"
            batches = Path(tmp) / "batches.png"
            plot_trace_timeline(recorder, timeline)
            plot_batch_sizes(recorder, batches)
            self.assertTrue(timeline.exists())
            self.assertTrue(batches.exists())


class TestLogger(unittest.TestCase):
    """Test cases for logger setup."""

    def test_no_duplicate_handlers(self):
        """Repeated setup reuses the same handler."""
        first = setup_logger("superdevs-test", level="DEBUG")
        second = setup_logger("superdevs-test", level="WARNING")

        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), 1)
        self.assertEqual(second.level, logging.WARNING)


class TestMain(unittest.TestCase):
    """Test cases for the command line entry point."""

    def test_run_default_config(self):
        """The CLI runs the bundled topology and writes results."""
        with tempfile.TemporaryDirectory() as tmp:
            code = main(["--config", str(DEFAULT_CONFIG_PATH), "--output-dir", tmp])

            self.assertEqual(code, 0)
            for name in ("trace.yaml", "trace.csv", "metrics.yaml"):
                self.assertTrue((Path(tmp) / name).exists(), name)
            self.assertEqual(len(load_trace(Path(tmp) / "trace.yaml")), 14)

    def test_empty_logging_section(self):
        """A config whose logging section is left empty still runs."""
        config = (
            "logging:\n"
            "models:\n"
            "  - {name: press, type: press}\n"
            "input_to: press\n"
            "output_from: press\n"
            "inputs:\n"
            "  - {time: 0.0, value: \"2\"}\n"
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(config)
            code = main(["--config", str(path), "--output-dir", tmp])

            self.assertEqual(code, 0)
            self.assertEqual(
                load_trace(Path(tmp) / "trace.yaml"),
                [(1.0, "1"), (2.0, "1")],
            )

    def test_missing_config_fails(self):
        """A missing config gives a non-zero exit code."""
        self.assertEqual(main(["--config", "does/not/exist.yaml"]), 1)


if __name__ == '__main__':
    unittest.main()
