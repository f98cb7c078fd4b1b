"""
Tests for the snapshot stream written for multi-block plotting.
"""

import numpy as np
import pytest
from invlens import run_simulation
from invlens.config import SimulationParameters
from invlens.io import (SnapshotWriter, SnapshotWriteError, MemorySink, read_snapshots,
                        format_value, format_record)
from invlens.simulation.fdtd import FDTD

SMALL = dict(grid_size=12, steps=7, sample_period=3, sample_stride=5, lens_start=4, lens_stop=8, source_index=30)

@pytest.mark.parametrize("value, expected", [
    (0.0, "0"),
    (-0.5, "-0.5"),
    (1e-05, "1e-05"),
    (1234567.0, "1.23457e+06"),
    (2.4795835e-07, "2.47958e-07"),
    (123.456789, "123.457"),
])
def test_values_formatted_like_ostream(value, expected):
    """Six significant digits, shortest of fixed and exponent notation."""
    assert format_value(value) == expected

def test_record_line_is_tab_separated():
    assert format_record(50, 5, 10, -0.25) == "50\t5\t10\t-0.25\n"

def test_writer_frames_end_with_two_blank_lines(tmp_path):
    """Each frame is followed by exactly two newlines."""
    path = tmp_path / "frames.dat"

    with SnapshotWriter(path) as writer:
        writer.write_record(0, 0, 0, 0.0)
        writer.write_record(0, 0, 5, 1.5)
        writer.end_frame()
        writer.write_record(50, 0, 0, -2.0)
        writer.end_frame()

    assert path.read_text() == "0\t0\t0\t0\n0\t0\t5\t1.5\n\n\n50\t0\t0\t-2\n\n\n"
    assert writer.records_written == 3
    assert writer.frames_written == 2

def test_writer_open_failure_is_fatal(tmp_path):
    """A sink that cannot be created aborts before any stepping."""
    with pytest.raises(SnapshotWriteError):
        SnapshotWriter(tmp_path / "missing" / "FDTD.dat")
    with pytest.raises(SnapshotWriteError):
        run_simulation(SimulationParameters(**SMALL), output=tmp_path / "missing" / "FDTD.dat", verbose=False)

def test_write_after_close_fails(tmp_path):
    writer = SnapshotWriter(tmp_path / "closed.dat")
    writer.close()
    with pytest.raises(SnapshotWriteError):
        writer.write_record(0, 0, 0, 1.0)

def test_file_matches_memory_sink(tmp_path):
    """The file stream and the in-memory frames render to the same text."""
    params = SimulationParameters(**SMALL)
    path = tmp_path / "FDTD.dat"
    sink = MemorySink()

    run_simulation(params, output=path, verbose=False)
    FDTD(params, sink=sink, verbose=False).run()

    assert path.read_text() == sink.to_text()
    assert sink.times == [0, 3, 6]

def test_read_snapshots(tmp_path):
    """Parsed frames are indexed [x_sample, y_sample] on the sampled axes."""
    params = SimulationParameters(**SMALL)
    path = tmp_path / "FDTD.dat"
    sink = MemorySink()
    run_simulation(params, output=path, verbose=False)
    FDTD(params, sink=sink, verbose=False).run()

    frames, xs, ys = read_snapshots(path)

    assert sorted(frames) == [0, 3, 6]
    assert list(xs) == [0, 5, 10]
    assert list(ys) == [0, 5, 10]
    for t in frames:
        assert frames[t].shape == (3, 3)
        np.testing.assert_allclose(frames[t], sink.frame_array(t), rtol=1e-5, atol=1e-300)

def test_read_snapshots_rejects_malformed_lines(tmp_path):
    path = tmp_path / "bad.dat"
    path.write_text("0\t0\t0\n")
    with pytest.raises(ValueError, match="4 columns"):
        read_snapshots(path)
