import logging
import os
from typing import Dict, List, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Record = Tuple[int, int, int, float]


class SnapshotWriteError(IOError):
    """Raised when the snapshot stream cannot be created or written."""


def format_value(value: float) -> str:
    """Format a field value like a default C++ ostream (6 significant digits)."""
    return f"{value:g}"


def format_record(t: int, x: int, y: int, value: float) -> str:
    return f"{t}\t{x}\t{y}\t{format_value(value)}\n"


class SnapshotWriter:
    """Writes sampled frames as tab-separated text for multi-block plotting.

    One line per record, `t<TAB>x<TAB>y<TAB>value`, and two blank lines after
    each frame. Any failure to open or write the file raises
    SnapshotWriteError; partial output is not useful to the consumer.
    """
    def __init__(self, path: Union[str, os.PathLike]):
        self.path = os.fspath(path)
        self.records_written = 0
        self.frames_written = 0
        try:
            self._file = open(self.path, "w", encoding="ascii", newline="\n")
        except OSError as e:
            raise SnapshotWriteError(f"Cannot create snapshot file '{self.path}': {e}") from e
        logger.debug("Opened snapshot file %s", self.path)

    def _write(self, text: str) -> None:
        if self._file is None:
            raise SnapshotWriteError(f"Snapshot file '{self.path}' is closed")
        try:
            self._file.write(text)
        except OSError as e:
            raise SnapshotWriteError(f"Cannot write to snapshot file '{self.path}': {e}") from e

    def write_record(self, t: int, x: int, y: int, value: float) -> None:
        self._write(format_record(t, x, y, value))
        self.records_written += 1

    def end_frame(self) -> None:
        self._write("\n\n")
        self.frames_written += 1

    def close(self) -> None:
        if self._file is None: return
        try:
            self._file.close()
        except OSError as e:
            raise SnapshotWriteError(f"Cannot close snapshot file '{self.path}': {e}") from e
        finally:
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class MemorySink:
    """Keeps sampled frames in memory, keyed by time step."""
    def __init__(self):
        self.frames: Dict[int, List[Record]] = {}
        self._current: List[Record] = []

    def write_record(self, t: int, x: int, y: int, value: float) -> None:
        self._current.append((t, x, y, value))

    def end_frame(self) -> None:
        if self._current:
            self.frames[self._current[0][0]] = self._current
        self._current = []

    @property
    def times(self) -> List[int]:
        return sorted(self.frames)

    def to_text(self) -> str:
        """Render the frames exactly as SnapshotWriter would."""
        return "".join(
            "".join(format_record(*record) for record in self.frames[t]) + "\n\n"
            for t in self.times
        )

    def frame_array(self, t: int) -> np.ndarray:
        """Frame at step t as an array indexed [x_sample, y_sample]."""
        return _records_to_array(self.frames[t])[2]


def _records_to_array(records: List[Record]):
    xs = sorted({r[1] for r in records})
    ys = sorted({r[2] for r in records})
    x_pos = {x: i for i, x in enumerate(xs)}
    y_pos = {y: i for i, y in enumerate(ys)}
    values = np.full((len(xs), len(ys)), np.nan)
    for _, x, y, value in records:
        values[x_pos[x], y_pos[y]] = value
    return np.array(xs), np.array(ys), values


def read_snapshots(path: Union[str, os.PathLike]):
    """Parse a snapshot file written by SnapshotWriter.

    Args:
        path: Path to the .dat file

    Returns:
        tuple: (frames, xs, ys) where frames maps each sampled step to an
        array indexed [x_sample, y_sample] and xs, ys are the sampled axes
    """
    frames: Dict[int, np.ndarray] = {}
    xs = ys = np.array([], dtype=int)
    block: List[Record] = []

    def flush():
        nonlocal xs, ys
        if not block: return
        xs, ys, values = _records_to_array(block)
        frames[block[0][0]] = values
        block.clear()

    with open(path, "r", encoding="ascii") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                flush()
                continue
            parts = line.split()
            if len(parts) != 4:
                raise ValueError(f"{path}:{line_number}: expected 4 columns, got {len(parts)}")
            block.append((int(parts[0]), int(parts[1]), int(parts[2]), float(parts[3])))
    flush()
    return frames, xs, ys
