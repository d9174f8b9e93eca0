"""CSV frame format.

Each completed step is written to its own file, ``mds-<index>.csv``, inside
a run directory named after the start time, ``mds-<DD-MM-YYYY_HH-MM-SS>``.
A file holds one line per particle with its x, y and z position separated
by ``", "``. There is no header, and velocities and accelerations are not
stored.
"""

from __future__ import annotations

import datetime
import os
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..base import FrameWriter

if TYPE_CHECKING:
    from ...system import ParticleSnapshot

RUN_DIR_PREFIX = "mds-"
RUN_DIR_TIME_FORMAT = "%d-%m-%Y_%H-%M-%S"
# Owner and group read/write/execute.
RUN_DIR_MODE = 0o770
SEPARATOR = ", "


def run_directory_name(now: datetime.datetime | None = None) -> str:
    """Return the run directory name for a start time (local time by default)."""
    if now is None:
        now = datetime.datetime.now()
    return RUN_DIR_PREFIX + now.strftime(RUN_DIR_TIME_FORMAT)


def create_run_directory(
    root: str | Path = ".", now: datetime.datetime | None = None
) -> Path:
    """
    Create the run directory below root.

    Args:
        root: Parent directory.
        now: Start time used in the name.

    Returns:
        Path to the run directory.

    Raises:
        OSError: If the directory cannot be created.
    """
    path = Path(root) / run_directory_name(now)
    path.mkdir(mode=RUN_DIR_MODE, exist_ok=True)
    # mkdir applies the umask
    os.chmod(path, RUN_DIR_MODE)
    return path


def frame_filename(index: int) -> str:
    """Return the file name of frame ``index``."""
    return f"{RUN_DIR_PREFIX}{index}.csv"


class CSVWriter(FrameWriter):
    """
    CSV frame writer.

    Frames are numbered by the zero-based loop counter, i.e. the snapshot
    taken after step 1 goes to ``mds-0.csv``.
    """

    def __init__(self, directory: str | Path, precision: int = 6) -> None:
        """
        Initialize CSV writer.

        Args:
            directory: Run directory.
            precision: Significant digits per coordinate.
        """
        super().__init__(directory)
        self.precision = precision

    def open(self) -> None:
        """Create the run directory with owner/group permissions."""
        self.directory.mkdir(mode=RUN_DIR_MODE, parents=True, exist_ok=True)
        os.chmod(self.directory, RUN_DIR_MODE)
        self._is_open = True

    def write(
        self, snapshot: ParticleSnapshot, index: int | None = None, **kwargs
    ) -> Path:
        """
        Write the positions of a snapshot.

        Args:
            snapshot: Snapshot to write.
            index: Frame index; defaults to ``snapshot.step - 1``.

        Returns:
            Path of the written file.
        """
        if not self._is_open:
            raise RuntimeError("Writer not open. Use context manager or call open().")

        if index is None:
            index = snapshot.step - 1
        path = self.directory / frame_filename(index)
        write_positions(path, snapshot.positions, self.precision)

        self._n_frames += 1
        return path


def write_positions(
    path: str | Path, positions: NDArray[np.floating], precision: int = 6
) -> None:
    """Write a (3, N) positions array as N rows of ``x, y, z``."""
    fmt = f"%.{precision}g"
    with open(path, "w") as f:
        np.savetxt(f, np.asarray(positions).T, fmt=fmt, delimiter=SEPARATOR)


def read_frame(path: str | Path) -> NDArray[np.floating]:
    """
    Read a CSV frame back.

    Args:
        path: Frame file.

    Returns:
        Positions array of shape (3, N).
    """
    positions = np.loadtxt(path, delimiter=",", ndmin=2, dtype=np.float64)
    if positions.size == 0:
        return np.zeros((3, 0), dtype=np.float64)
    if positions.shape[1] != 3:
        raise ValueError(f"{os.fspath(path)}: expected 3 columns, got {positions.shape[1]}")
    return np.ascontiguousarray(positions.T)
