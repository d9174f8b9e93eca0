"""Base classes for frame output."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..system import ParticleSnapshot


class FrameWriter(ABC):
    """
    Abstract base class for per-step frame writers.

    A frame writer owns an output directory and serializes one snapshot per
    call to write(). Opening the writer prepares the directory.

    Example:
        with CSVWriter(run_dir) as writer:
            for snapshot in frames:
                writer.write(snapshot)
    """

    def __init__(self, directory: str | Path) -> None:
        """
        Initialize frame writer.

        Args:
            directory: Output directory.
        """
        self.directory = Path(directory)
        self._is_open = False
        self._n_frames = 0

    @abstractmethod
    def write(self, snapshot: ParticleSnapshot, **kwargs) -> Path:
        """
        Write a single frame.

        Args:
            snapshot: Snapshot to write.
            **kwargs: Format-specific options.

        Returns:
            Path of the written file.
        """
        ...

    def open(self) -> None:
        """Create the output directory if needed."""
        self.directory.mkdir(parents=True, exist_ok=True)
        self._is_open = True

    def close(self) -> None:
        """Close writer."""
        self._is_open = False

    @property
    def is_open(self) -> bool:
        """Whether the writer has been opened."""
        return self._is_open

    def __enter__(self) -> FrameWriter:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @property
    def n_frames(self) -> int:
        """Number of frames written."""
        return self._n_frames
