"""I/O layer for per-step frame output."""

from .base import FrameWriter
from .formats.csv import CSVWriter, create_run_directory, read_frame, run_directory_name

__all__ = [
    "FrameWriter",
    "CSVWriter",
    "create_run_directory",
    "read_frame",
    "run_directory_name",
]
