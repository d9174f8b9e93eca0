"""Frame format implementations."""

from .csv import (
    CSVWriter,
    create_run_directory,
    frame_filename,
    read_frame,
    run_directory_name,
    write_positions,
)

__all__ = [
    "CSVWriter",
    "create_run_directory",
    "frame_filename",
    "read_frame",
    "run_directory_name",
    "write_positions",
]
