"""Parallel backend implementations."""

from .base import ParallelBackend
from .multiprocessing_backend import MultiprocessingBackend
from .serial import SerialBackend

__all__ = ["ParallelBackend", "SerialBackend", "MultiprocessingBackend"]
