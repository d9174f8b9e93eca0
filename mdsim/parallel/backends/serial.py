"""Serial (single-process) backend."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .base import ParallelBackend


class SerialBackend(ParallelBackend):
    """
    Serial backend for single-process execution.

    This is the default backend and the reference for reproducibility:
    every other backend must produce bit-identical forces.
    """

    @property
    def name(self) -> str:
        """Return backend name."""
        return "serial"

    @property
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        return 1

    def starmap(
        self,
        func: Callable[..., Any],
        args_list: Sequence[tuple[Any, ...]],
    ) -> list[Any]:
        """Call func on each argument tuple in turn."""
        return [func(*args) for args in args_list]
