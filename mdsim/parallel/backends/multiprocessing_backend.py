"""Multiprocessing backend using Python's multiprocessing module."""

from __future__ import annotations

import logging
import multiprocessing as mp
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor
from typing import Any

from .base import ParallelBackend

logger = logging.getLogger(__name__)


class MultiprocessingBackend(ParallelBackend):
    """
    Multiprocessing backend for shared-memory parallelism.

    Uses a process pool for CPU-bound work on a single node. The pool is
    created on first use and kept alive until close() so that per-step
    force evaluations do not pay the start-up cost each time.
    """

    def __init__(self, n_workers: int | None = None) -> None:
        """
        Initialize multiprocessing backend.

        Args:
            n_workers: Number of worker processes. Defaults to CPU count.
        """
        if n_workers is not None and n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")
        self._n_workers = n_workers or mp.cpu_count()
        self._executor: ProcessPoolExecutor | None = None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "multiprocessing"

    @property
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        return self._n_workers

    def _get_executor(self) -> ProcessPoolExecutor:
        if self._executor is None:
            logger.debug("Starting process pool with %d workers", self._n_workers)
            self._executor = ProcessPoolExecutor(max_workers=self._n_workers)
        return self._executor

    def starmap(
        self,
        func: Callable[..., Any],
        args_list: Sequence[tuple[Any, ...]],
    ) -> list[Any]:
        """
        Apply function to argument tuples in parallel.

        Args:
            func: Function to apply (must be picklable).
            args_list: List of argument tuples.

        Returns:
            Results for each argument tuple, in input order.
        """
        if len(args_list) == 0:
            return []

        executor = self._get_executor()
        return list(executor.map(func, *zip(*args_list)))

    def close(self) -> None:
        """Shut down the process pool."""
        if self._executor is not None:
            self._executor.shutdown()
            self._executor = None

    def __enter__(self) -> MultiprocessingBackend:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
