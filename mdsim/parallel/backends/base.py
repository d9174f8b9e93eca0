"""Abstract base class for parallel backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any


class ParallelBackend(ABC):
    """
    Abstract base class for parallelization backends.

    The force evaluation hands independent blocks of work to a backend,
    allowing transparent switching between serial and process-based
    execution. Backends must return results in the order of their inputs.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name."""
        ...

    @property
    @abstractmethod
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        ...

    @abstractmethod
    def starmap(
        self,
        func: Callable[..., Any],
        args_list: Sequence[tuple[Any, ...]],
    ) -> list[Any]:
        """
        Apply function to argument tuples, preserving input order.

        Args:
            func: Function to apply (module-level, so it can be pickled).
            args_list: Argument tuples, one per work item.

        Returns:
            Results for each argument tuple.
        """
        ...

    def partition_rows(self, n_rows: int) -> list[tuple[int, int]]:
        """
        Split [0, n_rows) into contiguous blocks, one per worker.

        Leading blocks take one extra row when the split is uneven; empty
        blocks are dropped.

        Args:
            n_rows: Total number of rows (particles).

        Returns:
            List of (start, stop) index pairs covering [0, n_rows) in order.
        """
        rows_per_worker = n_rows // self.n_workers
        remainder = n_rows % self.n_workers

        blocks = []
        start = 0
        for rank in range(self.n_workers):
            size = rows_per_worker + (1 if rank < remainder else 0)
            if size == 0:
                continue
            blocks.append((start, start + size))
            start += size
        return blocks

    def close(self) -> None:
        """Release any worker resources."""
        pass
