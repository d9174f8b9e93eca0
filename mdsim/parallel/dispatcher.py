"""Backend lookup for the force evaluation."""

from __future__ import annotations

from .backends.base import ParallelBackend
from .backends.multiprocessing_backend import MultiprocessingBackend
from .backends.serial import SerialBackend

BACKENDS = ("serial", "multiprocessing")


def get_backend(backend: str | ParallelBackend | None = None, **kwargs) -> ParallelBackend:
    """
    Resolve a backend name or instance.

    Args:
        backend: A ParallelBackend (returned as is), a name from BACKENDS,
            or None for a new serial backend.
        **kwargs: Passed to the multiprocessing backend (n_workers).

    Returns:
        ParallelBackend instance.

    Raises:
        ValueError: If the name is unknown.
    """
    if isinstance(backend, ParallelBackend):
        return backend
    if backend is None or backend == "serial":
        return SerialBackend()
    if backend == "multiprocessing":
        return MultiprocessingBackend(**kwargs)
    raise ValueError(f"Unknown backend {backend!r}; expected one of {', '.join(BACKENDS)}")
