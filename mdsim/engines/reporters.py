"""Reporter implementations for simulation output."""

from __future__ import annotations

import datetime
import logging
import queue
import threading
import warnings
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ..exceptions import PersistenceFailure
from ..io.formats.csv import CSVWriter, create_run_directory

if TYPE_CHECKING:
    from ..forcefields import AccelerationProvider
    from ..system import ParticleSnapshot, ParticleSystem

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """
    Abstract base class for simulation reporters.

    Reporters are the per-step sinks of a run. They receive immutable
    snapshots, so a reporter may keep or process them at its own pace.
    """

    @abstractmethod
    def report(self, snapshot: ParticleSnapshot) -> None:
        """
        Handle the snapshot taken after a completed step.

        Args:
            snapshot: Frozen state after the step.
        """
        ...

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Return reporting frequency (every N steps)."""
        ...

    def should_report(self, step: int) -> bool:
        """Check if reporter should run at this step."""
        return step % self.frequency == 0

    def initialize(self, snapshot: ParticleSnapshot) -> None:
        """Initialize reporter (called before the first step)."""
        pass

    def finalize(self, snapshot: ParticleSnapshot) -> None:
        """Finalize reporter (called after the last step)."""
        pass


class ReporterGroup:
    """
    Collection of reporters with automatic frequency handling.

    A snapshot is only taken when at least one reporter fires, and is
    shared between all reporters of that step.
    """

    def __init__(self, reporters: list[Reporter] | None = None) -> None:
        """
        Initialize reporter group.

        Args:
            reporters: List of reporters to manage.
        """
        self._reporters: list[Reporter] = list(reporters) if reporters else []

    def __len__(self) -> int:
        return len(self._reporters)

    def add(self, reporter: Reporter) -> None:
        """Add a reporter to the group."""
        self._reporters.append(reporter)

    def remove(self, reporter: Reporter) -> None:
        """Remove a reporter from the group."""
        self._reporters.remove(reporter)

    def initialize(self, system: ParticleSystem) -> None:
        """Initialize all reporters."""
        if not self._reporters:
            return
        snapshot = system.freeze()
        for reporter in self._reporters:
            reporter.initialize(snapshot)

    def report(self, system: ParticleSystem) -> None:
        """Run all reporters that should fire at this step."""
        snapshot = None
        for reporter in self._reporters:
            if reporter.should_report(system.step):
                if snapshot is None:
                    snapshot = system.freeze()
                reporter.report(snapshot)

    def finalize(self, system: ParticleSystem) -> None:
        """Finalize all reporters."""
        if not self._reporters:
            return
        snapshot = system.freeze()
        for reporter in self._reporters:
            reporter.finalize(snapshot)


class CSVReporter(Reporter):
    """
    Reporter that writes the positions of every step to CSV files.

    The run directory is created when the run starts. Output is best
    effort: an OSError while creating the directory or writing a frame is
    logged and raised as a PersistenceFailure warning, and the simulation
    carries on.
    """

    def __init__(
        self,
        output_dir: str | Path = ".",
        frequency: int = 1,
        precision: int = 6,
        start_time: datetime.datetime | None = None,
    ) -> None:
        """
        Initialize CSV reporter.

        Args:
            output_dir: Directory in which the run directory is created.
            frequency: Reporting frequency (every N steps).
            precision: Significant digits per coordinate.
            start_time: Time used for the run directory name. Defaults to
                the local time when the run starts.
        """
        self._output_dir = Path(output_dir)
        self._frequency = frequency
        self._precision = precision
        self._start_time = start_time
        self._writer: CSVWriter | None = None
        self._n_failures = 0

    @property
    def frequency(self) -> int:
        return self._frequency

    @property
    def directory(self) -> Path | None:
        """Run directory, once created."""
        return self._writer.directory if self._writer is not None else None

    @property
    def n_frames(self) -> int:
        """Number of frames written."""
        return self._writer.n_frames if self._writer is not None else 0

    @property
    def n_failures(self) -> int:
        """Number of failed writes, including a failed directory creation."""
        return self._n_failures

    def _fail(self, msg: str) -> None:
        self._n_failures += 1
        logger.warning(msg)
        warnings.warn(msg, PersistenceFailure, stacklevel=3)

    def initialize(self, snapshot: ParticleSnapshot) -> None:
        """Create the run directory."""
        try:
            run_dir = create_run_directory(self._output_dir, self._start_time)
        except OSError as exc:
            self._fail(f"Could not create run directory in {self._output_dir}: {exc}")
            return

        self._writer = CSVWriter(run_dir, precision=self._precision)
        self._writer.open()
        logger.info("Writing frames to %s", run_dir)

    def report(self, snapshot: ParticleSnapshot) -> None:
        """Write one frame; failures are reported, not raised."""
        if self._writer is None:
            return
        try:
            self._writer.write(snapshot)
        except OSError as exc:
            self._fail(f"Could not write frame for step {snapshot.step}: {exc}")

    def finalize(self, snapshot: ParticleSnapshot) -> None:
        """Close the writer."""
        if self._writer is not None:
            self._writer.close()
            logger.info(
                "Wrote %d frame(s), %d failure(s)", self._writer.n_frames, self._n_failures
            )


class TrajectoryReporter(Reporter):
    """
    Reporter that keeps frozen snapshots for plotting and comparisons.

    Snapshots are immutable copies, so the reporter stores them as they
    arrive and stacks arrays on demand.
    """

    def __init__(self, frequency: int = 100, include_velocities: bool = False) -> None:
        self._frequency = frequency
        self._include_velocities = include_velocities
        self._frames: list[ParticleSnapshot] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, snapshot: ParticleSnapshot) -> None:
        self._frames.append(snapshot)

    @property
    def n_frames(self) -> int:
        return len(self._frames)

    @property
    def positions(self) -> np.ndarray:
        """Positions as an (n_frames, 3, N) array."""
        return np.array([frame.positions for frame in self._frames])

    @property
    def velocities(self) -> np.ndarray | None:
        """Velocities as an (n_frames, 3, N) array, or None if not kept."""
        if not self._include_velocities:
            return None
        return np.array([frame.velocities for frame in self._frames])

    @property
    def times(self) -> np.ndarray:
        return np.array([frame.time for frame in self._frames])

    @property
    def steps(self) -> np.ndarray:
        return np.array([frame.step for frame in self._frames], dtype=np.int64)


class EnergyReporter(Reporter):
    """
    Reporter that tracks kinetic and potential energy over time.

    The potential energy costs an extra O(N^2) pass, so keep the frequency
    coarse for large systems.
    """

    def __init__(
        self,
        force_field: AccelerationProvider,
        mass: float = 1.0,
        frequency: int = 100,
    ) -> None:
        """
        Initialize energy reporter.

        Args:
            force_field: Provider of the potential energy.
            mass: Particle mass for the kinetic energy.
            frequency: Reporting frequency.
        """
        self._force_field = force_field
        self._mass = mass
        self._frequency = frequency
        self._times: list[float] = []
        self._kinetic: list[float] = []
        self._potential: list[float] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, snapshot: ParticleSnapshot) -> None:
        """Record energies."""
        self._times.append(snapshot.time)
        self._kinetic.append(snapshot.kinetic_energy(self._mass))
        self._potential.append(self._force_field.potential_energy(snapshot.positions))

    @property
    def kinetic_energy(self) -> np.ndarray:
        """Return kinetic energy time series."""
        return np.array(self._kinetic)

    @property
    def potential_energy(self) -> np.ndarray:
        """Return potential energy time series."""
        return np.array(self._potential)

    @property
    def total_energy(self) -> np.ndarray:
        """Return total energy time series."""
        return self.kinetic_energy + self.potential_energy

    @property
    def times(self) -> np.ndarray:
        """Return times array."""
        return np.array(self._times)


_STOP = object()

# Snapshots held in flight before the integration loop waits for the writer
DEFAULT_QUEUE_SIZE = 64


class AsyncReporter(Reporter):
    """
    Run another reporter on a background thread.

    Snapshots are handed over through a queue so the integration loop does
    not wait for slow sinks such as disk output. The queue is bounded, so
    the loop blocks once the worker falls ``maxsize`` frames behind and
    memory stays flat on long runs.
    finalize() drains the queue, joins the worker and re-raises the first
    error the wrapped reporter hit.
    """

    def __init__(self, reporter: Reporter, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        """
        Initialize async reporter.

        Args:
            reporter: Reporter to run in the background.
            maxsize: Queue bound (>= 1).
        """
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self._reporter = reporter
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._error: BaseException | None = None

    @property
    def reporter(self) -> Reporter:
        """Return the wrapped reporter."""
        return self._reporter

    @property
    def frequency(self) -> int:
        return self._reporter.frequency

    def should_report(self, step: int) -> bool:
        return self._reporter.should_report(step)

    def initialize(self, snapshot: ParticleSnapshot) -> None:
        """Initialize the wrapped reporter and start the worker."""
        self._reporter.initialize(snapshot)
        self._error = None
        self._thread = threading.Thread(
            target=self._worker, name="mdsim-reporter", daemon=True
        )
        self._thread.start()

    def _worker(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                if self._error is None:
                    self._reporter.report(item)
            except Exception as exc:
                logger.exception("Background reporter failed")
                self._error = exc
            finally:
                self._queue.task_done()

    def report(self, snapshot: ParticleSnapshot) -> None:
        """Queue the snapshot for the worker."""
        if self._thread is None:
            raise RuntimeError("AsyncReporter used before initialize()")
        self._queue.put(snapshot)

    def finalize(self, snapshot: ParticleSnapshot) -> None:
        """Drain the queue, stop the worker and finalize the wrapped reporter."""
        if self._thread is not None:
            self._queue.put(_STOP)
            self._thread.join()
            self._thread = None
        self._reporter.finalize(snapshot)
        if self._error is not None:
            error, self._error = self._error, None
            raise error
