"""
High-level simulation API.

Builds every component from a SimulationConfig and runs it.

Example:
    >>> from mdsim import SimulationConfig, simulate
    >>> config = SimulationConfig(n_particles=27, n_steps=100, serialize=False)
    >>> result = simulate.run_simulation(config)
    >>> result.system.positions.shape
    (3, 27)
"""

from __future__ import annotations

import datetime
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

from .config import SimulationConfig
from .engines import AsyncReporter, CSVReporter, Reporter, SimulationDriver
from .engines.reporters import DEFAULT_QUEUE_SIZE
from .forcefields import LennardJonesForceField
from .integrators import VelocityVerletIntegrator
from .system import ParticleSystem, create_system

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a simulation run."""

    system: ParticleSystem
    config: SimulationConfig
    n_steps: int = 0
    run_directory: Path | None = None
    performance: dict[str, float] = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        """Whether all configured steps were run."""
        return self.n_steps == self.config.n_steps


def build_driver(
    config: SimulationConfig,
    reporters: list[Reporter] | None = None,
    stop_event: threading.Event | None = None,
    force_field: LennardJonesForceField | None = None,
) -> SimulationDriver:
    """
    Assemble force field, initial system, integrator and driver.

    Args:
        config: Simulation configuration.
        reporters: Sinks to attach to the driver.
        stop_event: Optional cancellation event.
        force_field: Force field to use instead of one built from config.

    Returns:
        Driver ready to run.
    """
    if force_field is None:
        force_field = LennardJonesForceField.from_config(config)
    system = create_system(config, force_field)
    integrator = VelocityVerletIntegrator.from_config(config, force_field)
    return SimulationDriver(system, integrator, reporters, stop_event=stop_event)


def run_simulation(
    config: SimulationConfig,
    reporters: list[Reporter] | None = None,
    async_output: bool = False,
    stop_event: threading.Event | None = None,
    start_time: datetime.datetime | None = None,
    queue_size: int = DEFAULT_QUEUE_SIZE,
) -> SimulationResult:
    """
    Run a complete simulation.

    With ``config.serialize`` a CSVReporter writes one frame per step below
    ``config.output_dir``; ``async_output`` moves that writing onto a
    background thread, with at most ``queue_size`` frames waiting.

    Args:
        config: Simulation configuration.
        reporters: Additional reporters.
        async_output: Write CSV frames from a background thread.
        stop_event: Optional cancellation event, checked between steps.
        start_time: Time used to name the run directory.
        queue_size: Bound of the background output queue.

    Returns:
        SimulationResult with the final system.
    """
    reporters = list(reporters) if reporters else []

    csv_reporter = None
    if config.serialize:
        csv_reporter = CSVReporter(config.output_dir, start_time=start_time)
        if async_output:
            reporters.append(AsyncReporter(csv_reporter, maxsize=queue_size))
        else:
            reporters.append(csv_reporter)

    force_field = LennardJonesForceField.from_config(config)
    try:
        driver = build_driver(config, reporters, stop_event, force_field=force_field)
        start_step = driver.system.step
        system = driver.run(config.n_steps)
    finally:
        force_field.backend.close()

    return SimulationResult(
        system=system,
        config=config,
        n_steps=system.step - start_step,
        run_directory=csv_reporter.directory if csv_reporter is not None else None,
        performance=driver.performance,
    )
