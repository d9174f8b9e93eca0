"""Simulation driver implementation."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from .reporters import Reporter, ReporterGroup

if TYPE_CHECKING:
    from ..integrators import Integrator
    from ..system import ParticleSystem

logger = logging.getLogger(__name__)


class SimulationDriver:
    """
    Runs an integrator for a number of steps.

    Each step advances the system once and then hands a snapshot to the
    reporters that fire at that step. A stop request (stop() or the shared
    ``stop_event``) is honoured at step boundaries only, so the system is
    never left half-way through a step.

    Example usage:
        force_field = LennardJonesForceField(sigma=0.1, epsilon=1.0)
        system = create_system(config, force_field)
        integrator = VelocityVerletIntegrator.from_config(config, force_field)
        driver = SimulationDriver(system, integrator)
        driver.add_reporter(CSVReporter("."))
        driver.run(n_steps=1000)

    Attributes:
        system: Particle system, mutated in place.
        integrator: Time integration algorithm.
    """

    def __init__(
        self,
        system: ParticleSystem,
        integrator: Integrator,
        reporters: list[Reporter] | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        """
        Initialize simulation driver.

        Args:
            system: Initial particle system, accelerations already evaluated.
            integrator: Time integrator.
            reporters: Optional per-step sinks.
            stop_event: Event checked before every step; set it to end the
                run early. It stays set until cleared by the caller.
        """
        self._system = system
        self._integrator = integrator
        self._reporters = ReporterGroup(reporters)
        self._stop_event = stop_event if stop_event is not None else threading.Event()

        self._total_steps = 0
        self._wall_time = 0.0

    @property
    def system(self) -> ParticleSystem:
        """Return current particle system."""
        return self._system

    @property
    def integrator(self) -> Integrator:
        """Return integrator."""
        return self._integrator

    @property
    def stop_event(self) -> threading.Event:
        """Return the cancellation event."""
        return self._stop_event

    @property
    def total_steps(self) -> int:
        """Steps performed by this driver across all runs."""
        return self._total_steps

    @property
    def performance(self) -> dict[str, float]:
        """Return performance statistics."""
        if self._wall_time == 0:
            return {"steps_per_second": 0.0, "wall_time": 0.0, "total_steps": 0}

        return {
            "steps_per_second": self._total_steps / self._wall_time,
            "wall_time": self._wall_time,
            "total_steps": self._total_steps,
        }

    def add_reporter(self, reporter: Reporter) -> None:
        """Add a reporter."""
        self._reporters.add(reporter)

    def remove_reporter(self, reporter: Reporter) -> None:
        """Remove a reporter."""
        self._reporters.remove(reporter)

    def step(self) -> None:
        """Perform a single step and report it."""
        self._integrator.step(self._system)
        self._reporters.report(self._system)

    def run(
        self,
        n_steps: int,
        callback: Callable[[SimulationDriver], bool] | None = None,
    ) -> ParticleSystem:
        """
        Run the simulation for a number of steps.

        Args:
            n_steps: Number of steps to run (0 leaves the system untouched).
            callback: Optional callback called after each step.
                      Return True to stop the simulation early.

        Returns:
            Final particle system.
        """
        if n_steps < 0:
            raise ValueError(f"n_steps must be >= 0, got {n_steps}")

        self._reporters.initialize(self._system)
        logger.info(
            "Running %d step(s) for %d particles (dt=%g)",
            n_steps,
            self._system.n_particles,
            self._integrator.timestep,
        )

        completed = 0
        start_time = time.perf_counter()

        try:
            for _ in range(n_steps):
                if self._stop_event.is_set():
                    logger.info("Stop requested after %d step(s)", completed)
                    break

                self.step()
                completed += 1

                if callback is not None and callback(self):
                    break
        finally:
            self._total_steps += completed
            self._wall_time += time.perf_counter() - start_time
            self._reporters.finalize(self._system)

        logger.info("Finished %d step(s) at t=%g", completed, self._system.time)
        return self._system

    def stop(self) -> None:
        """Signal the simulation to stop before its next step."""
        self._stop_event.set()
