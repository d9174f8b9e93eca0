"""Velocity Verlet integrator implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Integrator

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..forcefields import AccelerationProvider
    from ..system import BoundaryCondition, ParticleSystem


class VelocityVerletIntegrator(Integrator):
    """
    Velocity Verlet (Stoermer-Verlet) integrator.

    Algorithm:
        r(t + dt) = r(t) + dt * v(t) + 0.5 * dt^2 * a(t)
        a(t + dt) = accel(r(t + dt))
        v(t + dt) = v(t) + 0.5 * dt * (a(t) + a(t + dt))

    followed by the boundary condition. The system must enter the first
    step with accelerations evaluated at its current positions; after
    every step they hold a(t + dt), ready for the next one.

    Properties:
    - Symplectic and time-reversible (without boundary reflections)
    - One force evaluation per step
    - Deterministic for a deterministic force evaluation

    Attributes:
        dt: Integration timestep.
        force_field: Source of accelerations.
        boundary: Boundary condition applied after each step.
    """

    def __init__(
        self,
        dt: float,
        force_field: AccelerationProvider,
        boundary: BoundaryCondition | None = None,
    ) -> None:
        """
        Initialize Velocity Verlet integrator.

        Args:
            dt: Integration timestep (> 0).
            force_field: Acceleration provider evaluated once per step.
            boundary: Optional boundary condition.
        """
        if dt <= 0:
            raise ValueError(f"timestep must be positive, got {dt}")
        self._dt = float(dt)
        self.force_field = force_field
        self.boundary = boundary

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        force_field: AccelerationProvider,
    ) -> VelocityVerletIntegrator:
        """Create an integrator with the configured timestep and box walls."""
        from ..system import ReflectiveBoundary

        boundary = ReflectiveBoundary(config.bounds, closed=config.closed)
        return cls(dt=config.timestep, force_field=force_field, boundary=boundary)

    @property
    def timestep(self) -> float:
        """Return the integration timestep."""
        return self._dt

    def step(self, system: ParticleSystem) -> ParticleSystem:
        """
        Perform one Velocity Verlet step in place.

        Args:
            system: Particle system whose accelerations match its positions.

        Returns:
            The updated system.
        """
        dt = self._dt

        # Drift with the current acceleration
        system.positions += system.velocities * dt + 0.5 * system.accelerations * dt**2

        # New accelerations at the updated positions
        accel_old = system.accelerations
        accel_new = self.force_field.compute_accelerations(system.positions)

        # Kick with the sum of old and new accelerations
        system.velocities += 0.5 * (accel_old + accel_new) * dt
        system.accelerations = accel_new

        if self.boundary is not None:
            self.boundary.apply(system.positions, system.velocities)

        system.time += dt
        system.step += 1

        return system
