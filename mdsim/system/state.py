"""Particle system state representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


def _check_shapes(
    positions: NDArray[np.floating],
    velocities: NDArray[np.floating],
    accelerations: NDArray[np.floating],
) -> None:
    """Enforce the shared (3, N) layout with N >= 1."""
    if positions.ndim != 2 or positions.shape[0] != 3:
        raise ValueError(f"positions must have shape (3, N), got {positions.shape}")
    if positions.shape[1] < 1:
        raise ValueError("a particle system needs at least one particle")
    if velocities.shape != positions.shape:
        raise ValueError(
            f"velocities shape {velocities.shape} incompatible with "
            f"positions shape {positions.shape}"
        )
    if accelerations.shape != positions.shape:
        raise ValueError(
            f"accelerations shape {accelerations.shape} incompatible with "
            f"positions shape {positions.shape}"
        )


@dataclass
class ParticleSystem:
    """
    Mutable state of N particles in three dimensions.

    Each container holds one column per particle and one row per spatial
    component, so ``positions[:, i]`` is the position of particle i.
    The integrator updates the arrays in place.

    Attributes:
        positions: Particle positions, shape (3, N).
        velocities: Particle velocities, shape (3, N).
        accelerations: Particle accelerations, shape (3, N).
        time: Current simulation time.
        step: Number of completed integration steps.
    """

    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    accelerations: NDArray[np.floating]
    time: float = 0.0
    step: int = 0

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.positions = np.array(self.positions, dtype=np.float64)
        self.velocities = np.array(self.velocities, dtype=np.float64)
        self.accelerations = np.array(self.accelerations, dtype=np.float64)
        _check_shapes(self.positions, self.velocities, self.accelerations)

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return self.positions.shape[1]

    @classmethod
    def create(
        cls,
        positions: ArrayLike,
        velocities: ArrayLike | None = None,
        accelerations: ArrayLike | None = None,
        time: float = 0.0,
        step: int = 0,
    ) -> ParticleSystem:
        """
        Create a ParticleSystem with optional velocity/acceleration arrays.

        Args:
            positions: Particle positions, shape (3, N).
            velocities: Particle velocities, shape (3, N). Defaults to zeros.
            accelerations: Accelerations, shape (3, N). Defaults to zeros.
            time: Current simulation time.
            step: Current step number.

        Returns:
            New ParticleSystem instance.
        """
        positions = np.asarray(positions, dtype=np.float64)

        if velocities is None:
            velocities = np.zeros_like(positions)
        if accelerations is None:
            accelerations = np.zeros_like(positions)

        return cls(
            positions=positions,
            velocities=velocities,
            accelerations=accelerations,
            time=time,
            step=step,
        )

    def copy(self) -> ParticleSystem:
        """Create a deep copy of this system."""
        return ParticleSystem(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            accelerations=self.accelerations.copy(),
            time=self.time,
            step=self.step,
        )

    def freeze(self) -> ParticleSnapshot:
        """Create an immutable snapshot of this system."""
        return ParticleSnapshot(
            positions=self.positions,
            velocities=self.velocities,
            accelerations=self.accelerations,
            time=self.time,
            step=self.step,
        )

    def kinetic_energy(self, mass: float = 1.0) -> float:
        """Compute total kinetic energy sum(0.5 * m * v^2) for uniform mass."""
        return float(0.5 * mass * np.sum(self.velocities**2))

    @property
    def center_of_mass(self) -> NDArray[np.floating]:
        """Compute center of mass position (uniform masses)."""
        return self.positions.mean(axis=1)


@dataclass(frozen=True)
class ParticleSnapshot:
    """
    Immutable snapshot of a particle system.

    Handed to reporters so that output can run behind the integration loop
    without seeing later mutations.
    """

    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    accelerations: NDArray[np.floating]
    time: float
    step: int

    def __post_init__(self) -> None:
        """Copy the arrays and make the copies read-only."""
        for name in ("positions", "velocities", "accelerations"):
            array = np.array(getattr(self, name), dtype=np.float64)
            array.flags.writeable = False
            object.__setattr__(self, name, array)
        _check_shapes(self.positions, self.velocities, self.accelerations)

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return self.positions.shape[1]

    def kinetic_energy(self, mass: float = 1.0) -> float:
        """Compute total kinetic energy for uniform mass."""
        return float(0.5 * mass * np.sum(self.velocities**2))

    def thaw(self) -> ParticleSystem:
        """Create a mutable copy of this snapshot."""
        return ParticleSystem(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            accelerations=self.accelerations.copy(),
            time=self.time,
            step=self.step,
        )
