"""Initial positions and velocities."""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidParticleCount
from .state import ParticleSystem

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..forcefields import AccelerationProvider

logger = logging.getLogger(__name__)

DEFAULT_SEED = 1


def particles_per_edge(n_particles: int) -> tuple[int, bool]:
    """
    Return the lattice edge length k and whether n_particles == k**3.

    For a non-cube count k is the integer part of the cube root.
    """
    if n_particles < 1:
        raise ValueError(f"n_particles must be >= 1, got {n_particles}")
    root = float(np.cbrt(n_particles))
    k = int(round(root))
    if k**3 == n_particles:
        return k, True
    return max(int(np.floor(root)), 1), False


def init_grid(n_particles: int) -> NDArray[np.floating]:
    """
    Place particles on a simple cubic lattice with unit spacing.

    Particle i gets (x, y, z) by counting: x runs fastest through [0, k),
    then y advances, then z, where k is the cube root of n_particles.
    A count that is not a perfect cube is reported with an
    InvalidParticleCount warning and filled using the same counting with k
    rounded down, so the lattice spills past the k x k x k cube.

    Args:
        n_particles: Number of particles N.

    Returns:
        Positions array of shape (3, N).
    """
    k, is_cube = particles_per_edge(n_particles)
    if not is_cube:
        msg = (
            f"Wrong size of particles: {n_particles} is not a perfect cube, "
            f"lattice edge truncated to {k}"
        )
        logger.warning(msg)
        warnings.warn(msg, InvalidParticleCount, stacklevel=2)

    index = np.arange(n_particles)
    positions = np.empty((3, n_particles), dtype=np.float64)
    positions[0] = index % k
    positions[1] = (index // k) % k
    positions[2] = index // (k * k)
    return positions


def init_velocities(
    n_particles: int,
    seed: int | None = DEFAULT_SEED,
    std: float = 2.0,
    rng: np.random.Generator | None = None,
) -> NDArray[np.floating]:
    """
    Draw velocity components from a normal distribution.

    Every component is sampled independently from N(0, std^2), particle by
    particle (x, y, z). This is a rough stand-in for a Maxwell-Boltzmann
    distribution and is not scaled to any temperature.

    Args:
        n_particles: Number of particles N.
        seed: Seed for the generator. The default is fixed, so repeated
            runs draw the same velocities.
        std: Standard deviation of each component.
        rng: Generator to draw from instead of seeding a new one.

    Returns:
        Velocities array of shape (3, N).
    """
    if rng is None:
        rng = np.random.default_rng(seed)
    draws = rng.normal(0.0, std, size=(n_particles, 3))
    return np.ascontiguousarray(draws.T)


def create_system(
    config: SimulationConfig, force_field: AccelerationProvider
) -> ParticleSystem:
    """
    Build the initial particle system for a run.

    Positions come from the lattice, velocities from the seeded normal
    draw, and accelerations are evaluated once at the initial positions.
    """
    positions = init_grid(config.n_particles)
    velocities = init_velocities(
        config.n_particles, seed=config.seed, std=config.velocity_std
    )
    accelerations = force_field.compute_accelerations(positions)
    logger.debug("Initialized %d particles (seed=%s)", config.n_particles, config.seed)
    return ParticleSystem(
        positions=positions, velocities=velocities, accelerations=accelerations
    )
