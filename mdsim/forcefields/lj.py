"""Lennard-Jones force implementation."""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import NumericalSingularity
from ..parallel import ParallelBackend, get_backend
from .base import AccelerationProvider

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


def pair_force_magnitude(
    distance: ArrayLike, sigma: float = 1.0, epsilon: float = 1.0
) -> NDArray[np.floating]:
    """
    Lennard-Jones pair force magnitude along the separation vector.

    F(d) = 24 * epsilon * (2 * (sigma/d)^13 - (sigma/d)^7) / d

    Positive values push the pair apart, negative values pull it together;
    the sign changes at d = 2^(1/6) * sigma.

    Args:
        distance: Pair separation(s).
        sigma: Size parameter.
        epsilon: Well depth.

    Returns:
        Force magnitude(s), same shape as distance.
    """
    d = np.asarray(distance, dtype=np.float64)
    sig_over_r = sigma / d
    return 24.0 * epsilon * (2.0 * sig_over_r**13 - sig_over_r**7) / d


def _accelerations_for_rows(
    positions: NDArray[np.floating],
    start: int,
    stop: int,
    sigma: float,
    epsilon: float,
    mass: float,
) -> NDArray[np.floating]:
    """
    Accelerations of particles start..stop-1 from their higher-indexed partners.

    Each particle i only collects F(d) * r / d over j > i with r = P[j] - P[i];
    no reaction is applied to j. The per-row sum runs in j order, so any
    split of rows across workers reproduces the serial result exactly.
    """
    block = np.zeros((3, stop - start), dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for col, i in enumerate(range(start, stop)):
            dr = positions[:, i + 1 :] - positions[:, i : i + 1]
            inv_r = 1.0 / np.linalg.norm(dr, axis=0)

            sig_over_r = sigma * inv_r
            force_mag = (
                24.0 * epsilon * (2.0 * sig_over_r**13 - sig_over_r**7) * inv_r
            )

            block[:, col] = np.sum(dr * (force_mag * inv_r), axis=1)

    return block / mass


class LennardJonesForceField(AccelerationProvider):
    """
    Brute-force Lennard-Jones interaction between identical particles.

    All pairs are evaluated (O(N^2), no cutoff, no neighbor list). The
    contribution of pair (i, j), j > i, is accumulated on particle i only.

    Coincident particles (d = 0) give infinite or NaN accelerations that are
    returned as-is. With ``detect_singularities=True`` such results are also
    reported as a NumericalSingularity warning.

    Attributes:
        sigma: Size parameter.
        epsilon: Well depth.
        mass: Mass of every particle.
        backend: Parallel backend used for the outer particle loop.
        detect_singularities: Report non-finite accelerations.
    """

    def __init__(
        self,
        sigma: float,
        epsilon: float,
        mass: float = 1.0,
        backend: ParallelBackend | str | None = None,
        detect_singularities: bool = False,
    ) -> None:
        """
        Initialize Lennard-Jones force field.

        Args:
            sigma: Size parameter (> 0).
            epsilon: Well depth (> 0).
            mass: Particle mass (> 0).
            backend: Parallel backend or backend name. Defaults to serial.
            detect_singularities: Warn when accelerations are not finite.
        """
        if sigma <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")

        self.sigma = float(sigma)
        self.epsilon = float(epsilon)
        self.mass = float(mass)
        self.backend = get_backend(backend)
        self.detect_singularities = detect_singularities

    @classmethod
    def from_config(
        cls, config: SimulationConfig, backend: ParallelBackend | None = None
    ) -> LennardJonesForceField:
        """Create a force field from a simulation configuration."""
        if backend is None:
            backend = get_backend(config.backend, **config.backend_options())
        return cls(
            sigma=config.sigma,
            epsilon=config.epsilon,
            mass=config.mass,
            backend=backend,
            detect_singularities=config.detect_singularities,
        )

    def pair_force(self, distance: ArrayLike) -> NDArray[np.floating]:
        """Pair force magnitude with this field's parameters."""
        return pair_force_magnitude(distance, self.sigma, self.epsilon)

    def compute_accelerations(
        self, positions: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute Lennard-Jones accelerations.

        Args:
            positions: Positions array of shape (3, N).

        Returns:
            Accelerations array of shape (3, N).
        """
        positions = np.asarray(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[0] != 3:
            raise ValueError(f"positions must have shape (3, N), got {positions.shape}")

        n = positions.shape[1]
        blocks = self.backend.partition_rows(n)
        results = self.backend.starmap(
            _accelerations_for_rows,
            [
                (positions, start, stop, self.sigma, self.epsilon, self.mass)
                for start, stop in blocks
            ],
        )
        accelerations = np.concatenate(results, axis=1)

        if self.detect_singularities:
            self._check_finite(accelerations)

        return accelerations

    def _check_finite(self, accelerations: NDArray[np.floating]) -> None:
        bad = ~np.all(np.isfinite(accelerations), axis=0)
        if np.any(bad):
            indices = np.flatnonzero(bad)
            msg = (
                f"Non-finite accelerations for {len(indices)} particle(s), "
                f"first index {indices[0]}; coincident particles?"
            )
            logger.error(msg)
            warnings.warn(msg, NumericalSingularity, stacklevel=3)

    def potential_energy(self, positions: NDArray[np.floating]) -> float:
        """
        Compute total Lennard-Jones energy.

        V = sum_{i<j} 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]
        """
        positions = np.asarray(positions, dtype=np.float64)
        n = positions.shape[1]
        if n < 2:
            return 0.0

        i_indices, j_indices = np.triu_indices(n, k=1)
        dr = positions[:, j_indices] - positions[:, i_indices]
        r = np.linalg.norm(dr, axis=0)

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            sig_over_r_6 = (self.sigma / r) ** 6
            sig_over_r_12 = sig_over_r_6**2
            energy = 4.0 * self.epsilon * np.sum(sig_over_r_12 - sig_over_r_6)

        return float(energy)
