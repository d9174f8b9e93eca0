"""Base interface for acceleration providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray


class AccelerationProvider(ABC):
    """
    Abstract base class for force evaluation.

    Everything the integrator can drive implements this interface: given
    the current positions it returns one acceleration vector per particle.
    Implementations must not modify their input.
    """

    @abstractmethod
    def compute_accelerations(
        self, positions: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute accelerations on all particles.

        Args:
            positions: Positions array of shape (3, N).

        Returns:
            Accelerations array of shape (3, N).
        """
        ...

    def potential_energy(self, positions: NDArray[np.floating]) -> float:
        """
        Compute the potential energy of a configuration.

        Default implementation returns 0; subclasses should override when
        an energy is defined.

        Args:
            positions: Positions array of shape (3, N).

        Returns:
            Potential energy.
        """
        return 0.0
