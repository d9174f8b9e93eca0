"""Boundary handling for the simulation box."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from .box import BoxBounds


class BoundaryCondition(ABC):
    """
    Abstract base class for boundary conditions.

    A boundary condition is applied after every integration step and may
    modify positions and/or velocities in place.
    """

    @abstractmethod
    def apply(
        self, positions: NDArray[np.floating], velocities: NDArray[np.floating]
    ) -> None:
        """
        Apply the boundary condition in place.

        Args:
            positions: Positions array of shape (3, N).
            velocities: Velocities array of shape (3, N).
        """
        ...


class ReflectiveBoundary(BoundaryCondition):
    """
    Closed box with reflecting walls.

    For each particle and axis independently, a coordinate strictly beyond
    the upper bound or strictly below the lower bound flips the sign of the
    matching velocity component. Positions are left where they are, so a
    particle may stay outside for a step and be flipped again while it is
    still out. A coordinate exactly on a bound is not reflected.

    With ``closed=False`` the boundary does nothing (open boxes are not
    implemented).

    Attributes:
        bounds: Box bounds.
        closed: Whether walls reflect.
    """

    def __init__(self, bounds: BoxBounds, closed: bool = True) -> None:
        """
        Initialize reflective boundary.

        Args:
            bounds: Box bounds.
            closed: Reflect at the walls when True, no-op when False.
        """
        self.bounds = bounds
        self.closed = closed
        self._lower = bounds.lower[:, np.newaxis]
        self._upper = bounds.upper[:, np.newaxis]

    def outside(self, positions: NDArray[np.floating]) -> NDArray[np.bool_]:
        """Return a (3, N) mask of coordinates strictly outside their axis range."""
        return (positions > self._upper) | (positions < self._lower)

    def apply(
        self, positions: NDArray[np.floating], velocities: NDArray[np.floating]
    ) -> None:
        """Negate velocity components whose coordinate has left the box."""
        if not self.closed:
            return
        mask = self.outside(positions)
        velocities[mask] *= -1.0
