"""Simulation box bounds."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class BoxBounds:
    """
    Axis-aligned rectangular box.

    The six faces follow the (left, right, top, bottom, front, back) naming:
    x spans [left, right], y spans [bottom, top] and z spans [front, back].

    Attributes:
        left: Lower x bound.
        right: Upper x bound.
        top: Upper y bound.
        bottom: Lower y bound.
        front: Lower z bound.
        back: Upper z bound.
    """

    left: float
    right: float
    top: float
    bottom: float
    front: float
    back: float

    def __post_init__(self) -> None:
        """Validate that every axis has a non-negative extent."""
        names = ("left", "right", "top", "bottom", "front", "back")
        for name, value in zip(names, self.as_tuple()):
            object.__setattr__(self, name, float(value))
        if self.right < self.left or self.top < self.bottom or self.back < self.front:
            raise ValueError(f"Box bounds are inverted: {self.as_tuple()}")

    @classmethod
    def cubic(cls, length: float, origin: float = 0.0) -> BoxBounds:
        """Create a cube with the given edge length starting at origin."""
        upper = origin + length
        return cls(
            left=origin, right=upper, top=upper, bottom=origin, front=origin, back=upper
        )

    @classmethod
    def from_particle_count(cls, n_particles: int) -> BoxBounds:
        """
        Derive the box from the particle count.

        The edge length is the cube root of N, i.e. one lattice spacing per
        particle along each edge. Only well defined for perfect cubes.
        """
        if n_particles < 1:
            raise ValueError(f"n_particles must be >= 1, got {n_particles}")
        return cls.cubic(float(np.cbrt(n_particles)))

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        """Return (left, right, top, bottom, front, back)."""
        return (self.left, self.right, self.top, self.bottom, self.front, self.back)

    @property
    def lower(self) -> NDArray[np.floating]:
        """Lower bounds per axis, shape (3,)."""
        return np.array([self.left, self.bottom, self.front], dtype=np.float64)

    @property
    def upper(self) -> NDArray[np.floating]:
        """Upper bounds per axis, shape (3,)."""
        return np.array([self.right, self.top, self.back], dtype=np.float64)

    @property
    def lengths(self) -> NDArray[np.floating]:
        """Return edge lengths [lx, ly, lz]."""
        return self.upper - self.lower

    @property
    def volume(self) -> float:
        """Return box volume."""
        return float(np.prod(self.lengths))

    def contains(self, positions: NDArray[np.floating]) -> NDArray[np.bool_]:
        """
        Check which particles lie inside the box (bounds inclusive).

        Args:
            positions: Positions array of shape (3, N).

        Returns:
            Boolean array of shape (N,).
        """
        positions = np.asarray(positions)
        inside = (positions >= self.lower[:, np.newaxis]) & (
            positions <= self.upper[:, np.newaxis]
        )
        return np.all(inside, axis=0)
