"""System state, box and initial conditions."""

from .boundary import BoundaryCondition, ReflectiveBoundary
from .box import BoxBounds
from .lattice import create_system, init_grid, init_velocities
from .state import ParticleSnapshot, ParticleSystem

__all__ = [
    "BoundaryCondition",
    "ReflectiveBoundary",
    "BoxBounds",
    "ParticleSystem",
    "ParticleSnapshot",
    "create_system",
    "init_grid",
    "init_velocities",
]
