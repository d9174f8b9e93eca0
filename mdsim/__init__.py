"""
mdsim - Lennard-Jones molecular dynamics in a reflective box.

Components:
- ParticleSystem: (3, N) position, velocity and acceleration buffers
- LennardJonesForceField: brute-force pairwise accelerations
- VelocityVerletIntegrator: one force evaluation per step
- ReflectiveBoundary: velocity reflection at the box walls
- SimulationDriver: step loop with reporters and cancellation

Quick Start:
    >>> from mdsim import SimulationConfig, simulate
    >>> config = SimulationConfig(n_particles=8, n_steps=10, serialize=False)
    >>> result = simulate.run_simulation(config)
"""

__version__ = "1.0.0"
__author__ = "mdsim developers"

from . import simulate
from .config import SimulationConfig
from .engines import SimulationDriver
from .exceptions import (
    InvalidParticleCount,
    NumericalSingularity,
    PersistenceFailure,
    SimulationWarning,
)
from .forcefields import LennardJonesForceField
from .integrators import VelocityVerletIntegrator
from .system import BoxBounds, ParticleSystem, ReflectiveBoundary

__all__ = [
    "simulate",
    "SimulationConfig",
    "SimulationDriver",
    "LennardJonesForceField",
    "VelocityVerletIntegrator",
    "ReflectiveBoundary",
    "BoxBounds",
    "ParticleSystem",
    "SimulationWarning",
    "InvalidParticleCount",
    "NumericalSingularity",
    "PersistenceFailure",
]
