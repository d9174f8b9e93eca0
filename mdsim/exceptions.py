"""Named, non-fatal simulation conditions.

These are warning categories rather than exceptions: each one marks a
condition the simulation records and then carries on past.
"""

from __future__ import annotations


class SimulationWarning(UserWarning):
    """Base class for all recoverable simulation conditions."""


class InvalidParticleCount(SimulationWarning):
    """Particle count is not a perfect cube; the lattice is malformed."""


class NumericalSingularity(SimulationWarning):
    """Non-finite accelerations, usually from coincident particles."""


class PersistenceFailure(SimulationWarning):
    """A frame or run directory could not be written."""
