"""Force field implementations."""

from .base import AccelerationProvider
from .lj import LennardJonesForceField, pair_force_magnitude

__all__ = ["AccelerationProvider", "LennardJonesForceField", "pair_force_magnitude"]
