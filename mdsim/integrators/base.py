"""Base interface for integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..system import ParticleSystem


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    Integrators advance a particle system forward in time by one timestep,
    mutating it in place.
    """

    @abstractmethod
    def step(self, system: ParticleSystem) -> ParticleSystem:
        """
        Advance the system by one time step.

        Args:
            system: Current particle system; updated in place.

        Returns:
            The same system, for chaining.
        """
        ...

    @property
    @abstractmethod
    def timestep(self) -> float:
        """Return the integration timestep."""
        ...
