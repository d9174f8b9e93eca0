"""Simulation configuration."""

from __future__ import annotations

import dataclasses
import json
import logging
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .system.box import BoxBounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Physical and run parameters of a simulation.

    The defaults reproduce the reference setup: 64 particles in a cube of
    edge 4, sigma = 0.1, epsilon = 1, unit mass, a timestep of 1e-6 and one
    million steps with per-step CSV output.

    Attributes:
        sigma: Lennard-Jones size parameter.
        epsilon: Lennard-Jones well depth.
        mass: Mass of every particle.
        n_particles: Number of particles (should be a perfect cube).
        timestep: Integration timestep.
        n_steps: Number of integration steps.
        serialize: Write a CSV frame after every step.
        closed: Reflect particles at the box walls.
        seed: Seed for the velocity draw.
        velocity_std: Standard deviation of each velocity component.
        detect_singularities: Warn on non-finite accelerations.
        output_dir: Directory in which the run directory is created.
        backend: Parallel backend name for the force evaluation.
        n_workers: Worker count for the multiprocessing backend.
    """

    sigma: float = 1.0e-1
    epsilon: float = 1.0
    mass: float = 1.0
    n_particles: int = 64
    timestep: float = 1.0e-6
    n_steps: int = 1_000_000
    serialize: bool = True
    closed: bool = True
    seed: int | None = 1
    velocity_std: float = 2.0
    detect_singularities: bool = False
    output_dir: str = "."
    backend: str = "serial"
    n_workers: int | None = None

    def __post_init__(self) -> None:
        """Validate parameter types and ranges."""
        for name in ("n_particles", "n_steps", "seed", "n_workers"):
            value = getattr(self, name)
            if value is None and name in ("seed", "n_workers"):
                continue
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in ("sigma", "epsilon", "mass", "timestep", "velocity_std"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.n_particles < 1:
            raise ValueError(f"n_particles must be >= 1, got {self.n_particles}")
        if self.n_steps < 0:
            raise ValueError(f"n_steps must be >= 0, got {self.n_steps}")
        if self.backend not in ("serial", "multiprocessing"):
            raise ValueError(
                f"Unknown backend: {self.backend}. Available: serial, multiprocessing"
            )
        if self.n_workers is not None and self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")

    @property
    def bounds(self) -> BoxBounds:
        """Box bounds derived from the particle count."""
        return BoxBounds.from_particle_count(self.n_particles)

    def backend_options(self) -> dict[str, Any]:
        """Keyword arguments for creating the configured backend."""
        if self.backend == "multiprocessing" and self.n_workers is not None:
            return {"n_workers": self.n_workers}
        return {}

    def replace(self, **overrides: Any) -> SimulationConfig:
        """Return a copy with some fields replaced; None values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dictionary."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        """
        Create a configuration from a dictionary.

        Raises:
            ValueError: If the dictionary has unknown keys.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str | Path) -> SimulationConfig:
        """Load a configuration from a JSON file."""
        path = Path(path)
        logger.info("Loading configuration from %s", path)
        try:
            with path.open() as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error("Configuration file not found at %s", path)
            raise
        except json.JSONDecodeError:
            logger.error("Error decoding JSON from %s", path)
            raise
        return cls.from_dict(data)
