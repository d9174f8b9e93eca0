"""Simulation driver and reporters."""

from .engine import SimulationDriver
from .reporters import (
    AsyncReporter,
    CSVReporter,
    EnergyReporter,
    Reporter,
    ReporterGroup,
    TrajectoryReporter,
)

__all__ = [
    "SimulationDriver",
    "Reporter",
    "ReporterGroup",
    "AsyncReporter",
    "CSVReporter",
    "TrajectoryReporter",
    "EnergyReporter",
]
