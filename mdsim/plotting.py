"""
Plotting utilities for particle systems and recorded runs.

Example:
    >>> from mdsim import plotting
    >>> plotting.positions(result.system, bounds=config.bounds)
    >>> plotting.save("final.png")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .engines import EnergyReporter, TrajectoryReporter
    from .system import BoxBounds, ParticleSnapshot, ParticleSystem

# Try to import matplotlib, but don't fail if not available
try:
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None

logger = logging.getLogger(__name__)


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with: pip install matplotlib"
        )


def _draw_box(ax, bounds: BoxBounds) -> None:
    """Draw the 12 edges of the box."""
    lower, upper = bounds.lower, bounds.upper
    corners = np.array(
        [
            [x, y, z]
            for x in (lower[0], upper[0])
            for y in (lower[1], upper[1])
            for z in (lower[2], upper[2])
        ]
    )
    for a in range(8):
        for b in range(a + 1, 8):
            # Corners differing in exactly one coordinate share an edge
            if np.count_nonzero(corners[a] != corners[b]) == 1:
                ax.plot(*zip(corners[a], corners[b]), color="gray", lw=0.8, alpha=0.6)


def positions(
    system: ParticleSystem | ParticleSnapshot,
    bounds: BoxBounds | None = None,
    show: bool = True,
    figsize: tuple[float, float] = (7, 7),
):
    """
    3D scatter plot of particle positions.

    Args:
        system: Particle system or snapshot.
        bounds: Optional box outline to draw.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Returns:
        The matplotlib figure.
    """
    _check_matplotlib()

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(projection="3d")

    x, y, z = system.positions
    ax.scatter(x, y, z, s=20, c=np.arange(system.n_particles), cmap="viridis")

    if bounds is not None:
        _draw_box(ax, bounds)

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.set_title(f"{system.n_particles} particles, step {system.step}")

    if show:
        plt.show()
    return fig


def energy(
    reporter: EnergyReporter,
    show: bool = True,
    figsize: tuple[float, float] = (10, 6),
):
    """
    Plot energy time series.

    Shows kinetic, potential, and total energy vs time, and the relative
    drift of the total energy.

    Args:
        reporter: EnergyReporter that recorded the run.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Returns:
        The matplotlib figure.
    """
    _check_matplotlib()

    fig, axes = plt.subplots(1, 2, figsize=figsize)
    times = reporter.times
    total = reporter.total_energy

    ax = axes[0]
    ax.plot(times, reporter.kinetic_energy, "b-", label="Kinetic", alpha=0.7, lw=0.8)
    ax.plot(times, reporter.potential_energy, "r-", label="Potential", alpha=0.7, lw=0.8)
    ax.plot(times, total, "k-", label="Total", lw=1.5)
    ax.set_xlabel("Time")
    ax.set_ylabel("Energy")
    ax.set_title("Energy vs Time")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    if len(total) > 0:
        e0 = total[0]
        rel_error = (total - e0) / abs(e0) * 100 if e0 != 0 else total * 0
        ax.plot(times, rel_error, "k-", lw=1)
        ax.axhline(y=0, color="r", linestyle="--", alpha=0.5)
    ax.set_xlabel("Time")
    ax.set_ylabel("Relative Energy Error (%)")
    ax.set_title("Energy Conservation")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()
    return fig


def trajectory(
    reporter: TrajectoryReporter,
    particles: list[int] | None = None,
    bounds: BoxBounds | None = None,
    show: bool = True,
    figsize: tuple[float, float] = (7, 7),
):
    """
    Plot 3D paths of selected particles.

    Args:
        reporter: TrajectoryReporter that recorded the run.
        particles: Particle indices to draw (default: first 5).
        bounds: Optional box outline to draw.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Returns:
        The matplotlib figure.
    """
    _check_matplotlib()

    frames = reporter.positions
    if frames.size == 0:
        raise ValueError("No frames recorded")

    if particles is None:
        particles = list(range(min(5, frames.shape[2])))

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(projection="3d")
    for i in particles:
        path = frames[:, :, i]
        ax.plot(path[:, 0], path[:, 1], path[:, 2], lw=1, label=f"particle {i}")
        ax.scatter(*path[-1], s=25)

    if bounds is not None:
        _draw_box(ax, bounds)

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.legend(fontsize="small")

    if show:
        plt.show()
    return fig


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save the current figure to a file.

    Args:
        filename: Output filename (e.g., "plot.png", "plot.pdf").
        dpi: Resolution in dots per inch.
    """
    _check_matplotlib()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")
    logger.info("Saved plot to %s", filename)


def show() -> None:
    """Display all pending plots."""
    _check_matplotlib()
    plt.show()
