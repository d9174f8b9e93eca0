"""Tests for plotting helpers."""

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from mdsim import plotting  # noqa: E402
from mdsim.engines import EnergyReporter, SimulationDriver, TrajectoryReporter  # noqa: E402
from mdsim.forcefields import LennardJonesForceField  # noqa: E402
from mdsim.integrators import VelocityVerletIntegrator  # noqa: E402
from mdsim.system import BoxBounds, ParticleSystem  # noqa: E402
from mdsim.system.lattice import init_grid  # noqa: E402


@pytest.fixture
def recorded_run():
    """A short run with trajectory and energy recorded."""
    force_field = LennardJonesForceField(sigma=1.0, epsilon=1.0)
    positions = init_grid(8) * 1.2
    system = ParticleSystem.create(
        positions, accelerations=force_field.compute_accelerations(positions)
    )
    trajectory = TrajectoryReporter(frequency=1)
    energy = EnergyReporter(force_field, frequency=1)
    driver = SimulationDriver(
        system, VelocityVerletIntegrator(1e-3, force_field), [trajectory, energy]
    )
    driver.run(10)
    return system, trajectory, energy


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestPlots:
    """Figures are built without a display."""

    def test_positions(self, recorded_run):
        """Scatter plot with box outline."""
        system, _, _ = recorded_run
        fig = plotting.positions(system, bounds=BoxBounds.cubic(1.2), show=False)

        ax = fig.axes[0]
        # 12 box edges
        assert len(ax.lines) == 12
        assert "8 particles" in ax.get_title()

    def test_positions_of_snapshot(self, recorded_run):
        """Snapshots plot like systems."""
        system, _, _ = recorded_run
        fig = plotting.positions(system.freeze(), show=False)
        assert len(fig.axes[0].lines) == 0

    def test_energy(self, recorded_run):
        """Energy plot has two panels."""
        _, _, energy = recorded_run
        fig = plotting.energy(energy, show=False)

        assert len(fig.axes) == 2
        np.testing.assert_allclose(fig.axes[0].lines[2].get_ydata(), energy.total_energy)

    def test_trajectory(self, recorded_run):
        """One path per selected particle."""
        _, trajectory, _ = recorded_run
        fig = plotting.trajectory(trajectory, particles=[0, 3], show=False)
        assert len(fig.axes[0].lines) == 2

    def test_empty_trajectory(self):
        """Nothing recorded, nothing to plot."""
        with pytest.raises(ValueError):
            plotting.trajectory(TrajectoryReporter(), show=False)

    def test_save(self, recorded_run, tmp_path):
        """The current figure is written to disk."""
        system, _, _ = recorded_run
        plotting.positions(system, show=False)
        path = tmp_path / "positions.png"

        plotting.save(path)

        assert path.exists()
