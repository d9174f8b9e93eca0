"""
Determinism Gates.

These tests verify that simulations are reproducible.

Gates:
1. Serial determinism: identical results with the same seed
2. Parallel determinism: serial == parallel results, bit for bit
3. Output determinism: identical configs write identical frames
"""

import datetime

import numpy as np

from mdsim import SimulationConfig, simulate
from mdsim.engines import TrajectoryReporter
from mdsim.forcefields import LennardJonesForceField
from mdsim.io import read_frame
from mdsim.parallel.backends.multiprocessing_backend import MultiprocessingBackend
from mdsim.system.lattice import init_grid, init_velocities


def small_config(**overrides) -> SimulationConfig:
    """27 particles in reduced units, no output."""
    params = {
        "n_particles": 27,
        "n_steps": 30,
        "sigma": 1.0,
        "timestep": 1e-4,
        "serialize": False,
    }
    params.update(overrides)
    return SimulationConfig(**params)


class TestSerialDeterminism:
    """
    Gate: Serial execution must be deterministic.

    Same seed -> identical results.
    """

    def test_trajectory_determinism(self):
        """Gate: Same seed produces identical trajectories."""
        config = small_config(seed=42424)
        traj1 = TrajectoryReporter(frequency=1, include_velocities=True)
        traj2 = TrajectoryReporter(frequency=1, include_velocities=True)

        simulate.run_simulation(config, reporters=[traj1])
        simulate.run_simulation(config, reporters=[traj2])

        np.testing.assert_array_equal(
            traj1.positions,
            traj2.positions,
            err_msg="GATE FAILED: Trajectory not deterministic",
        )
        np.testing.assert_array_equal(
            traj1.velocities,
            traj2.velocities,
            err_msg="GATE FAILED: Velocities not deterministic",
        )

    def test_force_determinism(self):
        """Gate: Force calculations are deterministic."""
        positions = init_grid(27) * 1.1 + 0.01 * init_velocities(27, seed=33333)
        lj = LennardJonesForceField(sigma=1.0, epsilon=1.0)

        np.testing.assert_array_equal(
            lj.compute_accelerations(positions),
            lj.compute_accelerations(positions),
            err_msg="GATE FAILED: Forces not deterministic",
        )

    def test_velocity_seed(self):
        """Gate: The default seed gives the same initial velocities every time."""
        np.testing.assert_array_equal(
            init_velocities(64),
            init_velocities(64),
            err_msg="GATE FAILED: Velocity draw not reproducible",
        )


class TestParallelDeterminism:
    """
    Gate: Parallel execution must match serial.

    The force evaluation splits rows, never the sum inside a row, so the
    match is exact.
    """

    def test_parallel_forces(self):
        """Gate: Multiprocessing accelerations equal serial accelerations."""
        positions = init_grid(64) * 1.05 + 0.02 * init_velocities(64, seed=7)
        serial = LennardJonesForceField(sigma=1.0, epsilon=1.0)

        for n_workers in (2, 3, 4):
            with MultiprocessingBackend(n_workers=n_workers) as backend:
                parallel = LennardJonesForceField(sigma=1.0, epsilon=1.0, backend=backend)
                np.testing.assert_array_equal(
                    parallel.compute_accelerations(positions),
                    serial.compute_accelerations(positions),
                    err_msg=f"GATE FAILED: {n_workers} workers differ from serial",
                )

    def test_parallel_trajectory(self):
        """Gate: A multiprocessing run reproduces the serial run."""
        serial_result = simulate.run_simulation(small_config(n_steps=10))
        parallel_result = simulate.run_simulation(
            small_config(n_steps=10, backend="multiprocessing", n_workers=2)
        )

        np.testing.assert_array_equal(
            serial_result.system.positions,
            parallel_result.system.positions,
            err_msg="GATE FAILED: Parallel trajectory differs from serial",
        )

    def test_partition_coverage(self):
        """Gate: Partitioning covers all particles exactly once."""
        backend = MultiprocessingBackend(n_workers=7)
        covered = np.concatenate(
            [np.arange(start, stop) for start, stop in backend.partition_rows(100)]
        )
        np.testing.assert_array_equal(
            covered,
            np.arange(100),
            err_msg="GATE FAILED: Row partition is not a cover",
        )


class TestOutputDeterminism:
    """Gate: Frames are a pure function of the configuration."""

    def test_identical_frames(self, tmp_path):
        """Gate: Two runs, sync and async, write identical files."""
        start = datetime.datetime(2024, 1, 1, 12, 0, 0)
        roots = [tmp_path / "sync", tmp_path / "async"]
        results = []
        for root, async_output in zip(roots, (False, True)):
            root.mkdir()
            config = small_config(n_steps=5, serialize=True, output_dir=str(root))
            results.append(
                simulate.run_simulation(config, async_output=async_output, start_time=start)
            )

        for i in range(5):
            a = results[0].run_directory / f"mds-{i}.csv"
            b = results[1].run_directory / f"mds-{i}.csv"
            assert a.read_bytes() == b.read_bytes(), f"GATE FAILED: frame {i} differs"

        np.testing.assert_allclose(
            read_frame(results[0].run_directory / "mds-4.csv"),
            results[0].system.positions,
            rtol=1e-5,
        )
