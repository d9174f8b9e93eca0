"""Tests for initial positions and velocities."""

import warnings

import numpy as np
import pytest

from mdsim.config import SimulationConfig
from mdsim.exceptions import InvalidParticleCount
from mdsim.forcefields import LennardJonesForceField
from mdsim.system.lattice import (
    create_system,
    init_grid,
    init_velocities,
    particles_per_edge,
)


class TestGrid:
    """Simple cubic lattice placement."""

    def test_eight_particles(self):
        """N = 8 fills the unit cube corners with x fastest."""
        positions = init_grid(8)

        expected = np.array(
            [
                [0, 0, 0],
                [1, 0, 0],
                [0, 1, 0],
                [1, 1, 0],
                [0, 0, 1],
                [1, 0, 1],
                [0, 1, 1],
                [1, 1, 1],
            ],
            dtype=float,
        ).T
        np.testing.assert_array_equal(positions, expected)

    def test_single_particle(self):
        """N = 1 sits at the origin."""
        np.testing.assert_array_equal(init_grid(1), np.zeros((3, 1)))

    def test_cube_is_filled_once(self):
        """Every lattice site of a perfect cube is used exactly once."""
        positions = init_grid(64)

        assert positions.shape == (3, 64)
        sites = {tuple(p) for p in positions.T}
        assert len(sites) == 64
        assert positions.min() == 0.0
        assert positions.max() == 3.0

    def test_perfect_cube_does_not_warn(self):
        """No warning for perfect cubes."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            init_grid(27)
            init_grid(1000)

    def test_malformed_size_is_reported(self):
        """N = 10 warns but still returns a (3, 10) array."""
        with pytest.warns(InvalidParticleCount):
            positions = init_grid(10)

        assert positions.shape == (3, 10)
        assert np.all(np.isfinite(positions))
        # Counting continues past the 2 x 2 x 2 cube
        np.testing.assert_array_equal(positions[:, 8], [0, 0, 2])
        np.testing.assert_array_equal(positions[:, 9], [1, 0, 2])

    def test_malformed_size_is_logged(self, caplog):
        """The malformed size also goes to the log."""
        with pytest.warns(InvalidParticleCount):
            init_grid(10)
        assert "not a perfect cube" in caplog.text

    def test_particles_per_edge(self):
        """Edge length and cube check."""
        assert particles_per_edge(64) == (4, True)
        assert particles_per_edge(1000) == (10, True)
        assert particles_per_edge(10) == (2, False)
        assert particles_per_edge(2) == (1, False)

    def test_invalid_count(self):
        """N must be at least one."""
        with pytest.raises(ValueError):
            init_grid(0)


class TestVelocities:
    """Normal-distributed initial velocities."""

    def test_shape(self):
        """One column per particle."""
        assert init_velocities(8).shape == (3, 8)

    def test_default_seed_is_reproducible(self):
        """Two default draws are identical."""
        np.testing.assert_array_equal(init_velocities(27), init_velocities(27))

    def test_seed_changes_draw(self):
        """Different seeds give different velocities."""
        assert not np.array_equal(init_velocities(27, seed=1), init_velocities(27, seed=2))

    def test_injected_generator(self):
        """A caller-provided generator is used as-is."""
        expected = init_velocities(5, rng=np.random.default_rng(99))
        actual = init_velocities(5, seed=99)
        np.testing.assert_array_equal(actual, expected)

    def test_distribution(self):
        """Components are centred on zero with standard deviation 2."""
        velocities = init_velocities(20000, seed=3)
        assert abs(velocities.mean()) < 0.05
        assert velocities.std() == pytest.approx(2.0, rel=0.03)


class TestCreateSystem:
    """Assembling the initial particle system."""

    def test_accelerations_match_positions(self):
        """Initial accelerations are evaluated at the initial positions."""
        config = SimulationConfig(n_particles=8, sigma=1.0, serialize=False)
        force_field = LennardJonesForceField(sigma=1.0, epsilon=1.0)

        system = create_system(config, force_field)

        np.testing.assert_array_equal(system.positions, init_grid(8))
        np.testing.assert_array_equal(system.velocities, init_velocities(8, seed=1))
        np.testing.assert_array_equal(
            system.accelerations, force_field.compute_accelerations(init_grid(8))
        )
        assert system.step == 0
