"""
Numerical Regression Gates.

These tests pin the numerical behaviour of the model against values that
can be worked out by hand. Any regression here blocks a merge.

Gates:
1. Pair force: sign change at 2^(1/6) sigma, exact value at sigma
2. Accumulation: each pair acts on its lower index only
3. Integration: velocity Verlet update formula
4. Boundary: exact velocity negation, no position clamping
5. Lattice: x-fastest ordering
"""

import numpy as np
import pytest

from mdsim.forcefields import LennardJonesForceField, pair_force_magnitude
from mdsim.integrators import VelocityVerletIntegrator
from mdsim.system import BoxBounds, ParticleSystem, ReflectiveBoundary
from mdsim.system.lattice import init_grid

R_MIN = 2.0 ** (1.0 / 6.0)


class TestPairForceGate:
    """Gate: Pair force shape."""

    @pytest.mark.parametrize("sigma", [0.1, 1.0, 3.4])
    def test_zero_crossing(self, sigma):
        """Gate: F changes sign at 2^(1/6) sigma."""
        r0 = R_MIN * sigma
        assert pair_force_magnitude(r0 * 0.99, sigma=sigma) > 0
        assert pair_force_magnitude(r0 * 1.01, sigma=sigma) < 0
        assert abs(pair_force_magnitude(r0, sigma=sigma)) < 1e-9 / sigma

    def test_reference_values(self):
        """Gate: Hand-computed magnitudes."""
        # F(d) = 24 (2 d^-13 - d^-7) / d for sigma = epsilon = 1
        for d in (0.9, 1.0, 1.5, 2.5):
            expected = 24.0 * (2.0 * d**-13 - d**-7) / d
            assert pair_force_magnitude(d) == pytest.approx(expected, rel=1e-12)


class TestAccumulationGate:
    """Gate: Only the lower-indexed particle of a pair is pushed."""

    def test_highest_index_feels_nothing(self):
        """Gate: The last particle always has zero acceleration."""
        positions = init_grid(27) * 1.1
        accelerations = LennardJonesForceField(sigma=1.0, epsilon=1.0).compute_accelerations(positions)

        np.testing.assert_array_equal(accelerations[:, -1], np.zeros(3))

    def test_net_force_is_not_zero(self):
        """Gate: The asymmetric sum leaves a net force on the system."""
        positions = np.array([[0.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
        accelerations = LennardJonesForceField(sigma=1.0, epsilon=1.0).compute_accelerations(positions)

        assert accelerations.sum(axis=1)[0] == pytest.approx(24.0)


class TestIntegrationGate:
    """Gate: One velocity Verlet step, worked by hand."""

    def test_two_particle_step(self):
        """Gate: Positions, velocities and accelerations after one step."""
        lj = LennardJonesForceField(sigma=1.0, epsilon=1.0)
        positions = np.array([[0.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
        system = ParticleSystem.create(
            positions, accelerations=lj.compute_accelerations(positions)
        )
        dt = 1e-3

        VelocityVerletIntegrator(dt, lj).step(system)

        # a0 = (24, 0, 0) on particle 0; particle 1 never moves
        x0 = 0.5 * 24.0 * dt**2
        d = 1.0 - x0
        a1 = pair_force_magnitude(d)
        np.testing.assert_allclose(system.positions[:, 0], [x0, 0.0, 0.0], rtol=1e-12)
        np.testing.assert_array_equal(system.positions[:, 1], [1.0, 0.0, 0.0])
        np.testing.assert_allclose(
            system.velocities[:, 0], [0.5 * (24.0 + a1) * dt, 0.0, 0.0], rtol=1e-12
        )
        np.testing.assert_allclose(system.accelerations[:, 0], [a1, 0.0, 0.0], rtol=1e-12)


class TestBoundaryGate:
    """Gate: Reflection is exact."""

    def test_exact_negation(self):
        """Gate: v -> -v bit for bit, position untouched."""
        boundary = ReflectiveBoundary(BoxBounds.cubic(1.0))
        positions = np.array([[1.0 + 1e-9], [0.5], [-1e-9]])
        velocities = np.array([[0.123456789], [1.0], [-0.987654321]])

        boundary.apply(positions, velocities)

        assert velocities[0, 0] == -0.123456789
        assert velocities[1, 0] == 1.0
        assert velocities[2, 0] == 0.987654321
        assert positions[0, 0] == 1.0 + 1e-9


class TestLatticeGate:
    """Gate: Lattice ordering."""

    def test_x_fastest(self):
        """Gate: Index i sits at (i % k, (i // k) % k, i // k^2)."""
        positions = init_grid(64)
        for i in range(64):
            np.testing.assert_array_equal(
                positions[:, i], [i % 4, (i // 4) % 4, i // 16]
            )
