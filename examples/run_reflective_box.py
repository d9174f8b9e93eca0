#!/usr/bin/env python
"""
Example: Lennard-Jones particles in a reflective box, assembled by hand.

This script demonstrates how to:
1. Place particles on a cubic lattice with seeded velocities
2. Set up the force field, integrator and reflecting walls
3. Run the driver with in-memory reporters
4. Plot the final positions and the energy history

Usage:
    python examples/run_reflective_box.py
"""

import numpy as np

from mdsim import SimulationConfig, plotting
from mdsim.engines import EnergyReporter, SimulationDriver, TrajectoryReporter
from mdsim.forcefields import LennardJonesForceField
from mdsim.integrators import VelocityVerletIntegrator
from mdsim.system import create_system
from mdsim.utils import setup_logging


def main():
    setup_logging("INFO")

    config = SimulationConfig(
        n_particles=27,
        n_steps=2000,
        sigma=1.0,
        timestep=1e-4,
        velocity_std=0.5,
        serialize=False,
    )

    force_field = LennardJonesForceField.from_config(config)
    system = create_system(config, force_field)
    integrator = VelocityVerletIntegrator.from_config(config, force_field)

    trajectory = TrajectoryReporter(frequency=20)
    energy = EnergyReporter(force_field, mass=config.mass, frequency=20)
    driver = SimulationDriver(system, integrator, [trajectory, energy])

    driver.run(config.n_steps)

    inside = config.bounds.contains(system.positions)
    print(f"Final time: {system.time:.4f}")
    print(f"Particles inside the box: {np.count_nonzero(inside)} / {system.n_particles}")
    print(f"Center of mass: {system.center_of_mass}")

    try:
        plotting.positions(system, bounds=config.bounds, show=False)
        plotting.save("positions.png")
        plotting.energy(energy, show=False)
        plotting.save("energy.png")
        plotting.trajectory(trajectory, bounds=config.bounds, show=False)
        plotting.save("trajectory.png")
    except ImportError:
        print("matplotlib not installed, skipping plots")


if __name__ == "__main__":
    main()
