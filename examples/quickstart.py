#!/usr/bin/env python
"""
Quick start example - the simplest way to run a simulation.

Runs a short version of the reference setup (64 particles, sigma = 0.1)
without writing frames, then a reduced-unit run that writes one CSV frame
per step into a fresh run directory.

Usage:
    python examples/quickstart.py
"""

import tempfile

from mdsim import SimulationConfig, simulate
from mdsim.utils import setup_logging


def main():
    setup_logging("INFO")

    print("=" * 60)
    print("mdsim Quick Start")
    print("=" * 60)

    # 1. Reference parameters, short run, nothing on disk
    print("\n1. Reference setup (1000 steps, no output):")
    print("-" * 40)
    config = SimulationConfig(n_steps=1000, serialize=False)
    result = simulate.run_simulation(config)
    print(f"   Steps run: {result.n_steps}")
    print(f"   Kinetic energy: {result.system.kinetic_energy(config.mass):.4f}")
    print(f"   Steps/s: {result.performance['steps_per_second']:.0f}")

    # 2. Reduced units with CSV frames
    print("\n2. Reduced units (27 particles, CSV frames):")
    print("-" * 40)
    with tempfile.TemporaryDirectory() as tmp:
        config = SimulationConfig(
            n_particles=27,
            n_steps=20,
            sigma=1.0,
            timestep=1e-4,
            output_dir=tmp,
        )
        result = simulate.run_simulation(config, async_output=True)
        frames = sorted(result.run_directory.glob("mds-*.csv"))
        print(f"   Run directory: {result.run_directory.name}")
        print(f"   Frames written: {len(frames)}")

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
