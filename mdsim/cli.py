"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from collections.abc import Sequence

from . import __author__, __version__
from .config import SimulationConfig
from .engines.reporters import DEFAULT_QUEUE_SIZE
from .simulate import run_simulation
from .utils import setup_logging

logger = logging.getLogger(__name__)


def banner() -> str:
    """Return the startup banner."""
    return (
        f"Molecular Dynamic Simulation (Ver. {__version__})\n"
        f"by {__author__}"
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdsim",
        description="Lennard-Jones molecular dynamics in a reflective box",
    )
    parser.add_argument("--config", help="JSON file with SimulationConfig fields")
    parser.add_argument("--particles", type=int, dest="n_particles",
                        help="number of particles (a perfect cube)")
    parser.add_argument("--steps", type=int, dest="n_steps", help="number of steps")
    parser.add_argument("--timestep", type=float, help="integration timestep")
    parser.add_argument("--sigma", type=float, help="Lennard-Jones sigma")
    parser.add_argument("--epsilon", type=float, help="Lennard-Jones epsilon")
    parser.add_argument("--mass", type=float, help="particle mass")
    parser.add_argument("--seed", type=int, help="seed for the initial velocities")
    parser.add_argument("--output-dir", help="where the run directory is created")
    parser.add_argument("--no-serialize", action="store_true",
                        help="do not write CSV frames")
    parser.add_argument("--open", action="store_true",
                        help="disable reflecting walls (open box)")
    parser.add_argument("--detect-singularities", action="store_true",
                        help="warn on non-finite accelerations")
    parser.add_argument("--backend", choices=["serial", "multiprocessing"],
                        help="force evaluation backend")
    parser.add_argument("--workers", type=int, dest="n_workers",
                        help="worker processes for the multiprocessing backend")
    parser.add_argument("--async-output", action="store_true",
                        help="write frames from a background thread")
    parser.add_argument("--queue-size", type=int, default=DEFAULT_QUEUE_SIZE,
                        help="frames buffered for --async-output "
                        f"(default: {DEFAULT_QUEUE_SIZE})")
    parser.add_argument("--log-level", default="INFO", help="log level (default: INFO)")
    parser.add_argument("--log-file", help="also log to this file")
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Combine the optional config file with command line overrides."""
    if args.config:
        config = SimulationConfig.from_json(args.config)
    else:
        config = SimulationConfig()

    overrides = {
        "n_particles": args.n_particles,
        "n_steps": args.n_steps,
        "timestep": args.timestep,
        "sigma": args.sigma,
        "epsilon": args.epsilon,
        "mass": args.mass,
        "seed": args.seed,
        "output_dir": args.output_dir,
        "backend": args.backend,
        "n_workers": args.n_workers,
    }
    if args.no_serialize:
        overrides["serialize"] = False
    if args.open:
        overrides["closed"] = False
    if args.detect_singularities:
        overrides["detect_singularities"] = True
    return config.replace(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a simulation from the command line; returns the exit status."""
    args = build_parser().parse_args(argv)

    print(banner())
    setup_logging(args.log_level, args.log_file)

    try:
        config = config_from_args(args)
        if args.queue_size < 1:
            raise ValueError(f"--queue-size must be >= 1, got {args.queue_size}")
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    stop_event = threading.Event()

    def _request_stop(signum, frame):
        logger.warning("Interrupt received, stopping after the current step")
        stop_event.set()

    previous = signal.signal(signal.SIGINT, _request_stop)
    try:
        result = run_simulation(
            config,
            async_output=args.async_output,
            stop_event=stop_event,
            queue_size=args.queue_size,
        )
    finally:
        signal.signal(signal.SIGINT, previous)

    if result.run_directory is not None:
        logger.info("Frames written to %s", result.run_directory)
    logger.info(
        "Completed %d of %d step(s) (%.1f steps/s)",
        result.n_steps,
        config.n_steps,
        result.performance.get("steps_per_second", 0.0),
    )
    return 0 if result.completed else 1


if __name__ == "__main__":
    sys.exit(main())
