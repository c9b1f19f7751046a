"""Convenience entrypoint for the sky scene package.

`run()` builds an `Application` from a `Config`; `main()` is the console
script and parses the same flags as the repository launcher.
"""
import argparse
import logging
from typing import Optional

from skyscene.config import DEFAULT_FPS, Config

_logger = logging.getLogger("skyscene.launcher")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Animated time-and-weather sky")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--state", help="start with an override code such as 14a or 6e")
    parser.add_argument("--lat", type=float, help="latitude for weather detection")
    parser.add_argument("--lon", type=float, help="longitude for weather detection")
    parser.add_argument("--no-detect", action="store_true", help="skip weather detection (Clear)")
    parser.add_argument("--seed", type=int, help="seed for particle and lightning randomness")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS)
    parser.add_argument("--demo-speed", type=float, default=0.0,
                        help="run a simulated clock at this many hours per second")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        fps=max(1, args.fps),
        latitude=args.lat,
        longitude=args.lon,
        detect_weather=not args.no_detect,
        seed=args.seed,
        debug=args.debug,
        initial_state=args.state,
    )


def run(config: Optional[Config] = None, demo_speed: float = 0.0) -> None:
    """Run the sky application until its window is closed."""
    from skyscene.app import Application

    clock = None
    if demo_speed:
        from skyscene.systems.time_system import ManualClock, SystemClock

        clock = ManualClock(SystemClock().current_hour(), hours_per_second=demo_speed)
    app = Application(config, clock=clock)
    app.run()


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    try:
        run(config, demo_speed=args.demo_speed)
    except Exception as e:
        _logger.exception("Failed to start application: %s", e)
        raise


if __name__ == "__main__":
    main()
