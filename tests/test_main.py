"""Tests for the command line flags."""

from __future__ import annotations

from skyscene.config import DEFAULT_FPS
from skyscene.main import build_parser, config_from_args


def _config(*argv):
    return config_from_args(build_parser().parse_args(list(argv)))


def test_defaults() -> None:
    config = _config()
    assert config.fps == DEFAULT_FPS
    assert config.detect_weather
    assert config.initial_state is None
    assert config.latitude is None and config.longitude is None


def test_flags() -> None:
    config = _config("--state", "6e", "--lat", "52.5", "--lon", "13.4", "--no-detect",
                     "--seed", "7", "--fps", "0", "--debug")
    assert config.initial_state == "6e"
    assert (config.latitude, config.longitude) == (52.5, 13.4)
    assert not config.detect_weather
    assert config.seed == 7
    assert config.fps == 1
    assert config.debug


def test_demo_speed_is_parsed() -> None:
    args = build_parser().parse_args(["--demo-speed", "2.5"])
    assert args.demo_speed == 2.5
