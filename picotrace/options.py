"""Command-line options for the renderer."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Iterator, Sequence

Vec3 = tuple[float, float, float]

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


def _lenient_float(text: str) -> float:
    """Parse the longest numeric prefix of ``text``; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(0)) if match else 0.0


def _lenient_int(text: str) -> int:
    """Parse the longest integer prefix of ``text``; 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(0)) if match else 0


class Option(enum.IntFlag):
    """Flags recording which options were given explicitly."""

    CAMERA_POSITION = 1
    CAMERA_DIRECTION = 1 << 1
    CAMERA_NAME = 1 << 2
    SKYBOX = 1 << 3
    SCENE_FILE = 1 << 4
    OUTPUT_FILE = 1 << 5
    RESOLUTION = 1 << 6
    SAMPLE_COUNT = 1 << 7
    SUN_DIRECTION = 1 << 8
    SUN_COLOUR = 1 << 9
    DENOISE = 1 << 10
    TONE_MAP = 1 << 11


@dataclass
class Options:
    """Renderer settings, with the defaults used when no flag overrides them."""

    camera_position: Vec3 = (0.0, 0.0, 0.0)
    camera_direction: Vec3 = (1.0, 0.0, 0.0)
    camera_name: str = "MainCamera"
    skybox: str = "skybox"
    scene_file: str = "./scene.json"
    output_file: str = "./output.hdr"
    resolution: tuple[int, int] = (1920, 1080)
    sample_count: int = 256
    sun_direction: Vec3 = (0.0, -1.0, 0.0)
    sun_colour: Vec3 = (1.0, 1.0, 1.0)
    denoise: bool = False
    tonemap: bool = False
    given: Option = field(default=Option(0))

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "Options":
        """Build options from command-line arguments (program name excluded).

        Unknown arguments are reported and skipped. A flag missing its values
        raises ValueError.
        """
        options = cls()
        args = iter(argv)

        def take(flag: str) -> str:
            try:
                return next(args)
            except StopIteration:
                raise ValueError(f"missing value for {flag}") from None

        def take_vec3(flag: str) -> Vec3:
            return (
                _lenient_float(take(flag)),
                _lenient_float(take(flag)),
                _lenient_float(take(flag)),
            )

        for arg in _iterate(args):
            if arg == "-Skybox":
                options.skybox = take(arg)
                options.given |= Option.SKYBOX
            elif arg == "-CameraPosition":
                options.camera_position = take_vec3(arg)
                options.given |= Option.CAMERA_POSITION
            elif arg == "-CameraDirection":
                options.camera_direction = take_vec3(arg)
                options.given |= Option.CAMERA_DIRECTION
            elif arg == "-Camera":
                options.camera_name = take(arg)
                options.given |= Option.CAMERA_NAME
            elif arg == "-Scene":
                options.scene_file = take(arg)
                options.given |= Option.SCENE_FILE
            elif arg == "-OutputFile":
                options.output_file = take(arg)
                options.given |= Option.OUTPUT_FILE
            elif arg == "-Resolution":
                width = _lenient_int(take(arg))
                height = _lenient_int(take(arg))
                options.resolution = (width, height)
                options.given |= Option.RESOLUTION
            elif arg == "-SampleCount":
                options.sample_count = _lenient_int(take(arg))
                options.given |= Option.SAMPLE_COUNT
            elif arg == "-SunDirection":
                options.sun_direction = take_vec3(arg)
                options.given |= Option.SUN_DIRECTION
            elif arg == "-SunColour":
                options.sun_colour = take_vec3(arg)
                options.given |= Option.SUN_COLOUR
            elif arg == "-Denoise":
                options.denoise = True
                options.given |= Option.DENOISE
            elif arg == "-Tonemap":
                options.tonemap = True
                options.given |= Option.TONE_MAP
            else:
                print(f"Unrecognised command {arg} ")
        return options

    def has_option(self, option: Option) -> bool:
        """Return True if any of the flags in ``option`` was given explicitly."""
        return bool(self.given & option)


def _iterate(args: Iterator[str]) -> Iterator[str]:
    # Yields from a shared iterator so flag handlers can consume their values.
    while True:
        try:
            yield next(args)
        except StopIteration:
            return