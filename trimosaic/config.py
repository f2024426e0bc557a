"""
Render configuration shared by the pipeline stages, and the color parser
used to build it from command-line strings.
"""
import math
import re
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from matplotlib import colors as mcolors

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)

_BARE_HEX = re.compile(r"^([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_color(value) -> Color:
    """
    Convert a color specification into an 8-bit RGB triple

    Parameters
    ----------
    value: string or sequence
        A hex string with or without the leading '#' ("#ff8800",
        "ff8800", "f80"), any color name matplotlib knows ("white"), or
        an RGB sequence of integers in [0, 255]

    Returns
    -------
    tuple(int, int, int)
        The color with channels in [0, 255]
    """
    if not isinstance(value, str):
        channels = tuple(int(c) for c in value)
        if len(channels) != 3 or any(c < 0 or c > 255 for c in channels):
            raise ValueError("invalid RGB color {!r}".format(value))
        return channels
    text = value.strip()
    if _BARE_HEX.match(text):
        text = "#" + text
    try:
        rgb = mcolors.to_rgb(text)
    except ValueError as e:
        raise ValueError("invalid color {!r}".format(value)) from e
    return tuple(int(round(c * 255)) for c in rgb)


@dataclass(frozen=True)
class RenderConfig:
    """
    Snapshot of every tunable of a render job. Consulted read-only by the
    sampler, the colorizer and the drawer.
    """
    blur_factor: float = 1.0
    point_threshold: float = 10.0
    point_rate: float = 0.075
    max_points: int = 2500
    grayscale: bool = False
    wireframe_only: bool = False
    stroke_width: float = 0.1
    with_background: bool = True
    background_color: Color = WHITE
    stroke_color: Color = BLACK

    def __post_init__(self):
        if self.max_points < 0:
            raise ValueError("max_points must be non-negative, got {}".format(self.max_points))
        if not (self.point_rate >= 0 and math.isfinite(self.point_rate)):
            raise ValueError("point_rate must be a non-negative number, got {}".format(self.point_rate))
        if not (self.stroke_width >= 0 and math.isfinite(self.stroke_width)):
            raise ValueError("stroke_width must be a non-negative number, got {}".format(self.stroke_width))
        if math.isnan(self.point_threshold):
            raise ValueError("point_threshold must be a number")
        # Frozen, so normalize through object.__setattr__
        object.__setattr__(self, "background_color", parse_color(self.background_color))
        object.__setattr__(self, "stroke_color", parse_color(self.stroke_color))

    def background_rgba(self):
        """The background as an RGBA float array, transparent when disabled"""
        if not self.with_background:
            return np.zeros(4)
        return np.array(list(self.background_color) + [255], dtype=float)
