"""
colors.py
===================
White-to-red color scale for temperature tiles.
"""

import math
from typing import Tuple

from thermal_heatmap.config import MIN_TEMP, MAX_TEMP


def scale_percent(value: float) -> float:
    """Position of value between MIN_TEMP and MAX_TEMP, clamped to [0, 1]. NaN maps to 0."""
    if math.isnan(value):
        return 0.0
    percent = (value - MIN_TEMP) / float(MAX_TEMP - MIN_TEMP)
    return min(max(percent, 0.0), 1.0)


def to_color(value: float) -> Tuple[int, int, int]:
    """
    Map a temperature to an opaque RGB color.
    MIN_TEMP and below is white, MAX_TEMP and above is red.
    """
    fade = int(255 - scale_percent(value) * 255)
    return 255, fade, fade


def to_rgba(value: float) -> Tuple[int, int, int, int]:
    return to_color(value) + (255,)


def to_hex(value: float) -> str:
    return "#{:02x}{:02x}{:02x}".format(*to_color(value))
