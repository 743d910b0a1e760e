"""Colour-space helpers: RGB to HSV conversion and circular hue distance.

Hue is expressed in degrees in ``[0, 360)``; saturation and value are
percentages in ``[0, 100]``. Achromatic colours (max == min) get hue 0.
Scalar helpers are used for single colours (e.g. the key colour); the
``*_array`` variants apply the same formula to whole numpy images.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class HSVColor:
    hue: float
    saturation: float
    value: float


def rgb_to_hsv(r: int, g: int, b: int) -> HSVColor:
    """Convert one RGB triple (bytes in [0, 255]) to HSV.

    Doxygen:
    - @param r: Red channel.
    - @param g: Green channel.
    - @param b: Blue channel.
    - @return: HSVColor with hue in [0, 360), saturation/value in [0, 100].
    """
    mx = max(r, g, b)
    mn = min(r, g, b)
    delta = mx - mn

    if delta == 0:
        hue = 0.0
    elif mx == r:
        hue = 60.0 * (((g - b) / delta) % 6)
    elif mx == g:
        hue = 60.0 * ((b - r) / delta + 2)
    else:
        hue = 60.0 * ((r - g) / delta + 4)
    hue %= 360.0

    saturation = 0.0 if mx == 0 else delta / mx * 100.0
    value = mx / 255.0 * 100.0
    return HSVColor(hue=hue, saturation=saturation, value=value)


def rgb_to_hsv_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorised ``rgb_to_hsv`` over an array whose last axis is (R, G, B).

    Doxygen:
    - @param rgb: Array of shape (..., 3), any integer or float dtype in [0, 255].
    - @return: (hue, saturation, value) float32 arrays of shape rgb.shape[:-1].
    """
    rgb = rgb.astype(np.float32)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    mx = rgb.max(axis=-1)
    mn = rgb.min(axis=-1)
    delta = mx - mn
    safe_delta = np.where(delta == 0, np.float32(1.0), delta)

    # np.select picks the first matching condition, so ties favour R then G
    hue = np.select(
        [delta == 0, mx == r, mx == g],
        [
            np.float32(0.0),
            60.0 * np.mod((g - b) / safe_delta, 6),
            60.0 * ((b - r) / safe_delta + 2),
        ],
        default=60.0 * ((r - g) / safe_delta + 4),
    )
    hue = np.mod(hue, 360.0)

    saturation = np.where(mx == 0, np.float32(0.0), delta / np.where(mx == 0, np.float32(1.0), mx) * 100.0)
    value = mx / 255.0 * 100.0
    return hue, saturation, value


def hue_distance(h1: float, h2: float) -> float:
    """Shortest angular distance between two hues on the 360° wheel."""
    d = abs(h1 - h2)
    return 360.0 - d if d > 180 else d


def hue_distance_array(hues: np.ndarray, h: float) -> np.ndarray:
    d = np.abs(hues - h)
    return np.where(d > 180, 360.0 - d, d)
