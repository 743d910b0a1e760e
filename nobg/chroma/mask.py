"""Per-pixel background/edge/subject classification.

Every pixel is compared to the key hue:

- core background (close hue, saturated enough) becomes fully transparent;
- the edge band gets a graduated alpha ``round(t**1.5 * 255)`` and key spill
  suppression, where ``t`` is the position inside the band;
- everything else is subject and is left alone.

The 1.5 exponent keeps the background side of the band nearly transparent and
puts the visible ramp close to the subject.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .buffer import PixelBuffer, iter_row_bands
from .colorspace import hue_distance_array, rgb_to_hsv_array
from .keyer import KeyDescriptor

HUE_RANGE = 25.0
EDGE_HUE_RANGE = 50.0
MIN_SATURATION = 25.0
EDGE_FALLOFF_EXPONENT = 1.5


def check_thresholds(hue_range: float, edge_hue_range: float) -> None:
    if not hue_range < edge_hue_range:
        raise ValueError(
            f"Edge hue range ({edge_hue_range}) must be wider than the core background range ({hue_range})"
        )


check_thresholds(HUE_RANGE, EDGE_HUE_RANGE)


@dataclass
class MaskStats:
    background: int
    edge: int
    subject: int

    @property
    def total(self) -> int:
        return self.background + self.edge + self.subject


def round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def edge_alpha(hd: np.ndarray) -> np.ndarray:
    """Alpha for hue distances inside the edge band (non-decreasing in ``hd``)."""
    t = (hd - HUE_RANGE) / (EDGE_HUE_RANGE - HUE_RANGE)
    t = np.clip(t, 0.0, 1.0)
    return round_half_up(np.power(t, EDGE_FALLOFF_EXPONENT) * 255.0).astype(np.uint8)


def suppress_spill(pixels: np.ndarray, where: np.ndarray, key: KeyDescriptor) -> None:
    """Clamp the key's dominant channel to the brighter of the other two, in place.

    Doxygen:
    - @param pixels: (H, W, 4) uint8 array, modified in place.
    - @param where: Boolean (H, W) mask of pixels to treat.
    - @param key: Key descriptor providing dominant/other channels.
    """
    o1, o2 = key.other_channels
    dom = key.dominant_channel
    cap = np.maximum(pixels[:, :, o1], pixels[:, :, o2])
    clamped = np.minimum(pixels[:, :, dom], cap)
    pixels[:, :, dom] = np.where(where, clamped, pixels[:, :, dom])


def classify_pixels(buffer: PixelBuffer, key: KeyDescriptor, band_rows: int | None = None) -> MaskStats:
    """Write background/edge alpha into ``buffer`` in place.

    Rows are processed in bands so float temporaries stay bounded; each
    pixel depends only on itself, so banding does not change the result.

    Doxygen:
    - @param buffer: RGBA buffer, mutated in place.
    - @param key: Descriptor of the background key colour.
    - @param band_rows: Rows per band; sized from BAND_PIXELS when None.
    - @return: Pixel counts per class.
    """
    px = buffer.pixels
    n_bg = n_edge = 0
    for start, stop in iter_row_bands(buffer.height, buffer.width, band_rows):
        band = px[start:stop]
        hue, sat, _ = rgb_to_hsv_array(band[:, :, :3])
        hd = hue_distance_array(hue, key.hue)

        background = (hd <= HUE_RANGE) & (sat >= MIN_SATURATION)
        edge = ~background & (hd <= EDGE_HUE_RANGE) & (sat >= MIN_SATURATION / 2)

        alpha = band[:, :, 3]
        alpha[background] = 0
        alpha[edge] = np.minimum(alpha[edge], edge_alpha(hd[edge]))
        suppress_spill(band, edge, key)

        n_bg += int(np.count_nonzero(background))
        n_edge += int(np.count_nonzero(edge))

    return MaskStats(background=n_bg, edge=n_edge, subject=buffer.width * buffer.height - n_bg - n_edge)
