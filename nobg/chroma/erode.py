"""Single-pass fringe erosion.

Renderers leave a ~1px anti-aliased band between subject and key. After
classification those pixels sit right next to fully transparent ones; this
pass fades them to 30% of their alpha and re-applies spill suppression.

Neighbour alphas are always read from a snapshot taken before the pass, so
one eroded pixel never causes its neighbour to erode in the same pass. The
snapshot also makes the row bands independent of each other.
"""

from __future__ import annotations

import numpy as np

from .buffer import PixelBuffer, iter_row_bands
from .keyer import KeyDescriptor
from .mask import round_half_up, suppress_spill

FRINGE_ALPHA_FACTOR = 0.3


def _min_neighbour_alpha(snapshot: np.ndarray, start: int, stop: int, erode_borders: bool) -> np.ndarray:
    """Minimum of the four orthogonal neighbours for rows ``start:stop``.

    Out-of-range neighbours are clamped to the edge. Without
    ``erode_borders`` border pixels get 255 so they are never selected.
    """
    h, w = snapshot.shape
    top = max(start - 1, 0)
    bottom = min(stop + 1, h)
    halo = np.pad(
        snapshot[top:bottom],
        ((1 - (start - top), 1 - (bottom - stop)), (1, 1)),
        mode="edge",
    )
    out = np.minimum(
        np.minimum(halo[:-2, 1:-1], halo[2:, 1:-1]),
        np.minimum(halo[1:-1, :-2], halo[1:-1, 2:]),
    )
    if not erode_borders:
        out[:, 0] = 255
        out[:, -1] = 255
        if start == 0:
            out[0, :] = 255
        if stop == h:
            out[-1, :] = 255
    return out


def fringe_candidates(pixels: np.ndarray, key: KeyDescriptor, alpha: np.ndarray) -> np.ndarray:
    """Visible pixels that are partially transparent or still carry key spill."""
    o1, o2 = key.other_channels
    spill = pixels[:, :, key.dominant_channel] > np.maximum(pixels[:, :, o1], pixels[:, :, o2])
    return (alpha > 0) & ((alpha < 255) | spill)


def erode_fringe(
    buffer: PixelBuffer,
    key: KeyDescriptor,
    erode_borders: bool = False,
    band_rows: int | None = None,
) -> int:
    """Fade fringe pixels that touch a fully transparent neighbour.

    Doxygen:
    - @param buffer: RGBA buffer after classification, mutated in place.
    - @param key: Key descriptor used for spill suppression.
    - @param erode_borders: Also treat the outermost rows/columns, using
      clamped neighbour lookups. Off by default.
    - @param band_rows: Rows per band; sized from BAND_PIXELS when None.
    - @return: Number of pixels eroded.
    """
    px = buffer.pixels
    snapshot = px[:, :, 3].copy()

    eroded = 0
    for start, stop in iter_row_bands(buffer.height, buffer.width, band_rows):
        band = px[start:stop]
        before = snapshot[start:stop]
        touching = _min_neighbour_alpha(snapshot, start, stop, erode_borders) == 0
        target = touching & fringe_candidates(band, key, before)
        if not target.any():
            continue

        faded = round_half_up(before.astype(np.float32) * FRINGE_ALPHA_FACTOR).astype(np.uint8)
        band[:, :, 3] = np.where(target, np.minimum(before, faded), before)
        suppress_spill(band, target, key)
        eroded += int(np.count_nonzero(target))
    return eroded
