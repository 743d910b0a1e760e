from __future__ import annotations

from typing import Tuple

import numpy as np

from .buffer import PixelBuffer
from .errors import NothingLeftError

# (left, top, right, bottom), right/bottom exclusive
Box = Tuple[int, int, int, int]


def content_bbox(buffer: PixelBuffer) -> Box:
    """Bounding box of all pixels with non-zero alpha.

    Doxygen:
    - @param buffer: RGBA buffer.
    - @return: (left, top, right, bottom) with exclusive right/bottom.
    - @throws NothingLeftError: If every pixel is fully transparent.
    """
    visible = buffer.alpha > 0
    rows = np.flatnonzero(visible.any(axis=1))
    cols = np.flatnonzero(visible.any(axis=0))
    if rows.size == 0 or cols.size == 0:
        raise NothingLeftError()
    return int(cols[0]), int(rows[0]), int(cols[-1]) + 1, int(rows[-1]) + 1


def crop(buffer: PixelBuffer, box: Box) -> PixelBuffer:
    left, top, right, bottom = box
    return PixelBuffer(pixels=buffer.pixels[top:bottom, left:right].copy())


def trim(buffer: PixelBuffer) -> PixelBuffer:
    """Return a new buffer cropped to the visible content."""
    return crop(buffer, content_bbox(buffer))
