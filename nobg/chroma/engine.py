"""Chroma-key pipeline: keyer → classifier → eroder → trimmer.

The stages run strictly in order on one exclusively-owned ``PixelBuffer``;
each needs the complete output of the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .buffer import PixelBuffer
from .erode import erode_fringe
from .keyer import KeyDescriptor, make_keyer
from .mask import MaskStats, classify_pixels
from .trim import Box, content_bbox, crop


@dataclass
class KeyResult:
    buffer: PixelBuffer
    key: KeyDescriptor
    stats: MaskStats
    eroded: int
    crop_box: Box


def remove_background(
    buffer: PixelBuffer,
    key_color: Optional[str] = None,
    erode_borders: bool = False,
) -> KeyResult:
    """Make the key background transparent and crop to the remaining subject.

    The input buffer is consumed: classification and erosion write into it.
    Pass ``buffer.copy()`` if the original pixels are still needed.

    Doxygen:
    - @param buffer: Decoded RGBA buffer.
    - @param key_color: Hex key colour, or None/"auto" for corner detection.
    - @param erode_borders: Extend fringe erosion to the outermost pixels.
    - @return: KeyResult with the trimmed buffer and per-stage details.
    - @throws InvalidKeyColorError: Malformed key colour.
    - @throws NothingLeftError: Nothing visible remains after keying.
    """
    keyer = make_keyer(key_color)
    key = keyer.key(buffer)
    stats = classify_pixels(buffer, key)
    eroded = erode_fringe(buffer, key, erode_borders=erode_borders)
    box = content_bbox(buffer)
    return KeyResult(buffer=crop(buffer, box), key=key, stats=stats, eroded=eroded, crop_box=box)
