"""Chroma-key extraction engine.

Turns an RGBA raster rendered on a uniform key colour into a trimmed RGBA
raster with a transparent background:
keyer → mask classifier → fringe eroder → trimmer.
"""

from .buffer import PixelBuffer
from .colorspace import HSVColor, hue_distance, rgb_to_hsv
from .engine import KeyResult, remove_background
from .erode import erode_fringe
from .errors import (
    ChromaKeyError,
    DegenerateBufferError,
    InvalidKeyColorError,
    NothingLeftError,
)
from .keyer import (
    AdaptiveKeyer,
    FixedKeyer,
    KeyDescriptor,
    describe_key,
    make_keyer,
    parse_hex_color,
)
from .mask import EDGE_HUE_RANGE, HUE_RANGE, MIN_SATURATION, MaskStats, classify_pixels
from .trim import content_bbox, trim

__all__ = [
    "PixelBuffer",
    "HSVColor",
    "hue_distance",
    "rgb_to_hsv",
    "KeyResult",
    "remove_background",
    "erode_fringe",
    "ChromaKeyError",
    "DegenerateBufferError",
    "InvalidKeyColorError",
    "NothingLeftError",
    "AdaptiveKeyer",
    "FixedKeyer",
    "KeyDescriptor",
    "describe_key",
    "make_keyer",
    "parse_hex_color",
    "EDGE_HUE_RANGE",
    "HUE_RANGE",
    "MIN_SATURATION",
    "MaskStats",
    "classify_pixels",
    "content_bbox",
    "trim",
]
