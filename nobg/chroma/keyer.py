"""Background key detection.

Two interchangeable strategies produce a ``KeyDescriptor`` from a buffer:

- ``FixedKeyer``: the operator names the key colour as hex.
- ``AdaptiveKeyer``: the key colour is the rounded mean of the four corners.

``make_keyer`` picks one from a single configuration value.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .buffer import PixelBuffer
from .colorspace import rgb_to_hsv
from .errors import DegenerateBufferError, InvalidKeyColorError

CHANNEL_NAMES = ("R", "G", "B")
AUTO = "auto"

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class KeyDescriptor:
    r: int
    g: int
    b: int
    hue: float
    saturation: float
    dominant_channel: int
    other_channels: Tuple[int, int]

    @property
    def dominant_name(self) -> str:
        return CHANNEL_NAMES[self.dominant_channel]

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def parse_hex_color(text: str) -> Tuple[int, int, int]:
    """Parse ``RRGGBB`` or ``#RRGGBB`` (case-insensitive) into an RGB triple.

    Doxygen:
    - @param text: Colour string.
    - @return: (r, g, b) integers in [0, 255].
    - @throws InvalidKeyColorError: If the string is not 6 hex digits.
    """
    match = _HEX_RE.match(str(text).strip()) if text is not None else None
    if not match:
        raise InvalidKeyColorError(f'Invalid chroma color "{text}". Use hex format like #00FF00')
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def describe_key(r: int, g: int, b: int) -> KeyDescriptor:
    """Derive hue/saturation and the dominant/other channel split for a key colour."""
    hsv = rgb_to_hsv(r, g, b)
    values = (r, g, b)
    # max() returns the first maximal element, so ties resolve in R, G, B order
    dominant = max(range(3), key=lambda i: values[i])
    others = tuple(i for i in range(3) if i != dominant)
    return KeyDescriptor(
        r=int(r),
        g=int(g),
        b=int(b),
        hue=hsv.hue,
        saturation=hsv.saturation,
        dominant_channel=dominant,
        other_channels=others,  # type: ignore[arg-type]
    )


class FixedKeyer:
    """Key colour supplied by the operator."""

    def __init__(self, color: str) -> None:
        self.rgb = parse_hex_color(color)

    def key(self, buffer: PixelBuffer) -> KeyDescriptor:
        return describe_key(*self.rgb)


class AdaptiveKeyer:
    """Key colour sampled from the four corner pixels."""

    def key(self, buffer: PixelBuffer) -> KeyDescriptor:
        if buffer.width < 1 or buffer.height < 1:
            raise DegenerateBufferError("Cannot sample corners of an empty buffer")
        px = buffer.pixels
        last_x, last_y = buffer.width - 1, buffer.height - 1
        corners = np.stack([
            px[0, 0, :3],
            px[0, last_x, :3],
            px[last_y, 0, :3],
            px[last_y, last_x, :3],
        ]).astype(np.float64)
        means = corners.mean(axis=0)
        r, g, b = (int(math.floor(m + 0.5)) for m in means)
        return describe_key(r, g, b)


def make_keyer(color: Optional[str] = None):
    """Select a keying strategy: ``None``/``"auto"`` → adaptive, hex → fixed."""
    if color is None or str(color).strip().lower() == AUTO:
        return AdaptiveKeyer()
    return FixedKeyer(color)
