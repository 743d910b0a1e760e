from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from .errors import DegenerateBufferError

CHANNELS = 4

# Pixels per band for the per-pixel stages; bounds their float temporaries
BAND_PIXELS = 1 << 16


@dataclass
class PixelBuffer:
    """RGBA raster owned by the keying pipeline.

    ``pixels`` has shape (height, width, 4), dtype uint8, row-major, origin
    top-left. Stages mutate it in place; callers must not share it while a
    pipeline is running.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        validate_pixels(self.pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        """Wrap a flat RGBA byte run of length ``width*height*4``.

        Doxygen:
        - @param width: Pixels per row, must be > 0.
        - @param height: Number of rows, must be > 0.
        - @param data: Raw RGBA bytes.
        - @return: New PixelBuffer owning a writable copy of the data.
        - @throws DegenerateBufferError: On zero area or length mismatch.
        """
        if width <= 0 or height <= 0:
            raise DegenerateBufferError(f"Buffer must have positive area, got {width}x{height}")
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise DegenerateBufferError(
                f"Expected {expected} bytes for a {width}x{height} RGBA buffer, got {len(data)}"
            )
        arr = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, CHANNELS).copy()
        return cls(pixels=arr)

    def to_bytes(self) -> bytes:
        return np.ascontiguousarray(self.pixels).tobytes()

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(pixels=self.pixels.copy())


def validate_pixels(pixels: np.ndarray) -> None:
    """Reject anything that is not a non-empty (H, W, 4) uint8 array."""
    if not isinstance(pixels, np.ndarray):
        raise DegenerateBufferError(f"Pixels must be a numpy array, got {type(pixels).__name__}")
    if pixels.ndim != 3:
        raise DegenerateBufferError(f"Pixels must have shape (height, width, 4), got {pixels.shape}")
    if pixels.shape[2] != CHANNELS:
        raise DegenerateBufferError(f"Expected {CHANNELS} channels (RGBA), got {pixels.shape[2]}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise DegenerateBufferError(f"Buffer must have positive area, got {pixels.shape[1]}x{pixels.shape[0]}")
    if pixels.dtype != np.uint8:
        raise DegenerateBufferError(f"Pixels must be uint8, got {pixels.dtype}")


def iter_row_bands(height: int, width: int, band_rows: Optional[int] = None) -> Iterator[Tuple[int, int]]:
    """Yield (start, stop) row ranges covering ``height`` rows in bands.

    Bands hold about BAND_PIXELS pixels unless ``band_rows`` is given.
    """
    step = band_rows or max(1, BAND_PIXELS // max(1, width))
    for start in range(0, height, step):
        yield start, min(start + step, height)
