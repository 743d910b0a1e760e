"""PNG/JPEG decode and PNG encode between files and ``PixelBuffer``.

OpenCV works in BGR(A); everything handed to the keying engine is RGBA with
an alpha channel synthesised as fully opaque when the source has none.
"""

from __future__ import annotations

import os

import cv2
import numpy as np

from nobg.chroma import DegenerateBufferError, PixelBuffer


def to_rgba(img: np.ndarray) -> np.ndarray:
    """Normalise an OpenCV-decoded array (gray, BGR or BGRA) to RGBA uint8.

    Doxygen:
    - @param img: Array returned by cv2.imdecode(..., IMREAD_UNCHANGED).
    - @return: (H, W, 4) RGBA uint8 array.
    - @throws DegenerateBufferError: On unsupported channel counts.
    """
    if img.dtype != np.uint8:
        # 16-bit PNGs: keep the high byte
        img = (img >> 8).astype(np.uint8) if img.dtype == np.uint16 else img.astype(np.uint8)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    raise DegenerateBufferError(f"Unsupported channel count: {channels}")


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, WebP, ...) into an RGBA buffer."""
    arr = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED) if arr.size else None
    if img is None:
        raise RuntimeError("Failed to decode image data")
    return PixelBuffer(pixels=to_rgba(img))


def load_image(path: str) -> PixelBuffer:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Image file not found: {path}")
    with open(path, "rb") as f:
        data = f.read()
    try:
        return decode_image(data)
    except RuntimeError:
        raise RuntimeError(f"Failed to load image: {path}")


def encode_png(buffer: PixelBuffer) -> bytes:
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise RuntimeError("Failed to encode PNG")
    return encoded.tobytes()


def save_png(buffer: PixelBuffer, path: str) -> str:
    """Encode ``buffer`` as PNG and write it to ``path``; returns the path."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "wb") as f:
        f.write(encode_png(buffer))
    return path
