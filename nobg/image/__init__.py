"""Image file I/O: decode to and encode from RGBA pixel buffers."""

from .io import (
    decode_image,
    encode_png,
    load_image,
    save_png,
    to_rgba,
)

__all__ = [
    "decode_image",
    "encode_png",
    "load_image",
    "save_png",
    "to_rgba",
]
