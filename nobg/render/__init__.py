"""Terminal rendering helpers (inline image preview)."""

from .terminal import inline_image_sequence, show_inline, supports_inline_images

__all__ = [
    "inline_image_sequence",
    "show_inline",
    "supports_inline_images",
]
