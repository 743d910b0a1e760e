"""High-level pipeline orchestration for Generate → Key → Save."""

from .naming import default_output_path, slugify, unique_path
from .process import (
    generate_transparent_image,
    key_existing_image,
)

__all__ = [
    "default_output_path",
    "slugify",
    "unique_path",
    "generate_transparent_image",
    "key_existing_image",
]
