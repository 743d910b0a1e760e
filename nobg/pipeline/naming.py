from __future__ import annotations

import os
import re

MAX_SLUG_LENGTH = 60


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Lowercase ASCII slug built from a prompt, e.g. 'A Red Apple!' -> 'a-red-apple'."""
    slug = (text or "").lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")[:max_length].rstrip("-")
    return slug or "image"


def unique_path(path: str) -> str:
    """Return ``path`` or the first free ``name-N.ext`` variant next to it."""
    if not os.path.exists(path):
        return path
    base, ext = os.path.splitext(path)
    n = 2
    while os.path.exists(f"{base}-{n}{ext}"):
        n += 1
    return f"{base}-{n}{ext}"


def default_output_path(prompt: str, directory: str = ".") -> str:
    return unique_path(os.path.abspath(os.path.join(directory, f"{slugify(prompt)}.png")))
