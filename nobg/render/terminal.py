"""Inline image preview for terminals that speak the iTerm2 image protocol.

Uses PIL to shrink the PNG before sending it so large 4k outputs do not
flood the terminal.
"""

from __future__ import annotations

import base64
import io
import os
import sys
from typing import Optional, TextIO

from PIL import Image

INLINE_TERMINALS = ("iTerm.app", "WezTerm")


def supports_inline_images(env: Optional[dict] = None) -> bool:
    env = os.environ if env is None else env
    return env.get("TERM_PROGRAM", "") in INLINE_TERMINALS or "ITERM_SESSION_ID" in env


def preview_png(path: str, max_width: int = 512) -> bytes:
    """Return PNG bytes of the image at ``path``, downscaled to ``max_width``."""
    with Image.open(path) as img:
        img = img.convert("RGBA")
        if img.width > max_width:
            ratio = max_width / float(img.width)
            img = img.resize((max_width, max(1, int(img.height * ratio))), Image.LANCZOS)
        out = io.BytesIO()
        img.save(out, format="PNG")
        return out.getvalue()


def inline_image_sequence(png_bytes: bytes, name: str = "image.png") -> str:
    """Build the OSC 1337 escape sequence that displays ``png_bytes`` inline."""
    encoded_name = base64.b64encode(name.encode("utf-8")).decode("ascii")
    payload = base64.b64encode(png_bytes).decode("ascii")
    return f"\x1b]1337;File=name={encoded_name};size={len(png_bytes)};inline=1:{payload}\x07"


def show_inline(path: str, max_width: int = 512, stream: Optional[TextIO] = None) -> bool:
    """Display the image inline when supported; returns True if it was sent."""
    if not supports_inline_images():
        print("Inline preview not supported by this terminal (needs iTerm2 or WezTerm).")
        return False
    stream = stream or sys.stdout
    stream.write(inline_image_sequence(preview_png(path, max_width), os.path.basename(path)))
    stream.write("\n")
    stream.flush()
    return True
