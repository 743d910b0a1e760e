"""Prompt construction for chroma-key friendly image generation.

The template can be overridden with a ``chroma_background`` entry in
config/prompts.json; placeholders are ``{subject}``, ``{hex}``, ``{r}``,
``{g}`` and ``{b}``.
"""

from __future__ import annotations

import json
import os
from typing import Dict

from nobg.chroma import parse_hex_color
from nobg.config import config_path

PROMPTS_PATH = config_path("prompts.json")

_DEFAULT_PROMPTS = {
    "chroma_background": "\n".join([
        "Generate an image of: {subject}",
        "",
        "CRITICAL: The background MUST be a solid, uniform {hex} color.",
        "- Fill the entire background with exactly {hex} (RGB {r},{g},{b})",
        "- No gradients, shadows, lighting effects, or color variation in the background",
        "- The subject should have clean, sharp edges against the {hex} background",
        "- Do not include any ground plane, surface, or environment, only the subject on the solid {hex} background",
    ]),
}


def _load_prompts(path: str = PROMPTS_PATH) -> Dict[str, str]:
    prompts = dict(_DEFAULT_PROMPTS)
    if not os.path.exists(path):
        return prompts
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            prompts.update({str(k): str(v) for k, v in data.items() if isinstance(v, str)})
    except Exception as e:
        print(f"Warning: could not read prompts from {path}: {e}")
    return prompts


def _fill_prompt_template(tmpl: str, **values: str) -> str:
    """Fill only the named placeholders; any other braces are kept literally."""
    safe = tmpl.replace("{", "{{").replace("}", "}}")
    for key in values.keys():
        safe = safe.replace("{{" + key + "}}", "{" + key + "}")
    return safe.format(**values)


def build_chroma_prompt(subject: str, chroma_color: str, path: str = PROMPTS_PATH) -> str:
    """Wrap the user's subject with solid-background instructions.

    Doxygen:
    - @param subject: What to draw, as typed by the user.
    - @param chroma_color: Key colour as hex (with or without '#').
    - @param path: Optional prompts.json override location.
    - @return: Full prompt text.
    - @throws InvalidKeyColorError: If the colour is not valid hex.
    """
    r, g, b = parse_hex_color(chroma_color)
    tmpl = _load_prompts(path)["chroma_background"]
    return _fill_prompt_template(
        tmpl,
        subject=subject.strip(),
        hex=f"#{r:02X}{g:02X}{b:02X}",
        r=str(r),
        g=str(g),
        b=str(b),
    )
