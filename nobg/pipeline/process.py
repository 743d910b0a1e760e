"""High-level pipeline: prompt → image model → chroma key → PNG.

This module orchestrates the full flow and provides the entry points
`generate_transparent_image` (calls the provider) and `key_existing_image`
(keys an image already on disk), both suitable for scripts and notebooks.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from nobg.chroma import KeyResult, PixelBuffer, make_keyer, remove_background
from nobg.image import decode_image, load_image, save_png
from nobg.llm import (
    build_chroma_prompt,
    generate_image,
    get_api_key,
    get_openrouter_client,
    parse_model,
    parse_resolution,
    validate_temperature,
)

from .naming import default_output_path, unique_path

FALLBACK_PROMPT_COLOR = "#00FF00"


def _key_and_save(
    buffer: PixelBuffer,
    output_path: str,
    key_color: Optional[str],
    erode_borders: bool,
) -> Dict[str, Any]:
    original_size = (buffer.width, buffer.height)
    result: KeyResult = remove_background(buffer, key_color=key_color, erode_borders=erode_borders)
    save_png(result.buffer, output_path)
    return {
        "output_path": output_path,
        "width": result.buffer.width,
        "height": result.buffer.height,
        "original_size": original_size,
        "key": result.key.hex,
        "crop_box": result.crop_box,
        "stats": {
            "background": result.stats.background,
            "edge": result.stats.edge,
            "subject": result.stats.subject,
            "eroded": result.eroded,
        },
    }


def generate_transparent_image(
    prompt: str,
    model: str = "openrouter/google/gemini-2.5-flash-image",
    aspect_ratio: str = "1:1",
    resolution: str = "1k",
    temperature: float = 1.0,
    chroma_color: str = "#00FF00",
    output_path: Optional[str] = None,
    request_timeout: float | None = 120.0,
    erode_borders: bool = False,
    debug: bool = False,
) -> Dict[str, Any]:
    """Generate an image on a key-coloured background and cut the background out.

    All options are validated before the provider is called.

    Doxygen:
    - @param prompt: Subject description.
    - @param model: "provider/model" string.
    - @param aspect_ratio: Aspect ratio passed to the model, e.g. "16:9".
    - @param resolution: One of RESOLUTIONS ("1k", "2k", "4k").
    - @param temperature: Sampling temperature in [0, 2].
    - @param chroma_color: Hex key colour, or "auto" to detect from corners.
    - @param output_path: Target PNG path; derived from the prompt when None.
    - @param request_timeout: Provider timeout in seconds (None: no timeout).
    - @param erode_borders: Extend fringe erosion to the image border.
    - @param debug: Print the full prompt and request payload.
    - @return: Dict with keys {'output_path', 'width', 'height', 'key', 'stats', ...}.
    """
    if not prompt or not prompt.strip():
        raise ValueError("Prompt is required.")

    provider, model_name = parse_model(model)
    base_px = parse_resolution(resolution)
    temperature = validate_temperature(temperature)
    # Fixed colours are validated here, before any network call
    make_keyer(chroma_color)
    adaptive = chroma_color is None or str(chroma_color).strip().lower() == "auto"
    prompt_color = FALLBACK_PROMPT_COLOR if adaptive else chroma_color
    full_prompt = build_chroma_prompt(prompt, prompt_color)

    if debug:
        print("--- Prompt ---")
        print(full_prompt)
        print("--------------")

    api_key = get_api_key(provider)
    client = get_openrouter_client(api_key, provider)
    image_bytes = generate_image(
        client,
        model_name,
        full_prompt,
        aspect_ratio=aspect_ratio,
        resolution=base_px,
        temperature=temperature,
        timeout=request_timeout,
        debug=debug,
    )
    print("Image generated")

    buffer = decode_image(image_bytes)
    out_path = os.path.abspath(output_path) if output_path else default_output_path(prompt)
    return _key_and_save(buffer, out_path, chroma_color, erode_borders)


def key_existing_image(
    image_path: str,
    chroma_color: Optional[str] = "auto",
    output_path: Optional[str] = None,
    erode_borders: bool = False,
) -> Dict[str, Any]:
    """Remove the key background from an image file already on disk.

    Doxygen:
    - @param image_path: Input image (any format OpenCV can decode).
    - @param chroma_color: Hex key colour, or "auto"/None to detect it.
    - @param output_path: Target PNG path; defaults to '<name>_nobg.png' beside the input.
    - @param erode_borders: Extend fringe erosion to the image border.
    - @return: Same dict shape as `generate_transparent_image`.
    """
    make_keyer(chroma_color)
    buffer = load_image(image_path)
    if output_path:
        out_path = os.path.abspath(output_path)
    else:
        base_name_no_ext = os.path.splitext(os.path.basename(image_path))[0] or "image"
        out_path = unique_path(os.path.join(os.path.dirname(os.path.abspath(image_path)), f"{base_name_no_ext}_nobg.png"))
    return _key_and_save(buffer, out_path, chroma_color, erode_borders)
