"""
Entry point and compatibility facade for the Generate → Chroma key → PNG pipeline.

This module exposes a stable API and a CLI (`nobg`).

Packages:
- nobg.chroma: Chroma-key engine (keyer, mask classifier, fringe eroder, trimmer)
- nobg.image: PNG/JPEG decode and PNG encode to/from pixel buffers
- nobg.llm: OpenRouter image-generation client and prompt building
- nobg.render: Inline terminal preview
- nobg.pipeline: High-level orchestration (`generate_transparent_image`)
"""

from __future__ import annotations

import os

from nobg.chroma import (
    ChromaKeyError,
    PixelBuffer,
    remove_background,
)
from nobg.config import load_settings
from nobg.image import decode_image, encode_png, load_image, save_png
from nobg.llm import build_chroma_prompt, generate_image
from nobg.pipeline import generate_transparent_image, key_existing_image
from nobg.render import show_inline

__all__ = [
    # engine
    "ChromaKeyError",
    "PixelBuffer",
    "remove_background",
    # image io
    "decode_image",
    "encode_png",
    "load_image",
    "save_png",
    # provider
    "build_chroma_prompt",
    "generate_image",
    # pipeline
    "generate_transparent_image",
    "key_existing_image",
]

EPILOG = """Examples:
  nobg 'a red apple'
  nobg -a 16:9 -r 2k 'app icon of a banana'
  nobg -m openrouter/google/gemini-2.5-flash-image -o logo.png 'minimalist logo'
  nobg -i render.png -c auto"""


def _build_parser(settings):
    import argparse

    parser = argparse.ArgumentParser(
        prog="nobg",
        description="Generate images with transparent backgrounds using AI.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("prompt", nargs="?", help="What to draw")
    parser.add_argument("--aspect-ratio", "-a", type=str, default=settings.aspect_ratio, help=f"Aspect ratio (default: {settings.aspect_ratio})")
    parser.add_argument("--resolution", "-r", type=str, default=settings.resolution, help=f"Resolution: 1k, 2k, 4k (default: {settings.resolution})")
    parser.add_argument("--temperature", "-t", type=str, default=str(settings.temperature), help=f"Temperature 0.0-2.0 (default: {settings.temperature})")
    parser.add_argument("--output", "-o", type=str, help="Output filename (default: derived from the prompt)")
    parser.add_argument("--debug", "-d", action="store_true", help="Log full prompt and API details")
    parser.add_argument("--chroma-color", "-c", type=str, default=settings.chroma_color, help=f"Chroma key color as hex, or 'auto' to detect it (default: {settings.chroma_color})")
    parser.add_argument("--model", "-m", type=str, default=settings.model, help=f"Model as provider/model (default: {settings.model})")
    parser.add_argument("--input", "-i", type=str, help="Key an existing image instead of generating one")
    parser.add_argument("--erode-borders", action="store_true", help="Also erode fringe pixels on the outermost rows/columns")
    parser.add_argument("--show", action="store_true", help="Preview the result inline (iTerm2/WezTerm)")
    parser.add_argument("--timeout", type=float, default=settings.request_timeout, help="Per-request timeout in seconds (<=0 means no timeout)")
    return parser


def _cli() -> None:
    """CLI for generating (or keying) transparent-background images.

    Generate mode:
    prompt: Subject to draw
    --aspect-ratio / -a, --resolution / -r, --temperature / -t
    --model / -m: provider/model
    --chroma-color / -c: Hex key colour or 'auto'
    --output / -o: Output PNG path

    Key mode (processed instead of generation if provided):
    --input / -i: Path to an existing image rendered on a key colour
    """
    settings = load_settings()
    parser = _build_parser(settings)
    args = parser.parse_args()

    if not args.input and not args.prompt:
        print("Error: prompt is required. Use --help for usage.")
        raise SystemExit(1)

    timeout_value = None if args.timeout is not None and args.timeout <= 0 else args.timeout

    try:
        if args.input:
            result = key_existing_image(
                image_path=args.input,
                chroma_color=args.chroma_color,
                output_path=args.output,
                erode_borders=args.erode_borders,
            )
        else:
            result = generate_transparent_image(
                prompt=args.prompt,
                model=args.model,
                aspect_ratio=args.aspect_ratio,
                resolution=args.resolution,
                temperature=args.temperature,
                chroma_color=args.chroma_color,
                output_path=args.output,
                request_timeout=timeout_value,
                erode_borders=args.erode_borders,
                debug=args.debug,
            )
    except (ChromaKeyError, ValueError, RuntimeError, FileNotFoundError) as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print(f"Saved {os.path.basename(result['output_path'])} ({result['width']}x{result['height']}, key {result['key']})")
    if args.debug:
        for k, v in result["stats"].items():
            print(f"{k}: {v}")

    if args.show:
        show_inline(result["output_path"])


if __name__ == "__main__":
    _cli()
