"""Image-generation provider integration.

This package provides utilities to call web image models via
OpenRouter-compatible clients and to build the chroma-key prompt.
"""

from .client import (
    CONFIG_PATH,
    PROVIDERS,
    RESOLUTIONS,
    generate_image,
    get_api_key,
    get_openrouter_client,
    parse_model,
    parse_resolution,
    validate_temperature,
)
from .prompt import build_chroma_prompt

__all__ = [
    "CONFIG_PATH",
    "PROVIDERS",
    "RESOLUTIONS",
    "generate_image",
    "get_api_key",
    "get_openrouter_client",
    "parse_model",
    "parse_resolution",
    "validate_temperature",
    "build_chroma_prompt",
]
