"""Client utilities for generating images through OpenRouter-compatible APIs.

This module contains API-key loading from config/models.json, model string
parsing, option validation and the image generation request itself.
"""

from __future__ import annotations

import base64
import json
import os
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAI

from nobg.config import config_path

# Path to the JSON configuration file with models and keys
CONFIG_PATH = config_path("models.json")

API_KEY_ENV = "OPENROUTER_API_KEY"

# provider name -> OpenAI-compatible base URL
PROVIDERS: Dict[str, str] = {
    "openrouter": "https://openrouter.ai/api/v1",
}
DEFAULT_PROVIDER = "openrouter"

RESOLUTIONS: Dict[str, int] = {
    "1k": 1024,
    "2k": 2048,
    "4k": 4096,
}


def _load_config(path: str = CONFIG_PATH) -> Dict:
    """Load and return the JSON configuration.

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: Parsed configuration dictionary.
    - @throws FileNotFoundError: If the file is missing.
    - @throws json.JSONDecodeError: If the file content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def parse_model(model_str: str) -> Tuple[str, str]:
    """Split ``provider/model`` into its parts.

    Only the first slash separates the provider, so
    ``openrouter/google/gemini-2.5-flash-image`` yields
    ``("openrouter", "google/gemini-2.5-flash-image")``. Without a slash the
    default provider is assumed.

    Doxygen:
    - @param model_str: Model string from CLI or settings.
    - @return: (provider, model) pair.
    - @throws ValueError: If the provider is not supported.
    """
    model_str = (model_str or "").strip()
    if "/" in model_str:
        provider, model = model_str.split("/", 1)
    else:
        provider, model = DEFAULT_PROVIDER, model_str
    if provider not in PROVIDERS:
        raise ValueError(f'Unsupported provider "{provider}". Supported: {", ".join(PROVIDERS)}')
    if not model:
        raise ValueError("Model name must not be empty.")
    return provider, model


def parse_resolution(resolution: str) -> int:
    key = str(resolution).strip().lower()
    if key not in RESOLUTIONS:
        raise ValueError(f'Unknown resolution "{resolution}". Use: {", ".join(RESOLUTIONS)}')
    return RESOLUTIONS[key]


def validate_temperature(temperature: Any) -> float:
    try:
        value = float(temperature)
    except (TypeError, ValueError):
        raise ValueError("Temperature must be between 0.0 and 2.0")
    if value != value or value < 0.0 or value > 2.0:
        raise ValueError("Temperature must be between 0.0 and 2.0")
    return value


def get_api_key(provider: str = DEFAULT_PROVIDER, path: str = CONFIG_PATH) -> str:
    """Return the API key for ``provider``.

    config/models.json is consulted first. It may contain a "models" list of
    items with fields "provider", "model" and "api_key"; the item selected by
    "model_number_picked" wins, then the first item for the provider. When the
    file is absent or has no key, the OPENROUTER_API_KEY environment variable
    is used.

    Doxygen:
    - @param provider: Provider name, e.g. "openrouter".
    - @param path: Absolute path to the JSON configuration file.
    - @return: API key string.
    - @throws ValueError: If no key can be found.
    """
    if os.path.exists(path):
        cfg = _load_config(path)
        models: List[Dict] = cfg.get("models", [])
        idx = cfg.get("model_number_picked")
        candidates: List[Dict] = []
        if isinstance(idx, int) and 0 <= idx < len(models):
            candidates.append(models[idx])
        candidates.extend(models)
        for item in candidates:
            if item.get("provider", DEFAULT_PROVIDER) == provider and item.get("api_key"):
                return item["api_key"]

    api_key = os.environ.get(API_KEY_ENV)
    if not api_key:
        raise ValueError(f"No API key for provider '{provider}': set {API_KEY_ENV} or add it to {path}")
    return api_key


def get_openrouter_client(api_key: str, provider: str = DEFAULT_PROVIDER) -> OpenAI:
    """Create an OpenAI client configured for the provider's base URL.

    Doxygen:
    - @param api_key: API key for the selected provider.
    - @param provider: Key into PROVIDERS.
    - @return: Configured `OpenAI` client instance.
    """
    return OpenAI(
        base_url=PROVIDERS[provider],
        api_key=api_key,
    )


def _image_size_label(resolution: int) -> str:
    for label, px in RESOLUTIONS.items():
        if px == resolution:
            return label.upper()
    return "1K"


def _extract_image_bytes(message: Any) -> Optional[bytes]:
    """Pull the first base64 data-URL image out of a chat completion message."""
    images = getattr(message, "images", None)
    if images is None and isinstance(getattr(message, "model_extra", None), dict):
        images = message.model_extra.get("images")
    for image in images or []:
        if isinstance(image, dict):
            url = (image.get("image_url") or {}).get("url")
        else:
            url = getattr(getattr(image, "image_url", None), "url", None)
        if url and url.startswith("data:") and "," in url:
            return base64.b64decode(url.split(",", 1)[1])
    return None


def generate_image(
    client: OpenAI,
    model: str,
    prompt: str,
    aspect_ratio: str = "1:1",
    resolution: int = 1024,
    temperature: float = 1.0,
    timeout: float | None = 120.0,
    debug: bool = False,
) -> bytes:
    """Request one image and return its encoded bytes.

    Doxygen:
    - @param client: OpenAI instance created by `get_openrouter_client`.
    - @param model: Target model identifier (without provider prefix).
    - @param prompt: Full prompt text.
    - @param aspect_ratio: Aspect ratio such as "1:1" or "16:9".
    - @param resolution: Base pixel size from RESOLUTIONS.
    - @param temperature: Sampling temperature in [0, 2].
    - @param timeout: Request timeout in seconds; None disables timeout.
    - @param debug: Print the request payload and raw response on failure.
    - @return: Encoded image bytes (PNG/JPEG/WebP as returned by the model).
    - @throws RuntimeError: If the request fails or no image is returned.
    """
    extra_body = {
        "modalities": ["image", "text"],
        "image_config": {
            "aspect_ratio": aspect_ratio,
            "image_size": _image_size_label(resolution),
        },
    }
    messages = [{"role": "user", "content": prompt}]

    if debug:
        print("--- API Request ---")
        print(f"POST {client.base_url}chat/completions (api key: ***)")
        print(json.dumps({"model": model, "messages": messages, "temperature": temperature, **extra_body}, indent=2))
        print("-------------------")

    try:
        completion = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            timeout=timeout,
            extra_body=extra_body,
        )
    except Exception as e:
        raise RuntimeError(f"Image generation request failed: {e}")

    message = completion.choices[0].message if completion.choices else None
    data = _extract_image_bytes(message) if message is not None else None
    if not data:
        if debug:
            try:
                print(completion.model_dump_json(indent=2))
            except Exception:
                print(completion)
        raise RuntimeError("No image data in API response")
    return data
