import json
import os
from dataclasses import dataclass, fields
from typing import Optional

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def config_path(name: str) -> str:
    """Absolute path of a file under the project's config/ directory."""
    return _resolve_path(CONFIG_DIR, name)


SETTINGS_PATH = config_path("settings.json")


@dataclass
class Settings:
    """Generation defaults; any field can be overridden from config/settings.json."""

    model: str = "openrouter/google/gemini-2.5-flash-image"
    aspect_ratio: str = "1:1"
    resolution: str = "1k"
    temperature: float = 1.0
    chroma_color: str = "#00FF00"
    request_timeout: Optional[float] = 120.0


def load_settings(path: str = SETTINGS_PATH) -> Settings:
    """Load generation defaults from config/settings.json.

    Unknown keys are ignored; a missing file yields the built-in defaults.
    """
    settings = Settings()

    if not os.path.exists(path):
        return settings

    try:
        with open(path, "r", encoding="utf-8") as settings_file:
            data = json.load(settings_file) or {}
    except Exception as exc:
        print(f"Warning: Could not load settings from {path}: {exc}")
        return settings

    if not isinstance(data, dict):
        print(f"Warning: settings file must contain a JSON object: {path}")
        return settings

    known = {f.name for f in fields(Settings)}
    for key, value in data.items():
        if key in known:
            setattr(settings, key, value)
        else:
            print(f"Warning: Unknown setting '{key}' in {path}")
    return settings
