"""nobg: generate images with transparent backgrounds via chroma keying."""

__version__ = "0.1.0"
