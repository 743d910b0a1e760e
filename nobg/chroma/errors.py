"""Exception types raised by the chroma-key engine."""

from __future__ import annotations


class ChromaKeyError(ValueError):
    """Base class for all chroma-key failures."""


class InvalidKeyColorError(ChromaKeyError):
    """Key colour is not a 6-digit hex value."""


class DegenerateBufferError(ChromaKeyError):
    """Buffer has zero area, a wrong byte length, or a channel count other than 4."""


class NothingLeftError(ChromaKeyError):
    """Every pixel became transparent, so there is nothing to crop to."""

    def __init__(self, message: str = "Nothing left after key removal: every pixel is transparent") -> None:
        super().__init__(message)
