from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a grid or icon cannot be searched (absent pixels, ragged rows, zero area)."""


__all__ = ["InvalidInputError"]
