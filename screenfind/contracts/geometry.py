from __future__ import annotations

from dataclasses import dataclass

# Exact encoded pixel value; RGBA images are packed as ARGB.
Color = int


@dataclass(frozen=True, order=True)
class Coordinate:
    """(column, row) position inside a grid, 0-indexed."""

    x: int
    y: int

    def translate(self, dx: int, dy: int) -> "Coordinate":
        """Return a new coordinate shifted by (dx, dy); self is left untouched."""
        return Coordinate(self.x + dx, self.y + dy)


def pack_argb(r: int, g: int, b: int, a: int = 255) -> Color:
    return (a << 24) | (r << 16) | (g << 8) | b


__all__ = ["Color", "Coordinate", "pack_argb"]
