"""
Read-only colour grids for screens and icons.

Provides:
- Grid: rectangular array of packed colours, built from rows or a Pillow image.
- Icon: a Grid plus the display name used in log and diagnostic messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from PIL import Image

from screenfind.contracts.errors import InvalidInputError
from screenfind.contracts.geometry import Color, Coordinate, pack_argb


class Grid:
    """Immutable width x height array of colours, addressed as pixel(x, y)."""

    __slots__ = ("_rows", "_width", "_height")

    def __init__(self, rows: Optional[Iterable[Iterable[Color]]]) -> None:
        if rows is None:
            raise InvalidInputError("grid pixel buffer is missing")
        frozen: Tuple[Tuple[Color, ...], ...] = tuple(tuple(row) for row in rows)
        width = len(frozen[0]) if frozen else 0
        for index, row in enumerate(frozen):
            if len(row) != width:
                raise InvalidInputError(f"ragged grid: row {index} has {len(row)} pixels, expected {width}")
        self._rows = frozen
        self._width = width
        self._height = len(frozen) if width else 0

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Color]]) -> "Grid":
        return cls(rows)

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> "Grid":
        return cls([[color] * width for _ in range(height)])

    @classmethod
    def from_image(cls, image: Optional[Image.Image]) -> "Grid":
        """Decode a Pillow image into packed ARGB colours (alpha included)."""
        if image is None:
            raise InvalidInputError("image is missing")
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        raw = rgba.tobytes()
        rows = []
        stride = width * 4
        for y in range(height):
            base = y * stride
            rows.append(
                [
                    pack_argb(raw[i], raw[i + 1], raw[i + 2], raw[i + 3])
                    for i in range(base, base + stride, 4)
                ]
            )
        return cls(rows)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    def is_empty(self) -> bool:
        return self._width == 0 or self._height == 0

    def pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} grid")
        return self._rows[y][x]

    def in_bounds(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.x < self._width and 0 <= coordinate.y < self._height

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every coordinate, columns outer and rows inner."""
        for x in range(self._width):
            for y in range(self._height):
                yield Coordinate(x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._width == other._width and self._height == other._height and self._rows == other._rows

    def __hash__(self) -> int:
        return hash((self._width, self._height, self._rows))

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"


@dataclass(frozen=True)
class Icon:
    """A pattern to search for; name is only used for messages."""

    grid: Grid
    name: str = "<icon>"

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", "<icon>" if self.name is None else str(self.name))

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height


__all__ = ["Grid", "Icon"]
