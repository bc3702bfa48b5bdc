"""
Colour -> coordinates index over a single screen grid.

Built once per screen snapshot so that "every screen position with colour C"
is a dictionary lookup instead of a full scan.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, FrozenSet, Iterable, List, Tuple

from screenfind.contracts.geometry import Color, Coordinate
from screenfind.contracts.grid import Grid

logger = logging.getLogger(__name__)

_EMPTY: Tuple[Coordinate, ...] = ()
_EMPTY_SET: FrozenSet[Coordinate] = frozenset()


class ColorIndex:
    """
    Read-only map from colour to the ordered coordinates carrying it.

    Every in-bounds coordinate of the screen appears in exactly one sequence,
    so lookups never yield positions outside the screen.
    """

    def __init__(self, screen: Grid) -> None:
        self._width = screen.width
        self._height = screen.height
        self._points: Dict[Color, Tuple[Coordinate, ...]] = {}
        self._members: Dict[Color, FrozenSet[Coordinate]] = {}
        self._build(screen)

    @classmethod
    def build(cls, screen: Grid) -> "ColorIndex":
        return cls(screen)

    def _build(self, screen: Grid) -> None:
        start = time.perf_counter()

        buckets: Dict[Color, List[Coordinate]] = {}
        for point in screen.coordinates():
            buckets.setdefault(screen.pixel(point.x, point.y), []).append(point)

        for color, points in buckets.items():
            self._points[color] = tuple(points)
            self._members[color] = frozenset(points)

        logger.debug(
            "Building screen color map took: %s ms (%s colors)",
            int((time.perf_counter() - start) * 1000),
            len(self._points),
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def lookup(self, color: Color) -> Tuple[Coordinate, ...]:
        """Return the coordinates with this colour in scan order; empty if it never occurs."""
        return self._points.get(color, _EMPTY)

    def contains(self, color: Color, point: Coordinate) -> bool:
        """True when the screen pixel at point has exactly this colour."""
        return point in self._members.get(color, _EMPTY_SET)

    def members(self, color: Color) -> FrozenSet[Coordinate]:
        return self._members.get(color, _EMPTY_SET)

    def colors(self) -> Iterable[Color]:
        return self._points.keys()

    def __contains__(self, color: object) -> bool:
        return color in self._points

    def __len__(self) -> int:
        return len(self._points)


__all__ = ["ColorIndex"]
