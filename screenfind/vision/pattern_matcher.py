"""
Exact icon search over a prebuilt ColorIndex.

The icon's top-left colour seeds the candidate anchors; every further icon
pixel keeps only the anchors whose shifted position carries the same colour.
The search stops as soon as no candidate is left.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from screenfind.contracts.errors import InvalidInputError
from screenfind.contracts.events import MatchStep
from screenfind.contracts.geometry import Coordinate
from screenfind.contracts.grid import Icon
from screenfind.vision.color_index import ColorIndex

logger = logging.getLogger(__name__)

MatchObserver = Callable[[MatchStep], None]


class MatchState(str, enum.Enum):
    SEARCHING = "searching"
    EXHAUSTED = "exhausted"
    COMPLETE = "complete"


@dataclass
class LocateOutcome:
    icon_name: str
    state: MatchState
    anchors: List[Coordinate] = field(default_factory=list)
    offsets_examined: int = 0

    @property
    def found(self) -> bool:
        return bool(self.anchors)


class PatternMatcher:
    """Locate every top-left anchor where an icon matches the indexed screen exactly."""

    def __init__(self, index: ColorIndex, observer: Optional[MatchObserver] = None) -> None:
        self.index = index
        self.observer = observer

    def locate(self, icon: Icon) -> List[Coordinate]:
        """Return all anchors where the icon matches; an empty list means not found."""
        return self.locate_detailed(icon).anchors

    def locate_detailed(self, icon: Icon) -> LocateOutcome:
        if icon is None or icon.grid is None:
            raise InvalidInputError("icon is missing")
        grid = icon.grid
        if grid.is_empty():
            raise InvalidInputError(f"icon {icon.name!r} has zero area ({grid.width}x{grid.height})")

        start = time.perf_counter()
        outcome = LocateOutcome(icon_name=icon.name, state=MatchState.SEARCHING)

        candidates = list(self.index.lookup(grid.pixel(0, 0)))
        outcome.offsets_examined = 1
        if not candidates:
            logger.debug("Icon %s not found", icon.name)
            outcome.state = MatchState.EXHAUSTED
            return outcome

        last_count = len(candidates)
        self._notify(icon.name, 0, candidates)

        for x in range(grid.width):
            for y in range(grid.height):
                if x == 0 and y == 0:
                    continue
                members = self.index.members(grid.pixel(x, y))
                candidates = [a for a in candidates if a.translate(x, y) in members]
                outcome.offsets_examined += 1

                if not candidates:
                    logger.debug("Icon %s not found", icon.name)
                    outcome.state = MatchState.EXHAUSTED
                    return outcome

                if len(candidates) != last_count:
                    last_count = len(candidates)
                    self._notify(icon.name, x * grid.height + y, candidates)

        outcome.state = MatchState.COMPLETE
        outcome.anchors = candidates
        logger.debug(
            "Locating icon \"%s\" took: %s ms, %s match(es)",
            icon.name,
            int((time.perf_counter() - start) * 1000),
            len(candidates),
        )
        return outcome

    def _notify(self, icon_name: str, offset_index: int, candidates: List[Coordinate]) -> None:
        if self.observer is None:
            return
        try:
            # Built without validation: candidates can number in the millions.
            step = MatchStep.model_construct(
                icon_name=str(icon_name),
                offset_index=offset_index,
                remaining_candidate_count=len(candidates),
                anchors=candidates,
            )
            self.observer(step)
        except Exception:  # noqa: BLE001
            logger.warning("Match observer failed for icon %s at offset %s", icon_name, offset_index, exc_info=True)


__all__ = ["LocateOutcome", "MatchObserver", "MatchState", "PatternMatcher"]
