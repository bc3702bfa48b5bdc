"""
Exact-colour icon locator.

ScreenLocator indexes one screenshot and answers any number of icon queries
against it; locate_icons is the file-based convenience wrapper returning
plain dict matches with bounds and centers.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional, Union

from PIL import Image

from screenfind.contracts.events import DebugConfig, MatchStep
from screenfind.contracts.geometry import Coordinate
from screenfind.contracts.grid import Grid, Icon
from screenfind.logging_utils import log_event
from screenfind.observability.debug_frames import DebugFrameWriter
from screenfind.vision.color_index import ColorIndex
from screenfind.vision.image_io import load_grid, load_icon, load_image
from screenfind.vision.pattern_matcher import LocateOutcome, MatchObserver, PatternMatcher

logger = logging.getLogger(__name__)


def _chain(first: Optional[MatchObserver], second: MatchObserver) -> MatchObserver:
    if first is None:
        return second

    def both(step: MatchStep) -> None:
        try:
            first(step)
        finally:
            second(step)

    return both


class ScreenLocator:
    """
    Search one frozen screen snapshot for icons.

    The screen may be a Grid or a Pillow image. Debug frames need the pixels
    of an image, so they are only written when one is supplied.
    """

    def __init__(
        self,
        screen: Union[Grid, Image.Image],
        debug_config: Optional[DebugConfig] = None,
        observer: Optional[MatchObserver] = None,
    ) -> None:
        image: Optional[Image.Image] = None
        if isinstance(screen, Image.Image):
            image = screen.convert("RGBA")
            grid = Grid.from_image(image)
        else:
            grid = screen
        self.grid = grid
        self.debug_config = debug_config or DebugConfig()
        self.frame_writer: Optional[DebugFrameWriter] = None

        if self.debug_config.save_frames:
            if image is None:
                logger.info("Debug frames need a screen image; a bare Grid was given, frames are off")
            else:
                self.frame_writer = DebugFrameWriter(image, self.debug_config)
                observer = _chain(observer, self.frame_writer)

        self.index = ColorIndex.build(grid)
        self.matcher = PatternMatcher(self.index, observer=observer)

    def locate(self, icon: Icon) -> List[Coordinate]:
        return self.locate_detailed(icon).anchors

    def locate_detailed(self, icon: Icon) -> LocateOutcome:
        start = time.perf_counter()
        outcome = self.matcher.locate_detailed(icon)
        log_event(
            "icon_located" if outcome.found else "icon_not_found",
            {
                "icon": icon.name,
                "state": outcome.state.value,
                "matches": len(outcome.anchors),
                "anchors": [(p.x, p.y) for p in outcome.anchors],
                "offsets_examined": outcome.offsets_examined,
                "elapsed_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return outcome


def _as_match(name: str, anchor: Coordinate, icon: Icon) -> dict:
    w, h = icon.width, icon.height
    return {
        "name": name,
        "score": 1.0,
        "center": {"x": anchor.x + w / 2.0, "y": anchor.y + h / 2.0},
        "bounds": {"x": anchor.x, "y": anchor.y, "width": w, "height": h},
        "method": "exact",
    }


def locate_icons(
    image_path: str,
    templates: Dict[str, str],
    max_results: Optional[int] = None,
    debug_config: Optional[DebugConfig] = None,
) -> List[dict]:
    """
    Locate named icon files inside a screenshot by exact pixel equality.

    Returns a list of matches with name, score, center and bounds, ordered by
    (y, x) of the top-left corner. Templates with an empty path are skipped.
    """
    if not image_path or not templates:
        return []

    if debug_config is not None and debug_config.save_frames:
        locator = ScreenLocator(load_image(image_path), debug_config=debug_config)
    else:
        locator = ScreenLocator(load_grid(image_path))

    matches: List[dict] = []
    for name, tpl_path in templates.items():
        if not tpl_path:
            continue
        icon = load_icon(tpl_path, name=name)
        for anchor in locator.locate(icon):
            matches.append(_as_match(name, anchor, icon))

    matches.sort(key=lambda m: (m["bounds"]["y"], m["bounds"]["x"], m["name"]))
    if max_results is not None:
        return matches[:max_results]
    return matches


__all__ = ["ScreenLocator", "locate_icons"]
