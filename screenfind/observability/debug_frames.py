"""
Debug frames for icon searches.

DebugFrameWriter is a match observer: whenever the number of candidate anchors
changes it paints the candidates magenta on a copy of the screen and saves the
frame as <directory>/<stamp>_<seq>_<icon>/<offset_index>.png, one directory per
query. Writing is best effort; failures are logged and never reach the search.
"""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageDraw

from screenfind.contracts.events import DebugConfig, MatchStep

logger = logging.getLogger(__name__)

HIGHLIGHT = (255, 0, 255, 255)


def _safe_name(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("_") or "icon"


class DebugFrameWriter:
    def __init__(self, screen: Image.Image, config: DebugConfig) -> None:
        self.screen = screen
        self.config = config
        self.written: List[Path] = []
        self._query_dir: Optional[Path] = None
        self._last_count: Optional[int] = None
        self._query_seq = 0

    def __call__(self, step: MatchStep) -> None:
        if not self.config.save_frames:
            return
        if step.offset_index == 0 or self._query_dir is None:
            stamp = int(time.time() * 1000)
            self._query_seq += 1
            name = f"{stamp}_{self._query_seq}_{_safe_name(step.icon_name)}"
            self._query_dir = Path(self.config.directory) / name
            self._last_count = None
        if step.remaining_candidate_count == self._last_count:
            return
        try:
            path = self._save(step)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to save debug frame for %s: %s", step.icon_name, exc)
            return
        self._last_count = step.remaining_candidate_count
        self.written.append(path)

    def _save(self, step: MatchStep) -> Path:
        frame = self.screen.convert("RGBA")
        draw = ImageDraw.Draw(frame)
        for p in step.anchors:
            draw.point((p.x, p.y), fill=HIGHLIGHT)

        query_dir = self._query_dir or Path(self.config.directory)
        query_dir.mkdir(parents=True, exist_ok=True)
        path = query_dir / f"{step.offset_index}.png"
        frame.save(path, format="PNG")
        logger.debug("Saved debug frame %s (%s candidates)", path, step.remaining_candidate_count)
        return path


__all__ = ["DebugFrameWriter", "HIGHLIGHT"]
