from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from screenfind.contracts.geometry import Coordinate


class MatchStep(BaseModel):
    icon_name: str
    offset_index: int
    remaining_candidate_count: int
    # Candidate anchors at this step; shared with the search, do not mutate.
    anchors: List[Coordinate] = Field(default_factory=list)


class DebugConfig(BaseModel):
    enabled: bool = False
    directory: Path = Path("debug_frames")
    verbose: bool = False

    @property
    def save_frames(self) -> bool:
        return self.enabled and self.verbose


__all__ = ["DebugConfig", "MatchStep"]
