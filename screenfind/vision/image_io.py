from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from PIL import Image

from screenfind.contracts.errors import InvalidInputError
from screenfind.contracts.grid import Grid, Icon

PathLike = Union[str, Path]


def load_image(path: PathLike) -> Image.Image:
    """Open and fully decode an image as RGBA. Raises InvalidInputError if it cannot be read."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except OSError as exc:
        raise InvalidInputError(f"cannot read image {path}: {exc}") from exc


def load_grid(path: PathLike) -> Grid:
    return Grid.from_image(load_image(path))


def load_icon(path: PathLike, name: Optional[str] = None) -> Icon:
    """Load an icon; its display name defaults to the file name."""
    return Icon(grid=load_grid(path), name=name or Path(path).name)


__all__ = ["load_grid", "load_icon", "load_image"]
