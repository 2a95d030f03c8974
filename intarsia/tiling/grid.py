# intarsia/tiling/grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np
import cv2

from intarsia.config import GRID_COLOR, GRID_THICKNESS
from intarsia.errors import InvalidDimensions

@dataclass(frozen=True)
class GridSpec:
    """Number of mosaic cells (stitches) along x and y."""
    grid_width: int
    grid_height: int

    def __post_init__(self):
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise InvalidDimensions(
                f"Grid dimensions must be positive, got {self.grid_width}x{self.grid_height}"
            )

    def check_fits(self, width: int, height: int) -> None:
        """A grid cannot have more cells than the image has pixels along an axis."""
        if self.grid_width > width or self.grid_height > height:
            raise InvalidDimensions(
                f"Grid {self.grid_width}x{self.grid_height} does not fit a {width}x{height} image"
            )

    def cell_size(self, width: int, height: int) -> Tuple[int, int]:
        """
        Integer cell pitch (cell_w, cell_h). Floor division keeps lines on
        reproducible pixel coordinates; the last cell absorbs any remainder.
        """
        self.check_fits(width, height)
        return width // self.grid_width, height // self.grid_height

def line_offsets(cells: int, pitch: int) -> np.ndarray:
    """Offsets of the `cells` grid lines along one axis: 0, pitch, 2*pitch, ..."""
    return np.arange(cells, dtype=np.int32) * pitch

def draw_grid(
    img: np.ndarray,
    grid_width: int,
    grid_height: int,
    color=GRID_COLOR,
    thickness: int = GRID_THICKNESS,
) -> np.ndarray:
    """
    Draw grid_height horizontal and grid_width vertical lines over img, in place.
    Horizontal lines sit at y = i * (H // grid_height), vertical ones at
    x = j * (W // grid_width); the first of each lies on the image border.
    Views (slices, transposes) are drawn through a contiguous copy and
    written back. Returns img.
    """
    gs = GridSpec(grid_width, grid_height)
    h, w = img.shape[:2]
    cell_w, cell_h = gs.cell_size(w, h)
    if not img.flags["WRITEABLE"]:
        raise ValueError("draw_grid needs a writeable buffer")
    canvas = img if img.flags["C_CONTIGUOUS"] else np.ascontiguousarray(img)
    # fully opaque on RGBA buffers
    line = tuple(int(c) for c in color)[:3]
    if img.ndim == 3 and img.shape[2] == 4:
        line = line + (255,)
    for y in line_offsets(grid_height, cell_h):
        cv2.line(canvas, (0, int(y)), (w, int(y)), line, thickness)
    for x in line_offsets(grid_width, cell_w):
        cv2.line(canvas, (int(x), 0), (int(x), h), line, thickness)
    if canvas is not img:
        img[...] = canvas
    return img
