"""Axis annotation: draw numbered x/y axes (one tick per stitch) around a pattern."""
from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
from matplotlib.figure import Figure
from PIL import Image

from intarsia.config import AXES_DPI, AXES_FONT_SIZE
from intarsia.errors import CodecFailure, RenderFailure
from intarsia.io_utils import load_image, save_image_rgb
from intarsia.tiling.grid import GridSpec

logger = logging.getLogger(__name__)

# keep tick labels readable on large grids
MAX_LABELS = 40

def _tick_positions(size: int, cells: int) -> np.ndarray:
    pitch = size // cells
    return (np.arange(cells) + 0.5) * pitch - 0.5

def _labels(cells: int) -> list:
    step = max(1, -(-cells // MAX_LABELS))
    return [str(i + 1) if i % step == 0 else "" for i in range(cells)]

def annotate_axes(
    img_rgb: np.ndarray,
    grid_width: int,
    grid_height: int,
    dpi: int = AXES_DPI,
) -> np.ndarray:
    """
    Render img_rgb with numbered axes, one tick per mosaic cell centre
    (1..grid_width along x, 1..grid_height along y from the top).
    Returns the rendered figure as an (H', W', 3) uint8 array.
    """
    h, w = img_rgb.shape[:2]
    gs = GridSpec(grid_width, grid_height)
    gs.check_fits(w, h)
    try:
        margin = 0.8  # inches reserved for ticks and labels
        fig = Figure(figsize=(w / dpi + margin, h / dpi + margin), dpi=dpi)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.imshow(img_rgb, interpolation="nearest")
        ax.set_xticks(_tick_positions(w, grid_width))
        ax.set_xticklabels(_labels(grid_width), fontsize=AXES_FONT_SIZE)
        ax.set_yticks(_tick_positions(h, grid_height))
        ax.set_yticklabels(_labels(grid_height), fontsize=AXES_FONT_SIZE)
        ax.xaxis.tick_top()
        ax.tick_params(length=2, pad=1)
        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi, bbox_inches="tight", pad_inches=0.1)
        buf.seek(0)
        out = np.array(Image.open(buf).convert("RGB"))
    except Exception as e:
        raise RenderFailure(f"Could not annotate axes: {e}") from e
    logger.debug("annotated %dx%d grid, rendered %dx%d", grid_width, grid_height, out.shape[1], out.shape[0])
    return out

def plot_image_with_axes(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    grid_width: int,
    grid_height: int,
) -> Path:
    """File flavour of annotate_axes: read input_path, write the annotated image to output_path."""
    try:
        img = load_image(input_path)
    except CodecFailure as e:
        raise RenderFailure(f"Could not read image to annotate: {e}") from e
    annotated = annotate_axes(img, grid_width, grid_height)
    try:
        return save_image_rgb(output_path, annotated)
    except CodecFailure as e:
        raise RenderFailure(f"Could not write annotated image: {e}") from e
