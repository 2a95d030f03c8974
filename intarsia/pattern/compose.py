# intarsia/pattern/compose.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np

from intarsia.config import BLUR_SIGMA, PALETTE_METHOD
from intarsia.plotting.axes import annotate_axes
from intarsia.preprocessing.color_quantization import palette_for, quantize
from intarsia.preprocessing.palette import PaletteMethod
from intarsia.preprocessing.resample import resample_down, resample_up
from intarsia.tiling.grid import GridSpec, draw_grid

logger = logging.getLogger(__name__)

@dataclass
class PatternResult:
    grid: GridSpec
    resized_down: np.ndarray  # (grid_height, grid_width, C)
    resized_up: np.ndarray    # original size, blocky
    quantized: np.ndarray     # resized_up mapped onto the palette
    processed: np.ndarray     # quantized + grid (+ axes)
    palette: np.ndarray       # (K, 3) uint8, the colours actually used

def pattern_from_image(
    img_rgb: np.ndarray,
    grid_width: int,
    grid_height: int,
    colours: int,
    add_axes: bool = False,
    blur_sigma: float = BLUR_SIGMA,
    palette_method: PaletteMethod = PALETTE_METHOD,
    palette_max_colors: Optional[int] = None,
) -> PatternResult:
    """
    Build a stitch pattern from a photo:
      blur -> nearest down to the grid -> nearest up -> quantize -> grid -> (axes)
    The palette comes from the grid-sized image, so it reflects the colours
    of the mosaic rather than fine detail of the full-resolution photo.
    Any stage failure propagates; nothing partial is returned.
    """
    if img_rgb.ndim != 3 or img_rgb.shape[2] not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA image, got shape {img_rgb.shape}")
    h, w = img_rgb.shape[:2]
    gs = GridSpec(grid_width, grid_height)
    gs.check_fits(w, h)

    small = resample_down(img_rgb, grid_width, grid_height, blur_sigma=blur_sigma)
    up = resample_up(small, w, h)

    palette = palette_for(small, colours, method=palette_method, max_colors=palette_max_colors)
    # up is a nearest-neighbour enlargement of small, so quantizing the
    # grid-sized image then enlarging gives the same pixels with gw*gh/(W*H) of the work
    quantized = resample_up(quantize(small, palette), w, h)
    logger.debug("quantized with palette %s", palette.tolist())

    processed = draw_grid(quantized.copy(), grid_width, grid_height)
    if add_axes:
        processed = annotate_axes(processed, grid_width, grid_height)

    return PatternResult(
        grid=gs,
        resized_down=small,
        resized_up=up,
        quantized=quantized,
        processed=processed,
        palette=palette,
    )
