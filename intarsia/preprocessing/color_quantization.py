from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple
import numpy as np

from intarsia.config import MAX_PALETTE_SIZE, PALETTE_MAX_COLORS, PALETTE_METHOD, QUANTIZE_CHUNK_BUDGET
from intarsia.errors import PaletteTooSmall
from intarsia.preprocessing.palette import PaletteMethod, extract_palette

logger = logging.getLogger(__name__)

def colour_distance(c1: Sequence[int], c2: Sequence[int]) -> float:
    """Euclidean distance between two colours in RGB space."""
    a = np.asarray(c1, dtype=np.float64)[:3]
    b = np.asarray(c2, dtype=np.float64)[:3]
    return float(np.sqrt(((a - b) ** 2).sum()))

def _select(palette: np.ndarray, colours: Optional[int]) -> np.ndarray:
    palette = np.asarray(palette)
    if palette.ndim != 2:
        palette = palette.reshape(-1, 3)
    k = len(palette) if colours is None else int(colours)
    if k > MAX_PALETTE_SIZE:
        raise ValueError(f"Palette size must be at most {MAX_PALETTE_SIZE}, got {k}")
    if k < 1:
        raise PaletteTooSmall(f"Palette size must be at least 1, got {k}")
    if len(palette) < k:
        raise PaletteTooSmall(f"Requested {k} colours but the palette only has {len(palette)}")
    return palette[:k, :3].astype(np.int32)

def nearest_palette_index(
    pixels: np.ndarray,  # (N, 3)
    palette: np.ndarray, # (K, 3)
) -> np.ndarray:
    """
    Index of the nearest palette entry per pixel under Euclidean RGB distance.
    Squared distances are compared (same ordering, exact in integers).
    np.argmin keeps the first minimum, so ties go to the lowest index.
    """
    # (N,1,3) - (1,K,3) -> (N,K,3)
    diff = pixels[:, None, :].astype(np.int32) - palette[None, :, :]
    d2 = (diff * diff).sum(axis=2)   # (N, K)
    return np.argmin(d2, axis=1)     # (N,)

def quantize(
    img_rgb: np.ndarray,
    palette: np.ndarray,
    colours: Optional[int] = None,
    chunk_pixels: Optional[int] = None,
) -> np.ndarray:
    """
    Replace every pixel with its nearest colour among the first `colours`
    palette entries (all of them if None). Returns a new (H, W, 3) uint8
    image; alpha is dropped.
    Pixels are processed in chunks of chunk_pixels; by default chunks are
    sized so that pixels * K stays within QUANTIZE_CHUNK_BUDGET. Each chunk
    writes a disjoint slice of the output.
    """
    pal = _select(palette, colours)
    h, w = img_rgb.shape[:2]
    pixels = img_rgb[..., :3].reshape(-1, 3)  # (H*W, 3)
    out = np.empty((h * w, 3), dtype=np.uint8)
    pal_u8 = pal.astype(np.uint8)
    if chunk_pixels is None:
        chunk_pixels = QUANTIZE_CHUNK_BUDGET // len(pal)
    step = max(1, int(chunk_pixels))
    for s in range(0, h * w, step):
        e = min(s + step, h * w)
        out[s:e] = pal_u8[nearest_palette_index(pixels[s:e], pal)]
    return out.reshape(h, w, 3)

def palette_for(
    img_rgb: np.ndarray,
    colours: int,
    method: PaletteMethod = PALETTE_METHOD,
    max_colors: Optional[int] = None,
) -> np.ndarray:
    """
    Extract a palette from img_rgb and keep its first `colours` entries.
    The extractor is asked for max(colours, max_colors) colours; getting
    back fewer than `colours` is an error, never a silent degrade.
    """
    if colours < 1:
        raise PaletteTooSmall(f"Palette size must be at least 1, got {colours}")
    if colours > MAX_PALETTE_SIZE:
        raise ValueError(f"Palette size must be at most {MAX_PALETTE_SIZE}, got {colours}")
    ask = max(colours, PALETTE_MAX_COLORS if max_colors is None else int(max_colors))
    palette = extract_palette(img_rgb, min(ask, MAX_PALETTE_SIZE), method=method)
    if len(palette) < colours:
        raise PaletteTooSmall(
            f"Requested {colours} colours but only {len(palette)} could be extracted from the image"
        )
    return palette[:colours]

def reduce_colours(
    img_rgb: np.ndarray,
    colours: int,
    method: PaletteMethod = PALETTE_METHOD,
    max_colors: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Quantize img_rgb with a palette extracted from itself. Returns (quantized, palette)."""
    palette = palette_for(img_rgb, colours, method=method, max_colors=max_colors)
    logger.debug("quantizing %dx%d image to %d colours", img_rgb.shape[1], img_rgb.shape[0], colours)
    return quantize(img_rgb, palette), palette
