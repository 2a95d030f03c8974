from __future__ import annotations
import logging
from typing import Literal
import numpy as np
import cv2
from PIL import Image

from intarsia.config import KMEANS_ATTEMPTS, KMEANS_MAX_ITER, MAX_PALETTE_SIZE

logger = logging.getLogger(__name__)

PaletteMethod = Literal["median_cut", "kmeans"]

def _rgb_pixels(img: np.ndarray) -> np.ndarray:
    """(H, W, 3|4) uint8 -> (H*W, 3) uint8, alpha dropped."""
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA image, got shape {img.shape}")
    return np.ascontiguousarray(img[..., :3]).reshape(-1, 3)

def _rank(colors: np.ndarray, counts: np.ndarray) -> np.ndarray:
    """Most frequent first, stable on ties, duplicates removed."""
    order = np.argsort(-counts, kind="stable")
    seen = set()
    ranked = []
    for i in order:
        if counts[i] == 0:
            continue
        key = tuple(int(c) for c in colors[i])
        if key in seen:
            continue
        seen.add(key)
        ranked.append(key)
    return np.array(ranked, dtype=np.uint8).reshape(-1, 3)

def _median_cut(pixels: np.ndarray, max_colors: int) -> np.ndarray:
    # PIL handles palette generation nicely
    pil = Image.fromarray(pixels.reshape(1, -1, 3))
    pal_img = pil.quantize(colors=max_colors, method=Image.Quantize.MEDIANCUT)
    flat = np.array(pal_img.getpalette() or [], dtype=np.uint8)
    entries = flat[: (flat.size // 3) * 3].reshape(-1, 3)
    counts = np.zeros(len(entries), dtype=np.int64)
    for count, index in pal_img.getcolors(maxcolors=MAX_PALETTE_SIZE):
        counts[index] = count
    return _rank(entries, counts)

def _kmeans(pixels: np.ndarray, max_colors: int) -> np.ndarray:
    distinct, inverse = np.unique(pixels, axis=0, return_inverse=True)
    k = min(max_colors, len(distinct))
    if k == len(distinct):
        # nothing to cluster; every colour is its own centre
        return _rank(distinct, np.bincount(inverse.reshape(-1), minlength=k))
    Z = pixels.astype(np.float32)
    criteria = (cv2.TERM_CRITERIA_EPS + cv2.TERM_CRITERIA_MAX_ITER, KMEANS_MAX_ITER, 1.0)
    cv2.setRNGSeed(0)
    _, labels, centers = cv2.kmeans(Z, k, None, criteria, KMEANS_ATTEMPTS, cv2.KMEANS_PP_CENTERS)
    centers = np.clip(np.rint(centers), 0, 255).astype(np.uint8)
    counts = np.bincount(labels.reshape(-1), minlength=k)
    return _rank(centers, counts)

def extract_palette(
    img: np.ndarray,
    max_colors: int,
    method: PaletteMethod = "median_cut",
) -> np.ndarray:
    """
    Return up to max_colors representative colours of img as a (N, 3) uint8
    array, most frequent first.
    - "median_cut": Pillow median cut
    - "kmeans": OpenCV k-means in RGB
    N may be smaller than max_colors when the image has fewer colours.
    """
    if not 1 <= max_colors <= MAX_PALETTE_SIZE:
        raise ValueError(f"max_colors must be between 1 and {MAX_PALETTE_SIZE}, got {max_colors}")
    pixels = _rgb_pixels(img)
    if pixels.size == 0:
        raise ValueError("Cannot extract a palette from an empty image")

    if method == "median_cut":
        palette = _median_cut(pixels, max_colors)
    elif method == "kmeans":
        palette = _kmeans(pixels, max_colors)
    else:
        raise ValueError(f"Unknown palette method: {method}")

    logger.debug("extracted %d colours with %s (asked for %d)", len(palette), method, max_colors)
    return palette
