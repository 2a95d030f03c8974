import logging
import numpy as np
import cv2

from intarsia.config import BLUR_SIGMA
from intarsia.tiling.grid import GridSpec

logger = logging.getLogger(__name__)

def blur(img: np.ndarray, sigma: float = BLUR_SIGMA) -> np.ndarray:
    """Gaussian blur; the kernel size is derived from sigma."""
    if sigma <= 0:
        return img.copy()
    return cv2.GaussianBlur(img, (0, 0), sigmaX=float(sigma), sigmaY=float(sigma))

def resample_down(
    img: np.ndarray,
    grid_width: int,
    grid_height: int,
    blur_sigma: float = BLUR_SIGMA,
) -> np.ndarray:
    """
    Blur, then shrink to exactly grid_width x grid_height with nearest-neighbour,
    so each output pixel is one (blurred) source pixel: one stitch, one colour.
    """
    h, w = img.shape[:2]
    GridSpec(grid_width, grid_height).check_fits(w, h)
    blurred = blur(img, blur_sigma)
    small = cv2.resize(blurred, (grid_width, grid_height), interpolation=cv2.INTER_NEAREST)
    logger.debug("resampled %dx%d down to %dx%d (sigma=%.1f)", w, h, grid_width, grid_height, blur_sigma)
    return small

def resample_up(small: np.ndarray, width: int, height: int) -> np.ndarray:
    """Nearest-neighbour enlarge: every small pixel becomes a solid block."""
    return cv2.resize(small, (width, height), interpolation=cv2.INTER_NEAREST)

def resample_down_up(
    img: np.ndarray,
    grid_width: int,
    grid_height: int,
    blur_sigma: float = BLUR_SIGMA,
) -> np.ndarray:
    h, w = img.shape[:2]
    small = resample_down(img, grid_width, grid_height, blur_sigma=blur_sigma)
    return resample_up(small, w, h)
