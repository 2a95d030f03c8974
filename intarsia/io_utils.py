from pathlib import Path
from typing import Union
import cv2
import numpy as np

from intarsia.errors import CodecFailure

# cv2 loads BGR; convert to RGB to keep consistency across the codebase.
def load_image(path: Union[str, Path]) -> np.ndarray:
    path = Path(path)
    if not path.is_file():
        raise CodecFailure(f"No such image file: {path}")
    img_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img_bgr is None:
        raise CodecFailure(f"Could not decode image: {path}")
    return cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)

def save_image_rgb(path: Union[str, Path], img_rgb: np.ndarray) -> Path:
    """
    Encode an RGB or RGBA buffer to disk. The format follows the suffix;
    anything cv2 cannot write is stored as PNG. Returns the written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() not in (".png", ".jpg", ".jpeg", ".bmp"):
        path = path.with_suffix(".png")
    if img_rgb.ndim == 3 and img_rgb.shape[2] == 4:
        img_bgr = cv2.cvtColor(img_rgb, cv2.COLOR_RGBA2BGRA)
    else:
        img_bgr = cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR)
    try:
        ok = cv2.imwrite(str(path), img_bgr)
    except cv2.error as e:
        raise CodecFailure(f"Could not encode image {path}: {e}") from e
    if not ok:
        raise CodecFailure(f"Could not encode image: {path}")
    return path
