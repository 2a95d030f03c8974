import numpy as np
import pytest

RED = (255, 0, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)

@pytest.fixture
def red_image():
    img = np.zeros((100, 100, 3), dtype=np.uint8)
    img[:] = RED
    return img

@pytest.fixture
def red_blue_image():
    # left half red, right half blue; the edge sits midway between samples
    img = np.zeros((100, 100, 3), dtype=np.uint8)
    img[:, :50] = RED
    img[:, 50:] = BLUE
    return img
