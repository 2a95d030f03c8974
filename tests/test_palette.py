import numpy as np
import pytest

from intarsia.preprocessing.palette import extract_palette

RED, GREEN, BLUE, YELLOW = (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)

def _four_colour_image():
    # 50% red, 25% green, 15% blue, 10% yellow
    img = np.zeros((20, 100, 3), dtype=np.uint8)
    img[:, :50] = RED
    img[:, 50:75] = GREEN
    img[:, 75:90] = BLUE
    img[:, 90:] = YELLOW
    return img

@pytest.mark.parametrize("method", ["median_cut", "kmeans"])
def test_ranked_by_frequency(method):
    palette = extract_palette(_four_colour_image(), max_colors=10, method=method)
    assert palette.dtype == np.uint8
    assert [tuple(c) for c in palette.tolist()] == [RED, GREEN, BLUE, YELLOW]

@pytest.mark.parametrize("method", ["median_cut", "kmeans"])
def test_at_most_max_colors(method):
    img = (np.random.rand(64, 64, 3) * 255).astype("uint8")
    palette = extract_palette(img, max_colors=8, method=method)
    assert 1 <= len(palette) <= 8
    assert len({tuple(c) for c in palette.tolist()}) == len(palette)

def test_solid_image_has_one_colour():
    img = np.full((10, 10, 3), (10, 200, 30), dtype=np.uint8)
    assert extract_palette(img, max_colors=10).tolist() == [[10, 200, 30]]

def test_alpha_is_ignored():
    img = np.zeros((10, 10, 4), dtype=np.uint8)
    img[..., :3] = (1, 2, 3)
    img[:5, :, 3] = 255
    assert extract_palette(img, max_colors=4, method="kmeans").tolist() == [[1, 2, 3]]

def test_bad_arguments():
    img = _four_colour_image()
    with pytest.raises(ValueError):
        extract_palette(img, max_colors=0)
    with pytest.raises(ValueError):
        extract_palette(img, max_colors=257)
    with pytest.raises(ValueError):
        extract_palette(img, max_colors=4, method="octree")
    with pytest.raises(ValueError):
        extract_palette(np.zeros((4, 4), dtype=np.uint8), max_colors=4)
