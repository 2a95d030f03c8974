from pathlib import Path

# Default storage root for projects. The CLI passes it explicitly; library
# code only falls back to it when no projects_dir is given.
DEFAULT_PROJECTS_DIR = Path.home() / ".intarsia"

# Resampling defaults
# Gaussian sigma (px) applied before the nearest-neighbour downsample.
BLUR_SIGMA = 3.0

# Palette defaults
# Options: "median_cut", "kmeans"
PALETTE_METHOD = "median_cut"
PALETTE_MAX_COLORS = 10  # extractor asks for at least this many colours
MAX_PALETTE_SIZE = 256
KMEANS_MAX_ITER = 20
KMEANS_ATTEMPTS = 3

# Quantizer budget: pixels per chunk are chosen so that pixels * K stays
# under this many pixel-palette pairs (about 20 bytes each in temporaries)
QUANTIZE_CHUNK_BUDGET = 4_000_000

# Grid overlay
GRID_COLOR = (0, 0, 0)
GRID_THICKNESS = 1

# Axis annotation
AXES_DPI = 100
AXES_FONT_SIZE = 6

# File names inside a project directory
ORIGINAL_FILE = "original.png"
RESIZED_DOWN_FILE = "resized_down.png"
RESIZED_UP_FILE = "resized_up.png"
QUANTIZED_FILE = "quantized.png"
PROCESSED_FILE = "processed.png"
