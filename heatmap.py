'''
Heat maps of ore density. Counts are 2d numpy arrays in (row, column) = (z, x) order,
pixel (0, 0) is the north west corner of the area.
'''
import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

WHITE = 255
#brightness lost per ore in a chunk
SEED_STEP = 16


def render_seed_map(counts: np.ndarray) -> Image.Image:
    '''
    counts: ores per chunk, -1 for chunks that weren't analyzed
    analyzed chunks are blue, darker with more ores, the rest stays white
    '''
    pixels = np.full(counts.shape + (3,), WHITE, dtype=np.uint8)
    visited = counts >= 0
    blue = np.clip(WHITE - counts.astype(np.int64) * SEED_STEP, 0, WHITE)
    pixels[visited, 0] = 0
    pixels[visited, 1] = 0
    pixels[visited, 2] = blue[visited]
    return Image.fromarray(pixels)


def render_density_map(counts: np.ndarray) -> Image.Image:
    '''
    counts: veins per block column
    grayscale scaled to the busiest column, which comes out black
    '''
    peak = int(counts.max()) if counts.size else 0
    gray = np.full(counts.shape, WHITE, dtype=np.int64)
    if peak > 0:
        gray -= counts.astype(np.int64) * WHITE // peak
    pixels = np.repeat(gray.astype(np.uint8)[:, :, None], 3, axis=2)
    return Image.fromarray(pixels)


def save(image: Image.Image, path: str):
    logger.info("Saving image to %s", path)
    image.save(path)
