import logging

import numpy as np
import pytest


@pytest.fixture
def step_image():
    """10x10 RGB image, black on the left half and white on the right"""
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    img[:, 5:, :] = 255
    return img


@pytest.fixture
def disk_image():
    """A colored disk on a gradient background, 40 rows by 50 columns"""
    rows, cols = np.mgrid[0:40, 0:50]
    img = np.zeros((40, 50, 3), dtype=np.uint8)
    img[:, :, 0] = np.array(cols*5, dtype=np.uint8)
    img[:, :, 2] = np.array(rows*6, dtype=np.uint8)
    inside = (rows - 20)**2 + (cols - 25)**2 < 12**2
    img[inside] = [250, 200, 20]
    return img


@pytest.fixture
def reset_logging():
    yield
    logger = logging.getLogger("trimosaic")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
