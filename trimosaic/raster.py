"""
In-memory rasters and the image file collaborators around them
"""
import logging
import os

import numpy as np
import matplotlib.pyplot as plt

from .errors import InvalidRasterError

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.2125, 0.7154, 0.0721])


def as_raster(img):
    """
    Validate a raster before it enters the pipeline

    Parameters
    ----------
    img: ndarray(M, N, 3) or ndarray(M, N, 4)
        An 8-bit RGB or RGBA image

    Returns
    -------
    ndarray(M, N, C)
        The same pixels as a uint8 array
    """
    img = np.asarray(img)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise InvalidRasterError(
            "expected an (height, width, 3|4) raster, got shape {}".format(img.shape))
    if img.shape[0] == 0 or img.shape[1] == 0:
        raise InvalidRasterError("raster has a zero dimension: {}".format(img.shape))
    if img.dtype != np.uint8:
        if not np.issubdtype(img.dtype, np.number):
            raise InvalidRasterError("unsupported raster dtype {}".format(img.dtype))
        if img.size and (np.min(img) < 0 or np.max(img) > 255):
            raise InvalidRasterError("raster values fall outside [0, 255]")
        img = np.array(np.round(img), dtype=np.uint8)
    return img


def luminance(img):
    """
    Luminance of an RGB(A) raster, in the range [0, 255]
    """
    rgb = np.asarray(img[:, :, 0:3], dtype=float)
    return rgb @ LUMA_WEIGHTS


def read_image(path):
    """
    A wrapper around matplotlib's image loader that deals with
    images that are grayscale or which have an alpha channel

    Parameters
    ----------
    path: string
        Path to file

    Returns
    -------
    ndarray(M, N, 3)
        An 8-bit RGB image
    """
    img = plt.imread(path)
    if not np.issubdtype(img.dtype, np.integer):
        # PNGs come back as floats in [0, 1]
        img = np.round(np.clip(img, 0, 1)*255)
    img = np.array(img, dtype=np.uint8)
    if img.ndim == 2:
        # Grayscale, convert to rgb
        img = np.concatenate((img[:, :, None], img[:, :, None], img[:, :, None]), axis=2)
    elif img.shape[2] == 2:
        # Grayscale with alpha
        img = np.repeat(img[:, :, 0:1], 3, axis=2)
    elif img.shape[2] > 3:
        # Cut off alpha channel
        img = img[:, :, 0:3]
    logger.debug("Read %s (%d x %d)", path, img.shape[1], img.shape[0])
    return as_raster(img)


def save_image(path, img):
    """
    Write a raster to disk, the format is implied by the file extension

    Parameters
    ----------
    path: string
        Destination file
    img: ndarray(M, N, 3|4)
        The raster to encode
    """
    img = as_raster(img)
    ext = os.path.splitext(str(path))[1].lower()
    if ext in (".jpg", ".jpeg") and img.shape[2] == 4:
        # No alpha in JPEG
        img = img[:, :, 0:3]
    plt.imsave(path, img)
    logger.debug("Wrote %s (%d x %d)", path, img.shape[1], img.shape[0])
