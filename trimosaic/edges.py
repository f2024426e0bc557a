"""
Edge-strength field of an image: a Gaussian blur followed by the
Sobel gradient magnitude
"""
import logging
import math

import numpy as np
from scipy.signal import convolve2d

from .raster import as_raster, luminance

logger = logging.getLogger(__name__)

SOBEL_X = np.array([[-1, 0, 1],
                    [-2, 0, 2],
                    [-1, 0, 1]], dtype=float)
SOBEL_Y = SOBEL_X.T


def convolve_replicate(I, kernel):
    """
    2D convolution that replicates the border pixels instead of padding
    with zeros, so the output has the shape of the input whatever its size

    Parameters
    ----------
    I: ndarray(M, N)
        A scalar image
    kernel: ndarray(K, L)
        A kernel with odd dimensions

    Returns
    -------
    ndarray(M, N)
    """
    ry, rx = kernel.shape[0]//2, kernel.shape[1]//2
    padded = np.pad(I, ((ry, ry), (rx, rx)), mode='edge')
    return convolve2d(padded, kernel, mode='valid')


def gaussian_kernel(sigma):
    """
    Normalized 1D Gaussian sampled at integer offsets out to 3 sigma
    """
    radius = max(1, int(math.ceil(3*sigma)))
    t = np.arange(-radius, radius+1, dtype=float)
    g = np.exp(-t**2/(2*sigma**2))
    return g/np.sum(g)


def blur(I, sigma):
    """
    Separable Gaussian blur. A non-positive or non-finite sigma
    leaves the image untouched.
    """
    if not (sigma > 0 and math.isfinite(sigma)):
        return np.array(I, dtype=float)
    g = gaussian_kernel(sigma)
    I = convolve_replicate(I, g[None, :])
    return convolve_replicate(I, g[:, None])


def extract(source, blur_factor=1):
    """
    Compute the edge strength of every pixel of an image

    Parameters
    ----------
    source: ndarray(M, N, 3|4)
        An 8-bit RGB(A) image
    blur_factor: float
        Standard deviation, in pixels, of the Gaussian applied before
        differentiating. 0 disables smoothing.

    Returns
    -------
    ndarray(M, N)
        Non-negative gradient magnitude, in luminance units
    """
    I = luminance(as_raster(source))
    I = blur(I, blur_factor)
    IDx = convolve_replicate(I, SOBEL_X)
    IDy = convolve_replicate(I, SOBEL_Y)
    GradMag = np.hypot(IDx, IDy)
    logger.debug("Edge field %s, max strength %.2f", GradMag.shape, np.max(GradMag))
    return GradMag


def neighbourhood_mean(field):
    """
    Mean of the 3x3 neighbourhood of every value of a scalar field, with
    replicated borders
    """
    return convolve_replicate(np.asarray(field, dtype=float), np.ones((3, 3))/9)
